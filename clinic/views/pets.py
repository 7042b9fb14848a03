"""
Pet and pet type endpoints.

Pets are created and edited through their owner.  Pet types are
reference data and are served from the cache.
"""
from __future__ import annotations

from django.conf import settings
from django.core.cache import cache
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from clinic.serializers.pet import PageQuerySerializer, PetSerializer, PetTypeSerializer
from clinic.services.pets import add_pet, new_pet, update_pet
from clinic.services.queries import find_pets
from clinic.services.store import get_record_store

PET_TYPES_CACHE_KEY = 'clinic:pettypes'


@api_view(['GET'])
def list_pet_types(request):
    cached = cache.get(PET_TYPES_CACHE_KEY)
    if cached is not None:
        return Response(cached)
    data = list(PetTypeSerializer(get_record_store().find_pet_types(), many=True).data)
    cache.set(PET_TYPES_CACHE_KEY, data, settings.PET_TYPES_CACHE_SECONDS)
    return Response(data)


@api_view(['GET'])
def list_pets(request):
    q = PageQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    page = find_pets(get_record_store(), q.validated_data['page'])
    return Response(page.as_dict(PetSerializer))


@api_view(['GET', 'POST'])
def pet_new(request, owner_id: int):
    store = get_record_store()
    owner = store.find_owner(owner_id)
    if request.method == 'GET':
        return Response(PetSerializer(new_pet(owner)).data)
    s = PetSerializer(data=request.data, context={'store': store})
    s.is_valid()
    pet = add_pet(store, owner, s)
    return Response(PetSerializer(pet).data, status=status.HTTP_201_CREATED)


@api_view(['GET'])
def pet_detail(request, owner_id: int, pet_id: int):
    store = get_record_store()
    return Response(PetSerializer(store.find_pet(store.find_owner(owner_id), pet_id)).data)


@api_view(['POST'])
def pet_edit(request, owner_id: int, pet_id: int):
    store = get_record_store()
    owner = store.find_owner(owner_id)
    pet = store.find_pet(owner, pet_id)
    s = PetSerializer(pet, data=request.data, context={'store': store})
    s.is_valid()
    pet = update_pet(store, owner, pet, s)
    return Response(PetSerializer(pet).data)
