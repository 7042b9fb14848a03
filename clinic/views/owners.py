"""
Owner endpoints.

Listing is paginated with a fixed page size and filtered by last-name
prefix.  Updates always target the owner named in the URL.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from clinic.serializers.owner import OwnerListQuerySerializer, OwnerSerializer
from clinic.services.owners import create_owner, new_owner, update_owner
from clinic.services.queries import find_owners
from clinic.services.store import get_record_store


@api_view(['GET'])
def list_owners(request):
    q = OwnerListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    page = find_owners(get_record_store(), q.validated_data['page'], q.validated_data.get('lastName'))
    return Response(page.as_dict(OwnerSerializer))


@api_view(['GET', 'POST'])
def owner_new(request):
    """``GET`` returns an empty owner form; ``POST`` creates the owner."""
    if request.method == 'GET':
        return Response(OwnerSerializer(new_owner()).data)
    s = OwnerSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    owner = create_owner(get_record_store(), **s.validated_data)
    return Response(OwnerSerializer(owner).data, status=status.HTTP_201_CREATED)


@api_view(['GET'])
def owner_detail(request, owner_id: int):
    return Response(OwnerSerializer(get_record_store().find_owner(owner_id)).data)


@api_view(['POST'])
def owner_edit(request, owner_id: int):
    store = get_record_store()
    owner = store.find_owner(owner_id)
    s = OwnerSerializer(owner, data=request.data)
    s.is_valid(raise_exception=True)
    owner = update_owner(store, owner, **s.validated_data)
    return Response(OwnerSerializer(owner).data)
