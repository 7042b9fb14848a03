"""
Visit endpoints.

``GET visits`` lists the visits scheduled for one day (``date``, default
today).  With ``showAll=true`` it pages through every visit instead.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from clinic.serializers.visit import VisitListQuerySerializer, VisitSerializer
from clinic.services.queries import find_all_visits, find_visits_on
from clinic.services.store import get_record_store
from clinic.services.visits import create_visit, resolve_visit, update_visit


@api_view(['GET'])
def list_visits(request):
    q = VisitListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    store = get_record_store()
    if q.validated_data['showAll']:
        return Response(find_all_visits(store, q.validated_data['page']).as_dict(VisitSerializer))
    visits = find_visits_on(store, q.validated_data.get('date'))
    return Response(VisitSerializer(visits, many=True).data)


@api_view(['GET', 'POST'])
def pet_visit(request, owner_id: int, pet_id: int):
    """``GET`` resolves the pet's first visit (or a blank one); ``POST`` books a new visit."""
    store = get_record_store()
    if request.method == 'GET':
        return Response(VisitSerializer(resolve_visit(store, owner_id=owner_id, pet_id=pet_id)).data)
    s = VisitSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    visit = create_visit(store, owner_id, pet_id, **s.validated_data)
    return Response(VisitSerializer(visit).data, status=status.HTTP_201_CREATED)


@api_view(['GET'])
def visit_detail(request, visit_id: int):
    return Response(VisitSerializer(resolve_visit(get_record_store(), visit_id=visit_id)).data)


@api_view(['POST'])
def visit_edit(request, visit_id: int):
    store = get_record_store()
    s = VisitSerializer(resolve_visit(store, visit_id=visit_id), data=request.data)
    s.is_valid(raise_exception=True)
    visit = update_visit(store, visit_id, **s.validated_data)
    return Response(VisitSerializer(visit).data)
