from rest_framework.decorators import api_view
from rest_framework.response import Response

from clinic.serializers.pet import PageQuerySerializer
from clinic.serializers.vet import VetSerializer
from clinic.services.queries import find_vets
from clinic.services.store import get_record_store


@api_view(['GET'])
def list_vets(request):
    q = PageQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    return Response(find_vets(get_record_store(), q.validated_data['page']).as_dict(VetSerializer))
