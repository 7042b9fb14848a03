from rest_framework import serializers

from clinic.exceptions import NotFound
from clinic.models import Pet, PetType
from clinic.serializers.text import clean_text
from clinic.serializers.visit import VisitSerializer
from clinic.services.state import Unsaved
from clinic.services.store import get_record_store


class PetTypeSerializer(serializers.ModelSerializer):
    class Meta:
        model = PetType
        fields = ['id', 'name']


class PetSerializer(serializers.ModelSerializer):
    """Pet body and representation.

    ``typeId`` is written, the full ``type`` is read back.  The type is
    looked up through the record store passed as ``context['store']``.
    The owner comes from the URL, so ``ownerId`` is read-only.
    """
    birthDate = serializers.DateField(source='birth_date', required=False, allow_null=True)
    type = PetTypeSerializer(read_only=True, allow_null=True)
    typeId = serializers.IntegerField(source='type', write_only=True)
    ownerId = serializers.IntegerField(source='owner_id', read_only=True, allow_null=True)
    visits = serializers.SerializerMethodField()

    class Meta:
        model = Pet
        fields = ['id', 'name', 'birthDate', 'type', 'typeId', 'ownerId', 'visits']
        read_only_fields = ['id']

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # An existing pet keeps its type unless a new one is sent.
        if self.instance is not None and 'typeId' in self.fields:
            self.fields['typeId'].required = False

    def get_visits(self, pet):
        if isinstance(pet.state, Unsaved):
            return []
        return VisitSerializer(pet.visits.all(), many=True, context=self.context).data

    def validate_name(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('name must not be empty')
        return v

    def validate_typeId(self, v):
        store = self.context.get('store') or get_record_store()
        try:
            return store.find_pet_type(v)
        except NotFound:
            raise serializers.ValidationError(f'pet type {v} does not exist', code='does_not_exist')


class PageQuerySerializer(serializers.Serializer):
    page = serializers.IntegerField(required=False, min_value=1, default=1)
