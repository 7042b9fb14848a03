from rest_framework import serializers

from clinic.models import Owner
from clinic.serializers.pet import PageQuerySerializer, PetSerializer
from clinic.serializers.text import clean_text
from clinic.services.state import Unsaved


class OwnerSerializer(serializers.ModelSerializer):
    firstName = serializers.CharField(source='first_name', required=False, allow_blank=True, max_length=30)
    lastName = serializers.CharField(source='last_name', max_length=30)
    address = serializers.CharField(required=False, allow_blank=True, max_length=255)
    city = serializers.CharField(required=False, allow_blank=True, max_length=80)
    telephone = serializers.CharField(required=False, allow_blank=True, max_length=10)
    pets = serializers.SerializerMethodField()

    class Meta:
        model = Owner
        fields = ['id', 'firstName', 'lastName', 'address', 'city', 'telephone', 'pets']
        read_only_fields = ['id']

    def get_pets(self, owner):
        if isinstance(owner.state, Unsaved):
            return []
        return PetSerializer(owner.pets.all(), many=True, context=self.context).data

    def validate_firstName(self, v):
        return clean_text(v)

    def validate_lastName(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('last name must not be empty')
        return v

    def validate_address(self, v):
        return clean_text(v)

    def validate_city(self, v):
        return clean_text(v)

    def validate_telephone(self, v):
        v = (v or '').strip()
        if v and not v.isdigit():
            raise serializers.ValidationError('telephone must contain digits only')
        return v


class OwnerListQuerySerializer(PageQuerySerializer):
    lastName = serializers.CharField(required=False, allow_blank=True, max_length=30, trim_whitespace=False)
