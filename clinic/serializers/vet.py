from rest_framework import serializers

from clinic.models import Specialty, Vet


class SpecialtySerializer(serializers.ModelSerializer):
    class Meta:
        model = Specialty
        fields = ['id', 'name']


class VetSerializer(serializers.ModelSerializer):
    firstName = serializers.CharField(source='first_name', read_only=True)
    lastName = serializers.CharField(source='last_name', read_only=True)
    specialties = SpecialtySerializer(many=True, read_only=True)

    class Meta:
        model = Vet
        fields = ['id', 'firstName', 'lastName', 'specialties']
