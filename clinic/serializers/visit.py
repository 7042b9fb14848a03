from rest_framework import serializers

from clinic.models import Visit
from clinic.serializers.text import clean_text


class VisitSerializer(serializers.ModelSerializer):
    date = serializers.DateField(required=False)
    visitedTimestamp = serializers.DateTimeField(source='visited_at', read_only=True)
    petId = serializers.IntegerField(source='pet_id', read_only=True)

    class Meta:
        model = Visit
        fields = ['id', 'date', 'description', 'visitedTimestamp', 'petId']
        read_only_fields = ['id']

    def validate_description(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('description must not be empty')
        return v


class VisitListQuerySerializer(serializers.Serializer):
    page = serializers.IntegerField(required=False, min_value=1, default=1)
    showAll = serializers.BooleanField(required=False, default=False)
    date = serializers.DateField(required=False)
