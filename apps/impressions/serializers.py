from rest_framework import serializers
from .models import Impression


class ImpressionSerializer(serializers.Serializer):
    impression_id = serializers.CharField()
    campaign_id = serializers.CharField()
    timestamp = serializers.DateTimeField()
    location = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def create(self, validated_data):
        return Impression(
            impression_id=validated_data['impression_id'],
            campaign_id=validated_data['campaign_id'],
            timestamp=validated_data['timestamp'],
            location=validated_data.get('location') or None,
        )
