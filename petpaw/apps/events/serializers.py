from rest_framework import serializers

from .models import TrackingEvent


class TrackingEventSerializer(serializers.ModelSerializer):
    class Meta:
        model = TrackingEvent
        fields = [
            "id",
            "subject_type",
            "subject_id",
            "event_type",
            "actor_id",
            "event_data",
            "location_lat",
            "location_lng",
            "timestamp",
        ]
