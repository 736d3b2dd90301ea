from rest_framework import serializers

from .models import Courier


class CourierSerializer(serializers.ModelSerializer):
    """Base for driver and rider profiles; subclasses set ``Meta.model``"""

    class Meta:
        fields = [
            "id",
            "user",
            "name",
            "phone",
            "email",
            "vehicle_type",
            "number_plate",
            "status",
            "is_active",
            "created_at",
        ]
        read_only_fields = ["id", "user", "status", "is_active", "created_at"]


class CourierLoginSerializer(serializers.Serializer):
    username = serializers.CharField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)


class CourierStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=[Courier.STATUS_ONLINE, Courier.STATUS_OFFLINE]
    )


class LocationUpdateSerializer(serializers.Serializer):
    latitude = serializers.FloatField(min_value=-90, max_value=90)
    longitude = serializers.FloatField(min_value=-180, max_value=180)
    accuracy = serializers.FloatField(required=False, allow_null=True, min_value=0)
    speed = serializers.FloatField(required=False, allow_null=True, min_value=0)
    heading = serializers.FloatField(
        required=False, allow_null=True, min_value=0, max_value=360
    )

