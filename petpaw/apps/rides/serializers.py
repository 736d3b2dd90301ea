from rest_framework import serializers

from apps.drivers.serializers import DriverSerializer

from .models import Ride


class RideSerializer(serializers.ModelSerializer):
    driver = DriverSerializer(read_only=True)

    class Meta:
        model = Ride
        fields = [
            "id",
            "user",
            "driver",
            "pickup_location",
            "pickup_latitude",
            "pickup_longitude",
            "dropoff_location",
            "dropoff_latitude",
            "dropoff_longitude",
            "pet_type",
            "pet_name",
            "special_instructions",
            "fare",
            "distance_km",
            "route_polyline",
            "status",
            "accepted_at",
            "started_at",
            "completed_at",
            "cancelled_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class RideCreateSerializer(serializers.ModelSerializer):
    pickup_latitude = serializers.DecimalField(
        max_digits=10, decimal_places=7, min_value=-90, max_value=90, coerce_to_string=False
    )
    pickup_longitude = serializers.DecimalField(
        max_digits=10, decimal_places=7, min_value=-180, max_value=180, coerce_to_string=False
    )
    dropoff_latitude = serializers.DecimalField(
        max_digits=10, decimal_places=7, min_value=-90, max_value=90, coerce_to_string=False
    )
    dropoff_longitude = serializers.DecimalField(
        max_digits=10, decimal_places=7, min_value=-180, max_value=180, coerce_to_string=False
    )
    fare = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=0, required=False, allow_null=True
    )

    class Meta:
        model = Ride
        fields = [
            "pickup_location",
            "pickup_latitude",
            "pickup_longitude",
            "dropoff_location",
            "dropoff_latitude",
            "dropoff_longitude",
            "pet_type",
            "pet_name",
            "special_instructions",
            "fare",
        ]

    def to_internal_value(self, data):
        # client coordinates carry more precision than we store
        data = data.copy()
        for field in ("pickup_latitude", "pickup_longitude", "dropoff_latitude", "dropoff_longitude"):
            if data.get(field) not in (None, ""):
                try:
                    data[field] = round(float(data[field]), 7)
                except (TypeError, ValueError):
                    pass
        return super().to_internal_value(data)


class RideStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[choice[0] for choice in Ride.STATUS_CHOICES])
    driver_id = serializers.UUIDField(required=False, allow_null=True)
