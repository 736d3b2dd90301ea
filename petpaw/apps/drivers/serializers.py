from apps.tracking.serializers import CourierSerializer

from .models import Driver


class DriverSerializer(CourierSerializer):
    class Meta(CourierSerializer.Meta):
        model = Driver
