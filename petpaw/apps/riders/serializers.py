from apps.tracking.serializers import CourierSerializer

from .models import Rider


class RiderSerializer(CourierSerializer):
    class Meta(CourierSerializer.Meta):
        model = Rider
