from apps.tracking.views import (
    CourierDetailView,
    CourierLocationView,
    CourierLoginView,
    CourierStatusView,
)

from .models import Driver
from .serializers import DriverSerializer
from .services import driver_locations


class DriverViewMixin:
    kind = "driver"
    courier_model = Driver
    courier_serializer_class = DriverSerializer
    location_service = driver_locations


class DriverLoginView(DriverViewMixin, CourierLoginView):
    pass


class DriverDetailView(DriverViewMixin, CourierDetailView):
    pass


class DriverStatusView(DriverViewMixin, CourierStatusView):
    pass


class DriverLocationView(DriverViewMixin, CourierLocationView):
    pass
