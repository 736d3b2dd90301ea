from rest_framework import serializers
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.orders.serializers import OrderSerializer
from apps.tracking.views import (
    CourierDetailView,
    CourierLocationView,
    CourierLoginView,
    CourierStatusView,
    CourierViewMixin,
)

from . import services
from .models import Rider
from .serializers import RiderSerializer
from .services import rider_locations


class RiderViewMixin:
    kind = "rider"
    courier_model = Rider
    courier_serializer_class = RiderSerializer
    location_service = rider_locations


class RiderLoginView(RiderViewMixin, CourierLoginView):
    pass


class RiderDetailView(RiderViewMixin, CourierDetailView):
    pass


class RiderStatusView(RiderViewMixin, CourierStatusView):
    pass


class RiderLocationView(RiderViewMixin, CourierLocationView):
    http_method_names = ["get", "options"]


class RiderLocationUpdateView(RiderViewMixin, CourierLocationView):
    http_method_names = ["post", "options"]

    def post(self, request):
        """Location push with the rider id in the body"""
        rider_id = serializers.UUIDField().run_validation(request.data.get("rider_id"))
        return self.update_location(request, self.get_courier(rider_id))


class RiderOrderHistoryView(RiderViewMixin, CourierViewMixin, APIView):
    def get(self, request):
        rider_id = serializers.UUIDField().run_validation(
            request.query_params.get("rider_id")
        )
        rider = self.get_courier(rider_id)
        self.ensure_own_profile(request, rider)
        status_param = request.query_params.get("status")
        statuses = (
            [s.strip().upper() for s in status_param.split(",") if s.strip()]
            if status_param
            else services.HISTORY_STATUSES
        )
        orders = services.order_history(rider, statuses)
        return Response(OrderSerializer(orders, many=True).data)
