from django.shortcuts import get_object_or_404
from rest_framework import mixins, serializers, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.accounts.views import ensure_self_or_staff
from apps.core.exceptions import NotCourier
from apps.drivers.models import Driver
from apps.drivers.services import driver_transactions

from . import services
from .models import Ride
from .serializers import RideCreateSerializer, RideSerializer, RideStatusSerializer


class RideViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = RideSerializer

    def get_queryset(self):
        user = self.request.user
        queryset = Ride.objects.select_related("driver")
        # drivers browse open rides; customers only see their own
        if not (user.is_staff or hasattr(user, "driver_profile")):
            queryset = queryset.filter(user=user)
        return services.rides_with_status(queryset, self.request.query_params.get("status"))

    def create(self, request, *args, **kwargs):
        serializer = RideCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        ride = services.create_ride(request.user, dict(serializer.validated_data))
        return Response(RideSerializer(ride).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["post"])
    def accept(self, request, pk=None):
        ride = self.get_object()
        driver_id = serializers.UUIDField().run_validation(request.query_params.get("driver_id"))
        driver = get_object_or_404(Driver, pk=driver_id)
        if not request.user.is_staff and driver.user_id != request.user.pk:
            raise NotCourier("You can only accept rides as your own driver profile.")
        ride = services.accept_ride(ride.pk, driver.pk)
        return Response(RideSerializer(ride).data)

    @action(detail=True, methods=["put"], url_path="update_status")
    def update_status(self, request, pk=None):
        ride = self.get_object()
        serializer = RideStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        ride = services.update_ride_status(
            ride.pk,
            serializer.validated_data["status"],
            request.user,
            driver_id=serializer.validated_data.get("driver_id"),
        )
        return Response(RideSerializer(ride).data)


class UserRidesView(APIView):
    def get(self, request, user_id):
        ensure_self_or_staff(request, user_id)
        rides = Ride.objects.select_related("driver").filter(user_id=user_id)
        rides = services.rides_with_status(rides, request.query_params.get("status"))
        return Response(RideSerializer(rides, many=True).data)


class DriverRidesView(APIView):
    """Rides handled by a driver, COMPLETED unless ``status`` says otherwise"""

    def get(self, request, driver_id):
        driver = get_object_or_404(Driver, pk=driver_id)
        if not request.user.is_staff and driver.user_id != request.user.pk:
            raise NotCourier("You can only view your own rides.")
        status_param = request.query_params.get("status")
        if status_param:
            rides = services.rides_with_status(Ride.objects.filter(driver=driver), status_param)
        else:
            rides = driver_transactions(driver)
        return Response(RideSerializer(rides.select_related("driver"), many=True).data)
