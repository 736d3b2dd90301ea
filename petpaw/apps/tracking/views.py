from django.http import Http404
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.accounts.services import token_response
from apps.core.exceptions import NotCourier

from . import services
from .serializers import (
    CourierLoginSerializer,
    CourierStatusSerializer,
    LocationUpdateSerializer,
)


class CourierViewMixin:
    """Shared lookups for driver and rider endpoints"""

    kind = None
    courier_model = None
    courier_serializer_class = None
    location_service = None

    def get_courier(self, courier_id):
        return get_object_or_404(self.courier_model, pk=courier_id)

    def ensure_own_profile(self, request, courier):
        if request.user.is_staff or courier.user_id == request.user.pk:
            return
        raise NotCourier(f"You can only act as your own {self.kind} profile.")


class CourierLoginView(CourierViewMixin, APIView):
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = CourierLoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        courier, token = services.login_courier(
            self.courier_model,
            serializer.validated_data["username"],
            serializer.validated_data["password"],
            request=request,
        )
        identity = {f"{self.kind}_id": str(courier.id), "user_id": courier.user_id}
        return Response(token_response(token, **identity))


class CourierDetailView(CourierViewMixin, APIView):
    def get(self, request, courier_id):
        courier = self.get_courier(courier_id)
        return Response(self.courier_serializer_class(courier).data)


class CourierStatusView(CourierViewMixin, APIView):
    def put(self, request, courier_id):
        courier = self.get_courier(courier_id)
        self.ensure_own_profile(request, courier)
        serializer = CourierStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        services.set_courier_status(courier, serializer.validated_data["status"])
        return Response(self.courier_serializer_class(courier).data)


class CourierLocationView(CourierViewMixin, APIView):
    def get(self, request, courier_id):
        courier = self.get_courier(courier_id)
        location = self.location_service.get_location(courier.id)
        if location is None:
            raise Http404(f"No recent location for {self.kind} {courier_id}.")
        return Response({f"{self.kind}_id": str(courier.id), **location})

    def put(self, request, courier_id):
        return self.update_location(request, self.get_courier(courier_id))

    def update_location(self, request, courier):
        self.ensure_own_profile(request, courier)
        serializer = LocationUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        updated, location = self.location_service.update_location(
            courier, **serializer.validated_data
        )
        return Response(
            {"updated": updated, "location": location},
            status=status.HTTP_200_OK,
        )


class TrackingSnapshotView(APIView):
    def get(self, request, kind, subject_id):
        snapshot = services.get_snapshot(kind, subject_id)
        if snapshot is None:
            raise Http404(f"Unknown {kind} {subject_id}.")
        return Response(snapshot)
