from django.shortcuts import get_object_or_404
from django.utils.dateparse import parse_date
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import AllowAny, IsAdminUser
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.accounts.views import ensure_self_or_staff
from apps.pets.views import get_owned_pet

from . import services
from .models import (
    Appointment,
    GroomingBooking,
    GroomingService,
    HotelBooking,
    PetHotel,
    Veterinarian,
    VetService,
)
from .serializers import (
    AppointmentCreateSerializer,
    AppointmentSerializer,
    BookingStatusSerializer,
    GroomingBookingCreateSerializer,
    GroomingBookingSerializer,
    GroomingServiceSerializer,
    HotelBookingSerializer,
    PetHotelSerializer,
    VeterinarianSerializer,
    VetServiceSerializer,
)


def query_date(request):
    raw = request.query_params.get("date")
    day = parse_date(raw) if raw else None
    if day is None:
        raise ValidationError({"date": "Pass a date as YYYY-MM-DD."})
    return day


class BookingActionsMixin:
    """cancel for the owner, status changes for staff"""

    def get_queryset(self):
        queryset = self.model.objects.select_related("pet")
        if self.request.user.is_staff:
            return queryset
        return queryset.filter(user=self.request.user)

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):
        booking = services.cancel_booking(self.get_object())
        return Response(self.get_serializer(booking).data)

    @action(detail=True, methods=["put"], url_path="status", permission_classes=[IsAdminUser])
    def update_status(self, request, pk=None):
        serializer = BookingStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = services.change_booking_status(self.get_object(), serializer.validated_data["status"])
        return Response(self.get_serializer(booking).data)


# Vet appointments

class VeterinarianViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = Veterinarian.objects.filter(is_active=True)
    serializer_class = VeterinarianSerializer
    permission_classes = [AllowAny]


class VetServiceViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = VetService.objects.all()
    serializer_class = VetServiceSerializer
    permission_classes = [AllowAny]


class AppointmentViewSet(
    BookingActionsMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    model = Appointment
    serializer_class = AppointmentSerializer

    def get_queryset(self):
        return super().get_queryset().select_related("service", "veterinarian")

    def create(self, request, *args, **kwargs):
        serializer = AppointmentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        service = get_object_or_404(VetService, pk=data["service_id"])
        pet = get_owned_pet(request, data["pet_id"]) if data.get("pet_id") else None
        veterinarian = None
        if data.get("veterinarian_id"):
            veterinarian = get_object_or_404(Veterinarian, pk=data["veterinarian_id"], is_active=True)

        appointment = services.book_appointment(
            request.user,
            service,
            data["date_time"],
            pet=pet,
            veterinarian=veterinarian,
            notes=data["notes"],
        )
        return Response(AppointmentSerializer(appointment).data, status=status.HTTP_201_CREATED)


class AppointmentSlotsView(APIView):
    permission_classes = [AllowAny]

    def get(self, request):
        slots = services.appointment_slots(query_date(request))
        return Response([slot for slot in slots if slot["available"]])


class BookedAppointmentsView(APIView):
    """Taken slot times on ``?date=``, without who booked them"""

    permission_classes = [AllowAny]

    def get(self, request):
        appointments = services.booked_appointments(query_date(request))
        return Response([services.slot_summary(appointment) for appointment in appointments])


class UserAppointmentsView(APIView):
    def get(self, request, user_id):
        ensure_self_or_staff(request, user_id)
        appointments = Appointment.objects.select_related("service", "veterinarian", "pet").filter(
            user_id=user_id
        )
        return Response(AppointmentSerializer(appointments, many=True).data)


class PetAppointmentsView(APIView):
    def get(self, request, pet_id):
        pet = get_owned_pet(request, pet_id)
        appointments = pet.appointments.select_related("service", "veterinarian")
        return Response(AppointmentSerializer(appointments, many=True).data)


# Pet hotel

class PetHotelViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = PetHotel.objects.filter(is_active=True)
    serializer_class = PetHotelSerializer
    permission_classes = [AllowAny]
    lookup_value_regex = r"\d+"


class HotelBookingViewSet(BookingActionsMixin, viewsets.ModelViewSet):
    model = HotelBooking
    serializer_class = HotelBookingSerializer
    lookup_value_regex = r"\d+"

    def get_queryset(self):
        return super().get_queryset().select_related("hotel")

    def perform_create(self, serializer):
        data = dict(serializer.validated_data)
        pet = get_owned_pet(self.request, data.pop("pet_id"))
        serializer.instance = services.book_hotel(
            self.request.user, data.pop("hotel"), pet, data.pop("start_date"), data.pop("end_date"), **data
        )

    def perform_update(self, serializer):
        data = dict(serializer.validated_data)
        if "pet_id" in data:
            data["pet"] = get_owned_pet(self.request, data.pop("pet_id"))
        serializer.instance = services.update_hotel_booking(serializer.instance, **data)

    def perform_destroy(self, instance):
        services.cancel_booking(instance)


# Grooming

class GroomingServiceViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = GroomingService.objects.all()
    serializer_class = GroomingServiceSerializer
    permission_classes = [AllowAny]


class GroomingSlotsView(APIView):
    """Free start times on ``?date=``, sized to ``?service_ids=`` when given"""

    permission_classes = [AllowAny]

    def get(self, request):
        day = query_date(request)
        service_ids = services.parse_service_ids(request.query_params.get("service_ids"))
        duration = 60
        if service_ids:
            duration = sum(s.duration_minutes for s in services.grooming_services_for(service_ids))
        return Response(services.grooming_slots(day, duration))


class GroomingBookingViewSet(
    BookingActionsMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    model = GroomingBooking
    serializer_class = GroomingBookingSerializer

    def get_queryset(self):
        return super().get_queryset().prefetch_related("services")

    def create(self, request, *args, **kwargs):
        serializer = GroomingBookingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        booking = services.book_grooming(
            request.user,
            get_owned_pet(request, data["pet_id"]),
            data["service_ids"],
            data["date"],
            data["start_time"],
            notes=data["notes"],
        )
        return Response(GroomingBookingSerializer(booking).data, status=status.HTTP_201_CREATED)


class GroomingHistoryView(APIView):
    def get(self, request, user_id):
        ensure_self_or_staff(request, user_id)
        bookings = (
            GroomingBooking.objects.select_related("pet")
            .prefetch_related("services")
            .filter(user_id=user_id)
        )
        return Response(GroomingBookingSerializer(bookings, many=True).data)
