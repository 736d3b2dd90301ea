from rest_framework import serializers

from .models import (
    Appointment,
    BookingBase,
    GroomingBooking,
    GroomingService,
    HotelBooking,
    PetHotel,
    Veterinarian,
    VetService,
)
from .services import parse_service_ids


class VeterinarianSerializer(serializers.ModelSerializer):
    class Meta:
        model = Veterinarian
        fields = ["id", "name", "clinic_name", "specialization", "phone", "profile_picture"]


class VetServiceSerializer(serializers.ModelSerializer):
    class Meta:
        model = VetService
        fields = ["id", "name", "description", "price", "duration_minutes"]


class AppointmentSerializer(serializers.ModelSerializer):
    service = VetServiceSerializer(read_only=True)
    veterinarian = VeterinarianSerializer(read_only=True)
    pet_name = serializers.CharField(source="pet.name", read_only=True, default=None)

    class Meta:
        model = Appointment
        fields = [
            "id",
            "user",
            "pet",
            "pet_name",
            "service",
            "veterinarian",
            "date_time",
            "status",
            "notes",
            "cancelled_at",
            "created_at",
        ]
        read_only_fields = fields


class AppointmentCreateSerializer(serializers.Serializer):
    date_time = serializers.DateTimeField()
    service_id = serializers.IntegerField()
    pet_id = serializers.IntegerField(required=False, allow_null=True)
    veterinarian_id = serializers.IntegerField(required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class BookingStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=BookingBase.STATUS_CHOICES)


class PetHotelSerializer(serializers.ModelSerializer):
    class Meta:
        model = PetHotel
        fields = ["id", "name", "description", "address", "image_url", "nightly_rate", "rating"]


class HotelBookingSerializer(serializers.ModelSerializer):
    hotel = PetHotelSerializer(read_only=True)
    hotel_id = serializers.PrimaryKeyRelatedField(
        queryset=PetHotel.objects.all(), source="hotel", write_only=True
    )
    pet_id = serializers.IntegerField(write_only=True)
    pet_name = serializers.CharField(source="pet.name", read_only=True)
    nights = serializers.IntegerField(read_only=True)

    class Meta:
        model = HotelBooking
        fields = [
            "id",
            "user",
            "hotel",
            "hotel_id",
            "pet",
            "pet_id",
            "pet_name",
            "start_date",
            "end_date",
            "nights",
            "pet_size",
            "special_requests",
            "dietary_needs",
            "medication_needs",
            "emergency_contact",
            "total_price",
            "status",
            "cancelled_at",
            "created_at",
        ]
        read_only_fields = ["id", "user", "pet", "total_price", "status", "cancelled_at", "created_at"]

    def validate(self, attrs):
        start = attrs.get("start_date", getattr(self.instance, "start_date", None))
        end = attrs.get("end_date", getattr(self.instance, "end_date", None))
        if start and end and end <= start:
            raise serializers.ValidationError({"end_date": "Check-out must be after check-in."})
        return attrs


class GroomingServiceSerializer(serializers.ModelSerializer):
    class Meta:
        model = GroomingService
        fields = ["id", "name", "description", "price", "duration_minutes", "image_url"]


class ServiceIdsField(serializers.Field):
    """A list of ids, or the comma separated form older clients send"""

    def to_internal_value(self, data):
        ids = parse_service_ids(data)
        if not ids:
            raise serializers.ValidationError("Choose at least one grooming service.")
        return ids

    def to_representation(self, value):
        return value


class GroomingBookingSerializer(serializers.ModelSerializer):
    services = GroomingServiceSerializer(many=True, read_only=True)
    pet_name = serializers.CharField(source="pet.name", read_only=True)
    end_time = serializers.TimeField(read_only=True)

    class Meta:
        model = GroomingBooking
        fields = [
            "id",
            "user",
            "pet",
            "pet_name",
            "services",
            "date",
            "start_time",
            "end_time",
            "total_price",
            "total_duration",
            "status",
            "notes",
            "cancelled_at",
            "created_at",
        ]
        read_only_fields = fields


class GroomingBookingCreateSerializer(serializers.Serializer):
    pet_id = serializers.IntegerField()
    service_ids = ServiceIdsField()
    date = serializers.DateField()
    start_time = serializers.TimeField()
    notes = serializers.CharField(required=False, allow_blank=True, default="")
