from datetime import datetime, timedelta

from django.conf import settings
from django.db import models
from django.db.models import Q

from apps.core.models import TimeStampedModel


class BookingBase(TimeStampedModel):
    STATUS_PENDING = "PENDING"
    STATUS_CONFIRMED = "CONFIRMED"
    STATUS_CANCELLED = "CANCELLED"
    STATUS_COMPLETED = "COMPLETED"
    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_CONFIRMED, "Confirmed"),
        (STATUS_CANCELLED, "Cancelled"),
        (STATUS_COMPLETED, "Completed"),
    ]
    TRANSITIONS = {
        STATUS_PENDING: (STATUS_CONFIRMED, STATUS_CANCELLED),
        STATUS_CONFIRMED: (STATUS_COMPLETED, STATUS_CANCELLED),
    }

    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_PENDING)
    cancelled_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        abstract = True

    def can_transition_to(self, new_status):
        return new_status in self.TRANSITIONS.get(self.status, ())

    @property
    def is_open(self):
        return self.status in (self.STATUS_PENDING, self.STATUS_CONFIRMED)


class Veterinarian(TimeStampedModel):
    name = models.CharField(max_length=100)
    clinic_name = models.CharField(max_length=150)
    specialization = models.CharField(max_length=100, blank=True)
    phone = models.CharField(max_length=20, blank=True)
    profile_picture = models.URLField(blank=True)
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "veterinarians"
        ordering = ["name"]

    def __str__(self):
        return f"Dr. {self.name} ({self.clinic_name})"


class VetService(TimeStampedModel):
    name = models.CharField(max_length=100)
    description = models.TextField(blank=True)
    price = models.DecimalField(max_digits=8, decimal_places=2)
    duration_minutes = models.PositiveIntegerField(default=60)

    class Meta:
        db_table = "vet_services"
        ordering = ["name"]

    def __str__(self):
        return self.name


class Appointment(BookingBase):
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="appointments"
    )
    pet = models.ForeignKey(
        "pets.Pet",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="appointments",
    )
    veterinarian = models.ForeignKey(
        Veterinarian,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="appointments",
    )
    service = models.ForeignKey(VetService, on_delete=models.PROTECT, related_name="appointments")
    date_time = models.DateTimeField()
    notes = models.TextField(blank=True)

    class Meta:
        db_table = "appointments"
        ordering = ["date_time"]
        constraints = [
            models.UniqueConstraint(
                fields=["date_time"],
                condition=~Q(status="CANCELLED"),
                name="unique_open_appointment_slot",
            ),
        ]


class PetHotel(TimeStampedModel):
    name = models.CharField(max_length=150)
    description = models.TextField(blank=True)
    address = models.CharField(max_length=255, blank=True)
    image_url = models.URLField(blank=True)
    nightly_rate = models.DecimalField(max_digits=8, decimal_places=2)
    rating = models.DecimalField(max_digits=2, decimal_places=1, default=0)
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "pet_hotels"
        ordering = ["name"]

    def __str__(self):
        return self.name


class HotelBooking(BookingBase):
    PET_SIZES = [
        ("small", "Small"),
        ("medium", "Medium"),
        ("large", "Large"),
    ]

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="hotel_bookings"
    )
    pet = models.ForeignKey("pets.Pet", on_delete=models.CASCADE, related_name="hotel_bookings")
    hotel = models.ForeignKey(PetHotel, on_delete=models.PROTECT, related_name="bookings")
    start_date = models.DateField()
    end_date = models.DateField()
    pet_size = models.CharField(max_length=10, choices=PET_SIZES, default="medium")
    special_requests = models.TextField(blank=True, null=True)
    dietary_needs = models.TextField(blank=True, null=True)
    medication_needs = models.TextField(blank=True, null=True)
    emergency_contact = models.CharField(max_length=100, blank=True)
    total_price = models.DecimalField(max_digits=10, decimal_places=2)

    class Meta:
        db_table = "hotel_bookings"
        ordering = ["-start_date"]

    @property
    def nights(self):
        return (self.end_date - self.start_date).days


class GroomingService(TimeStampedModel):
    name = models.CharField(max_length=100)
    description = models.TextField(blank=True)
    price = models.DecimalField(max_digits=8, decimal_places=2)
    duration_minutes = models.PositiveIntegerField(default=60)
    image_url = models.URLField(blank=True)

    class Meta:
        db_table = "grooming_services"
        ordering = ["name"]

    def __str__(self):
        return self.name


class GroomingBooking(BookingBase):
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="grooming_bookings"
    )
    pet = models.ForeignKey("pets.Pet", on_delete=models.CASCADE, related_name="grooming_bookings")
    services = models.ManyToManyField(GroomingService, related_name="bookings")
    date = models.DateField()
    start_time = models.TimeField()
    total_price = models.DecimalField(max_digits=10, decimal_places=2)
    total_duration = models.PositiveIntegerField(help_text="Minutes")
    notes = models.TextField(blank=True)

    class Meta:
        db_table = "grooming_bookings"
        ordering = ["-date", "-start_time"]

    @property
    def end_time(self):
        start = datetime.combine(self.date, self.start_time)
        return (start + timedelta(minutes=self.total_duration)).time()


class GroomingDay(models.Model):
    """One row per grooming date, locked while a booking for that date is placed"""

    date = models.DateField(unique=True)

    class Meta:
        db_table = "grooming_days"

    def __str__(self):
        return str(self.date)
