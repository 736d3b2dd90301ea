from django.conf import settings
from django.db import models

from apps.core.models import TimeStampedUUIDModel


class Ride(TimeStampedUUIDModel):
    STATUS_PENDING = "PENDING"
    STATUS_ACCEPTED = "ACCEPTED"
    STATUS_IN_PROGRESS = "IN_PROGRESS"
    STATUS_COMPLETED = "COMPLETED"
    STATUS_CANCELLED = "CANCELLED"
    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_ACCEPTED, "Accepted"),
        (STATUS_IN_PROGRESS, "In Progress"),
        (STATUS_COMPLETED, "Completed"),
        (STATUS_CANCELLED, "Cancelled"),
    ]
    TRANSITIONS = {
        STATUS_PENDING: (STATUS_ACCEPTED, STATUS_CANCELLED),
        STATUS_ACCEPTED: (STATUS_IN_PROGRESS, STATUS_CANCELLED),
        STATUS_IN_PROGRESS: (STATUS_COMPLETED, STATUS_CANCELLED),
    }
    TERMINAL_STATUSES = (STATUS_COMPLETED, STATUS_CANCELLED)
    ACTIVE_STATUSES = (STATUS_ACCEPTED, STATUS_IN_PROGRESS)
    TIMESTAMP_FIELDS = {
        STATUS_ACCEPTED: "accepted_at",
        STATUS_IN_PROGRESS: "started_at",
        STATUS_COMPLETED: "completed_at",
        STATUS_CANCELLED: "cancelled_at",
    }

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="rides"
    )
    driver = models.ForeignKey(
        "drivers.Driver",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="rides",
    )
    pickup_location = models.CharField(max_length=255)
    pickup_latitude = models.DecimalField(max_digits=10, decimal_places=7)
    pickup_longitude = models.DecimalField(max_digits=10, decimal_places=7)
    dropoff_location = models.CharField(max_length=255)
    dropoff_latitude = models.DecimalField(max_digits=10, decimal_places=7)
    dropoff_longitude = models.DecimalField(max_digits=10, decimal_places=7)
    pet_type = models.CharField(max_length=50)
    pet_name = models.CharField(max_length=100, blank=True)
    special_instructions = models.TextField(blank=True)
    fare = models.DecimalField(max_digits=10, decimal_places=2)
    distance_km = models.DecimalField(max_digits=8, decimal_places=2, null=True, blank=True)
    route_polyline = models.TextField(blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)
    accepted_at = models.DateTimeField(null=True, blank=True)
    started_at = models.DateTimeField(null=True, blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "rides"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status"], name="rides_status_idx"),
            models.Index(fields=["user", "-created_at"], name="rides_user_recent_idx"),
            models.Index(fields=["driver", "status"], name="rides_driver_status_idx"),
        ]

    def __str__(self):
        return f"Ride {self.id} - {self.status}"

    def can_transition_to(self, new_status):
        return new_status in self.TRANSITIONS.get(self.status, ())

    @property
    def is_terminal(self):
        return self.status in self.TERMINAL_STATUSES

    @property
    def pickup_point(self):
        return float(self.pickup_latitude), float(self.pickup_longitude)

    @property
    def dropoff_point(self):
        return float(self.dropoff_latitude), float(self.dropoff_longitude)
