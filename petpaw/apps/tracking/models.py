from django.conf import settings
from django.db import models

from apps.core.models import TimeStampedUUIDModel


class Courier(TimeStampedUUIDModel):
    """Shared shape of drivers (pet taxi) and riders (shop deliveries)"""

    STATUS_ONLINE = "ONLINE"
    STATUS_OFFLINE = "OFFLINE"
    STATUS_BUSY = "BUSY"
    STATUS_CHOICES = [
        (STATUS_ONLINE, "Online"),
        (STATUS_OFFLINE, "Offline"),
        (STATUS_BUSY, "Busy"),
    ]
    VEHICLE_TYPES = [
        ("bike", "Bike"),
        ("car", "Car"),
        ("scooter", "Scooter"),
        ("van", "Van"),
    ]

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="%(class)s_profile",
    )
    name = models.CharField(max_length=100)
    phone = models.CharField(max_length=20, unique=True)
    email = models.EmailField(max_length=100, null=True, blank=True)
    vehicle_type = models.CharField(max_length=10, choices=VEHICLE_TYPES)
    number_plate = models.CharField(max_length=20, blank=True)
    is_active = models.BooleanField(default=True)
    status = models.CharField(
        max_length=10, choices=STATUS_CHOICES, default=STATUS_OFFLINE
    )

    class Meta:
        abstract = True

    @property
    def is_online(self):
        return self.status != self.STATUS_OFFLINE

    def __str__(self):
        return f"{self.name} - ({self.phone})"


class LocationSample(models.Model):
    """A location accepted by the significant-change filter"""

    latitude = models.DecimalField(max_digits=10, decimal_places=7)
    longitude = models.DecimalField(max_digits=10, decimal_places=7)
    accuracy = models.DecimalField(max_digits=8, decimal_places=2, null=True, blank=True)
    speed = models.DecimalField(max_digits=8, decimal_places=2, null=True, blank=True)
    heading = models.DecimalField(max_digits=5, decimal_places=2, null=True, blank=True)
    recorded_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        abstract = True
        ordering = ["-recorded_at"]
