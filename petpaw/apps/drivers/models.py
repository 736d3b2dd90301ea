from django.db import models

from apps.tracking.models import Courier, LocationSample


class Driver(Courier):
    """Pet-taxi driver"""

    class Meta:
        db_table = "drivers"
        ordering = ["name"]
        indexes = [
            models.Index(fields=["status"], name="drivers_status_idx"),
            models.Index(fields=["is_active"], name="drivers_active_idx"),
        ]


class DriverLocation(LocationSample):
    driver = models.ForeignKey(Driver, on_delete=models.CASCADE, related_name="locations")
    ride = models.ForeignKey(
        "rides.Ride",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="driver_locations",
    )

    class Meta:
        db_table = "driver_locations"
        ordering = ["-recorded_at"]
        indexes = [
            models.Index(fields=["driver", "-recorded_at"], name="driver_loc_recent_idx"),
        ]
