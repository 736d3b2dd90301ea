from django.db import models

from apps.tracking.models import Courier, LocationSample


class Rider(Courier):
    """Delivery rider for shop orders"""

    class Meta:
        db_table = "riders"
        ordering = ["name"]
        indexes = [
            models.Index(fields=["status"], name="riders_status_idx"),
            models.Index(fields=["is_active"], name="riders_active_idx"),
        ]


class RiderLocation(LocationSample):
    rider = models.ForeignKey(Rider, on_delete=models.CASCADE, related_name="locations")
    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="rider_locations",
    )

    class Meta:
        db_table = "rider_locations"
        ordering = ["-recorded_at"]
        indexes = [
            models.Index(fields=["rider", "-recorded_at"], name="rider_loc_recent_idx"),
        ]
