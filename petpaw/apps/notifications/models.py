from django.conf import settings
from django.db import models

from apps.core.models import TimeStampedUUIDModel


class Notification(TimeStampedUUIDModel):
    SUBJECT_TYPE_CHOICES = [
        ("ride", "Ride"),
        ("order", "Order"),
    ]

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="notifications",
    )
    subject_type = models.CharField(max_length=20, choices=SUBJECT_TYPE_CHOICES)
    subject_id = models.UUIDField(null=True, blank=True)
    notification_type = models.CharField(max_length=100)
    title = models.CharField(max_length=100, blank=True)
    message = models.TextField(blank=True)
    is_read = models.BooleanField(default=False)
    read_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "notifications"
        indexes = [
            models.Index(fields=["user", "is_read"], name="notifications_unread_idx"),
        ]
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.title} -> {self.user_id}"
