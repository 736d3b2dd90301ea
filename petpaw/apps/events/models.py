from django.db import models

from apps.core.models import TimeStampedUUIDModel

from .constants import EventTypes


class TrackingEvent(TimeStampedUUIDModel):
    SUBJECT_RIDE = "ride"
    SUBJECT_ORDER = "order"
    SUBJECT_CHOICES = [
        (SUBJECT_RIDE, "Ride"),
        (SUBJECT_ORDER, "Order"),
    ]

    subject_type = models.CharField(max_length=20, choices=SUBJECT_CHOICES)
    subject_id = models.UUIDField()
    event_type = models.CharField(max_length=100, choices=EventTypes.CHOICES)
    actor_id = models.CharField(max_length=64, blank=True)
    event_data = models.JSONField(default=dict, blank=True)
    location_lat = models.DecimalField(
        max_digits=10, decimal_places=7, null=True, blank=True
    )
    location_lng = models.DecimalField(
        max_digits=10, decimal_places=7, null=True, blank=True
    )
    published = models.BooleanField(default=False)
    timestamp = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "tracking_events"
        indexes = [
            models.Index(fields=["subject_type", "subject_id"], name="tracking_ev_subject_idx"),
            models.Index(fields=["event_type"], name="tracking_ev_type_idx"),
            models.Index(fields=["timestamp"], name="tracking_ev_timestamp_idx"),
        ]
        ordering = ["-timestamp"]

    def __str__(self):
        return f"{self.event_type} - {self.subject_type} {self.subject_id}"


class DeadLetterQueue(TimeStampedUUIDModel):
    STATUS_PENDING = "pending"
    STATUS_RETRYING = "retrying"
    STATUS_PROCESSED = "processed"
    STATUS_FAILED = "failed"
    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_RETRYING, "Retrying"),
        (STATUS_PROCESSED, "Processed"),
        (STATUS_FAILED, "Failed"),
    ]

    topic = models.CharField(max_length=255, help_text="Kafka topic name")
    event_data = models.JSONField(help_text="Original event data")
    error_message = models.TextField(
        blank=True, null=True, help_text="Error that caused the failure"
    )
    retry_count = models.IntegerField(default=0, help_text="Number of retry attempts")
    status = models.CharField(
        max_length=50, choices=STATUS_CHOICES, default=STATUS_PENDING
    )
    next_retry_at = models.DateTimeField(
        null=True, blank=True, help_text="When to retry next"
    )
    processed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "dead_letter_queue"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status"], name="dead_letter_status_idx"),
            models.Index(fields=["next_retry_at"], name="dead_letter_next_retry_idx"),
            models.Index(fields=["topic"], name="dead_letter_topic_idx"),
        ]

    def __str__(self):
        return f"DLQ {self.topic} ({self.status}, retries={self.retry_count})"
