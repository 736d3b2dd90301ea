import uuid

from django.db import models


class TimeStampedModel(models.Model):
    """Abstract base model with created/updated timestamps"""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class TimeStampedUUIDModel(TimeStampedModel):
    """Abstract base model with a UUID primary key and timestamps"""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    class Meta:
        abstract = True
