from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone

from apps.core.models import TimeStampedModel

STAT_MIN = 0
STAT_MAX = 100
MAX_LEVEL = 10

stat_validators = [MinValueValidator(STAT_MIN), MaxValueValidator(STAT_MAX)]


def clamp(value):
    return max(STAT_MIN, min(STAT_MAX, value))


class VirtualPet(TimeStampedModel):
    STATS = ("hunger", "happiness", "cleanliness", "energy")

    MOOD_HUNGRY = "hungry"
    MOOD_DIRTY = "dirty"
    MOOD_HAPPY = "happy"
    MOOD_NORMAL = "normal"

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="virtual_pets"
    )
    name = models.CharField(max_length=50)
    pet_type = models.CharField(max_length=50, default="White Cat")
    # hunger is fullness: low means the pet needs feeding
    hunger = models.PositiveSmallIntegerField(default=50, validators=stat_validators)
    happiness = models.PositiveSmallIntegerField(default=50, validators=stat_validators)
    cleanliness = models.PositiveSmallIntegerField(default=50, validators=stat_validators)
    energy = models.PositiveSmallIntegerField(default=50, validators=stat_validators)
    level = models.PositiveSmallIntegerField(default=1)
    total_steps = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "virtual_pets"
        ordering = ["created_at"]

    def __str__(self):
        return self.name

    @property
    def mood(self):
        if self.hunger < 30:
            return self.MOOD_HUNGRY
        if self.cleanliness < 30:
            return self.MOOD_DIRTY
        if self.happiness > 70:
            return self.MOOD_HAPPY
        return self.MOOD_NORMAL

    def day_count(self, today=None):
        today = today or timezone.localdate()
        return (today - timezone.localdate(self.created_at)).days + 1

    def adjust(self, **deltas):
        for stat, delta in deltas.items():
            setattr(self, stat, clamp(getattr(self, stat) + delta))


class Trophy(models.Model):
    CATEGORY_STEPS = "steps"
    CATEGORY_DAYS = "days"
    CATEGORY_CHOICES = [
        (CATEGORY_STEPS, "Steps"),
        (CATEGORY_DAYS, "Days"),
    ]

    pet = models.ForeignKey(VirtualPet, on_delete=models.CASCADE, related_name="trophies")
    name = models.CharField(max_length=50)
    category = models.CharField(max_length=10, choices=CATEGORY_CHOICES)
    threshold = models.PositiveIntegerField()
    unlocked_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "virtual_pet_trophies"
        ordering = ["unlocked_at"]
        constraints = [
            models.UniqueConstraint(fields=["pet", "name"], name="unique_pet_trophy"),
        ]

    def __str__(self):
        return f"{self.name} ({self.pet_id})"
