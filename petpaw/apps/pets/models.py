from django.conf import settings
from django.db import models
from django.utils import timezone

from apps.core.models import TimeStampedModel

EXPIRING_SOON_DAYS = 60


class Pet(TimeStampedModel):
    SEX_CHOICES = [
        ("male", "Male"),
        ("female", "Female"),
        ("unknown", "Unknown"),
    ]

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="pets"
    )
    name = models.CharField(max_length=100)
    species = models.CharField(max_length=50)
    breed = models.CharField(max_length=100, blank=True)
    sex = models.CharField(max_length=10, choices=SEX_CHOICES, default="unknown")
    birthdate = models.DateField(null=True, blank=True)
    weight = models.DecimalField(max_digits=5, decimal_places=2, null=True, blank=True)
    profile_picture = models.FileField(upload_to="pets/", null=True, blank=True)

    class Meta:
        db_table = "pets"
        ordering = ["name"]

    def __str__(self):
        return f"{self.name} ({self.species})"


class MedicalRecord(TimeStampedModel):
    RECORD_TYPES = [
        ("vaccine", "Vaccine"),
        ("treatment", "Treatment"),
        ("checkup", "Checkup"),
    ]
    STATUS_EXPIRED = "expired"
    STATUS_EXPIRING_SOON = "expiring soon"
    STATUS_ACTIVE = "active"

    pet = models.ForeignKey(Pet, on_delete=models.CASCADE, related_name="medical_records")
    record_type = models.CharField(max_length=20, choices=RECORD_TYPES, default="vaccine")
    description = models.CharField(max_length=255)
    clinic_name = models.CharField(max_length=150, blank=True)
    veterinarian = models.CharField(max_length=100, blank=True)
    date = models.DateField()
    expiration_date = models.DateField(null=True, blank=True)

    class Meta:
        db_table = "medical_records"
        ordering = ["expiration_date", "-date"]

    def days_until_expiration(self, today=None):
        if self.expiration_date is None:
            return None
        return (self.expiration_date - (today or timezone.localdate())).days

    def status(self, today=None):
        days = self.days_until_expiration(today)
        if days is None:
            return self.STATUS_ACTIVE
        if days <= 0:
            return self.STATUS_EXPIRED
        if days <= EXPIRING_SOON_DAYS:
            return self.STATUS_EXPIRING_SOON
        return self.STATUS_ACTIVE


class Prescription(TimeStampedModel):
    REFILLABLE = "refillable"
    NOT_REFILLABLE = "not_refillable"
    REFILL_STATUS_CHOICES = [
        (REFILLABLE, "Refillable"),
        (NOT_REFILLABLE, "Not Refillable"),
    ]

    pet = models.ForeignKey(Pet, on_delete=models.CASCADE, related_name="prescriptions")
    medication_name = models.CharField(max_length=150)
    dosage = models.CharField(max_length=100)
    instructions = models.TextField(blank=True)
    prescribed_by = models.CharField(max_length=100, blank=True)
    prescribed_on = models.DateField(null=True, blank=True)
    refills_remaining = models.PositiveIntegerField(default=0)
    refill_status = models.CharField(
        max_length=20, choices=REFILL_STATUS_CHOICES, default=NOT_REFILLABLE
    )

    class Meta:
        db_table = "prescriptions"
        ordering = ["-prescribed_on", "-created_at"]

    def __str__(self):
        return f"{self.medication_name} for {self.pet.name}"


class RefillRequest(TimeStampedModel):
    STATUS_PENDING = "PENDING"
    STATUS_APPROVED = "APPROVED"
    STATUS_REJECTED = "REJECTED"
    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_APPROVED, "Approved"),
        (STATUS_REJECTED, "Rejected"),
    ]

    prescription = models.ForeignKey(
        Prescription, on_delete=models.CASCADE, related_name="refill_requests"
    )
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_PENDING)
    note = models.TextField(blank=True)
    processed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "refill_requests"
        ordering = ["-created_at"]


class DiaryEntry(TimeStampedModel):
    pet = models.ForeignKey(Pet, on_delete=models.CASCADE, related_name="diary_entries")
    date = models.DateField()
    activity = models.CharField(max_length=100)
    mood = models.CharField(max_length=50, blank=True)
    description = models.TextField(blank=True)
    image = models.FileField(upload_to="diary/", null=True, blank=True)

    class Meta:
        db_table = "pet_diary_entries"
        ordering = ["-date", "-created_at"]
        verbose_name_plural = "diary entries"
