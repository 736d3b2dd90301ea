import logging
from datetime import timedelta

from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from apps.core.exceptions import InvalidStatusTransition

from .models import EXPIRING_SOON_DAYS, MedicalRecord, Prescription, RefillRequest

logger = logging.getLogger(__name__)


def upcoming_expirations(owner, days=EXPIRING_SOON_DAYS):
    """Records of the owner's pets expiring within ``days``, expired ones included"""
    horizon = timezone.localdate() + timedelta(days=days)
    return (
        MedicalRecord.objects.select_related("pet")
        .filter(pet__owner=owner, expiration_date__isnull=False, expiration_date__lte=horizon)
        .order_by("expiration_date")
    )


@transaction.atomic
def request_refill(prescription, note=""):
    prescription = Prescription.objects.select_for_update().get(pk=prescription.pk)
    if prescription.refill_status != Prescription.REFILLABLE or prescription.refills_remaining == 0:
        raise ValidationError({"prescription_id": "This prescription cannot be refilled."})
    if prescription.refill_requests.filter(status=RefillRequest.STATUS_PENDING).exists():
        raise ValidationError({"prescription_id": "A refill request is already pending."})

    refill = RefillRequest.objects.create(prescription=prescription, note=note)
    logger.info(f"Refill requested for prescription {prescription.pk}")
    return refill


@transaction.atomic
def decide_refill(refill_id, status, note=""):
    refill = RefillRequest.objects.select_for_update().select_related("prescription").get(pk=refill_id)
    if refill.status != RefillRequest.STATUS_PENDING:
        raise InvalidStatusTransition(refill.status, status)

    refill.status = status
    refill.processed_at = timezone.now()
    if note:
        refill.note = note
    refill.save()

    if status == RefillRequest.STATUS_APPROVED:
        prescription = refill.prescription
        prescription.refills_remaining = max(prescription.refills_remaining - 1, 0)
        if prescription.refills_remaining == 0:
            prescription.refill_status = Prescription.NOT_REFILLABLE
        prescription.save(update_fields=["refills_remaining", "refill_status", "updated_at"])
    return refill
