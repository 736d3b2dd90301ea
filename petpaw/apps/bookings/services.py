import logging
from datetime import datetime, time, timedelta
from decimal import Decimal

from django.db import IntegrityError, transaction
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from apps.core.exceptions import InvalidStatusTransition, SlotUnavailable

from .models import Appointment, BookingBase, GroomingBooking, GroomingDay, GroomingService

logger = logging.getLogger(__name__)

VET_OPENING_HOUR = 9
VET_LAST_SLOT_HOUR = 21
GROOMING_OPENING_HOUR = 10
GROOMING_LAST_SLOT_HOUR = 21
GROOMING_CLOSING = time(22, 0)


def hourly_slots(first_hour, last_hour):
    return [time(hour, 0) for hour in range(first_hour, last_hour + 1)]


def _slot_label(value):
    return value.strftime("%H:%M")


# Vet appointments

def booked_appointments(day):
    return Appointment.objects.filter(date_time__date=day).exclude(status=BookingBase.STATUS_CANCELLED)


def slot_summary(appointment):
    local = timezone.localtime(appointment.date_time)
    return {"time": _slot_label(local), "date_time": local.isoformat()}


def appointment_slots(day):
    """Every vet slot on ``day`` with whether it is still free"""
    taken = {
        _slot_label(timezone.localtime(appointment.date_time))
        for appointment in booked_appointments(day)
    }
    now = timezone.now()
    slots = []
    for slot in hourly_slots(VET_OPENING_HOUR, VET_LAST_SLOT_HOUR):
        start = timezone.make_aware(datetime.combine(day, slot))
        label = _slot_label(slot)
        slots.append(
            {
                "time": label,
                "date_time": start.isoformat(),
                "available": label not in taken and start > now,
            }
        )
    return slots


def _validate_appointment_time(date_time):
    local = timezone.localtime(date_time)
    if local.minute or local.second or local.microsecond:
        raise ValidationError({"date_time": "Appointments start on the hour."})
    if not VET_OPENING_HOUR <= local.hour <= VET_LAST_SLOT_HOUR:
        raise ValidationError(
            {"date_time": f"Appointments run from {VET_OPENING_HOUR:02d}:00 to {VET_LAST_SLOT_HOUR:02d}:00."}
        )
    if date_time <= timezone.now():
        raise ValidationError({"date_time": "Appointments must be in the future."})


def book_appointment(user, service, date_time, pet=None, veterinarian=None, notes=""):
    _validate_appointment_time(date_time)
    if booked_appointments(timezone.localtime(date_time).date()).filter(date_time=date_time).exists():
        raise SlotUnavailable()

    try:
        with transaction.atomic():
            appointment = Appointment.objects.create(
                user=user,
                service=service,
                pet=pet,
                veterinarian=veterinarian,
                date_time=date_time,
                notes=notes,
            )
    except IntegrityError:
        # lost the race for the slot
        raise SlotUnavailable()
    logger.info(f"Appointment {appointment.pk} booked by user {user.pk} at {date_time.isoformat()}")
    return appointment


# Status changes shared by every booking type

def change_booking_status(booking, new_status):
    if not booking.can_transition_to(new_status):
        raise InvalidStatusTransition(booking.status, new_status)
    booking.status = new_status
    fields = ["status", "updated_at"]
    if new_status == BookingBase.STATUS_CANCELLED:
        booking.cancelled_at = timezone.now()
        fields.append("cancelled_at")
    booking.save(update_fields=fields)
    logger.info(f"{booking._meta.model_name} {booking.pk} is now {new_status}")
    return booking


def cancel_booking(booking):
    return change_booking_status(booking, BookingBase.STATUS_CANCELLED)


# Pet hotel

def hotel_price(hotel, start_date, end_date) -> Decimal:
    nights = (end_date - start_date).days
    if nights < 1:
        raise ValidationError({"end_date": "Check-out must be after check-in."})
    return hotel.nightly_rate * nights


def book_hotel(user, hotel, pet, start_date, end_date, **details):
    if not hotel.is_active:
        raise ValidationError({"hotel_id": "This hotel is not taking bookings."})
    if start_date < timezone.localdate():
        raise ValidationError({"start_date": "Check-in cannot be in the past."})
    booking = hotel.bookings.create(
        user=user,
        pet=pet,
        start_date=start_date,
        end_date=end_date,
        total_price=hotel_price(hotel, start_date, end_date),
        **details,
    )
    logger.info(f"Hotel booking {booking.pk} at {hotel.name} for {booking.nights} nights")
    return booking


def update_hotel_booking(booking, **changes):
    if not booking.is_open:
        raise ValidationError({"status": f"A {booking.status.lower()} booking can no longer be changed."})
    for field, value in changes.items():
        setattr(booking, field, value)
    booking.total_price = hotel_price(booking.hotel, booking.start_date, booking.end_date)
    booking.save()
    return booking


# Grooming

def _minutes(value):
    return value.hour * 60 + value.minute


def _overlaps(start, duration, other_start, other_duration):
    return start < other_start + other_duration and other_start < start + duration


def grooming_busy_periods(day):
    return [
        (_minutes(booking.start_time), booking.total_duration)
        for booking in GroomingBooking.objects.filter(date=day).exclude(
            status=BookingBase.STATUS_CANCELLED
        )
    ]


def lock_grooming_day(day):
    GroomingDay.objects.get_or_create(date=day)
    return GroomingDay.objects.select_for_update().get(date=day)


def grooming_slots(day, duration=60):
    """
    Free grooming start times on ``day`` for a booking lasting ``duration``
    minutes. A slot is free when the whole booking fits before closing and
    overlaps no open booking.
    """
    busy = grooming_busy_periods(day)
    closing = _minutes(GROOMING_CLOSING)
    now = timezone.localtime()
    slots = []
    for slot in hourly_slots(GROOMING_OPENING_HOUR, GROOMING_LAST_SLOT_HOUR):
        start = _minutes(slot)
        if start + duration > closing:
            continue
        if day == now.date() and slot <= now.time():
            continue
        if any(_overlaps(start, duration, other, length) for other, length in busy):
            continue
        end = (datetime.combine(day, slot) + timedelta(minutes=duration)).time()
        slots.append({"start_time": _slot_label(slot), "end_time": _slot_label(end)})
    return slots


def parse_service_ids(raw):
    """Accepts a list of ids or a comma separated string"""
    if raw in (None, ""):
        return []
    if isinstance(raw, str):
        raw = raw.split(",")
    try:
        return [int(str(value).strip()) for value in raw if str(value).strip()]
    except ValueError:
        raise ValidationError({"service_ids": "Service ids must be integers."})


def grooming_services_for(service_ids):
    services = list(GroomingService.objects.filter(pk__in=service_ids))
    if not services or len(services) != len(set(service_ids)):
        raise ValidationError({"service_ids": "Choose at least one valid grooming service."})
    return services


@transaction.atomic
def book_grooming(user, pet, service_ids, day, start_time, notes=""):
    services = grooming_services_for(service_ids)
    duration = sum(service.duration_minutes for service in services)
    price = sum((service.price for service in services), Decimal("0.00"))

    available = {slot["start_time"] for slot in grooming_slots(day, duration)}
    if _slot_label(start_time) not in available:
        raise SlotUnavailable()

    lock_grooming_day(day)
    start = _minutes(start_time)
    if any(_overlaps(start, duration, other, length) for other, length in grooming_busy_periods(day)):
        raise SlotUnavailable()

    booking = GroomingBooking.objects.create(
        user=user,
        pet=pet,
        date=day,
        start_time=start_time,
        total_price=price,
        total_duration=duration,
        notes=notes,
    )
    booking.services.set(services)
    logger.info(f"Grooming booking {booking.pk} on {day} at {_slot_label(start_time)} ({duration} min)")
    return booking
