import logging
from decimal import ROUND_HALF_UP, Decimal

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from apps.core.exceptions import CourierUnavailable, InvalidStatusTransition, NotCourier
from apps.drivers.models import Driver
from apps.drivers.services import driver_locations
from apps.events.constants import EventTypes
from apps.notifications.services import notify_ride_status
from apps.tracking.routing_service import routing_service
from apps.tracking.services import announce_transition, build_snapshot

from .models import Ride

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def quote_fare(distance_km) -> Decimal:
    """base + per_km * km, rounded to cents"""
    fare = Decimal(settings.RIDE_BASE_FARE) + Decimal(settings.RIDE_PER_KM_FARE) * Decimal(
        str(distance_km)
    )
    return fare.quantize(CENTS, rounding=ROUND_HALF_UP)


def _announce(ride, previous_status, actor_id=None):
    announce_transition(
        "ride",
        ride,
        previous_status,
        EventTypes.RIDE_STATUS_EVENTS,
        actor_id=actor_id,
        notify=notify_ride_status,
        extra={"driver_id": str(ride.driver_id) if ride.driver_id else None},
    )


def _apply_status(ride, new_status):
    ride.status = new_status
    setattr(ride, Ride.TIMESTAMP_FIELDS[new_status], timezone.now())


@transaction.atomic
def create_ride(user, data):
    pickup = (float(data["pickup_latitude"]), float(data["pickup_longitude"]))
    dropoff = (float(data["dropoff_latitude"]), float(data["dropoff_longitude"]))
    route = routing_service.calculate_route(pickup, dropoff)

    fare = data.pop("fare", None)
    if fare is None:
        fare = quote_fare(round(route.distance_km, 2))

    ride = Ride.objects.create(
        user=user,
        fare=fare,
        distance_km=Decimal(str(round(route.distance_km, 2))),
        route_polyline=route.encoded,
        **data,
    )
    _announce(ride, None, actor_id=user.pk)
    logger.info(f"Ride {ride.id} requested by user {user.pk}, fare {fare}")
    return ride


@transaction.atomic
def accept_ride(ride_id, driver_id):
    ride = Ride.objects.select_for_update().get(pk=ride_id)
    driver = Driver.objects.select_for_update().get(pk=driver_id)

    if ride.status != Ride.STATUS_PENDING:
        raise InvalidStatusTransition(ride.status, Ride.STATUS_ACCEPTED)
    if not driver.is_active or driver.status != Driver.STATUS_ONLINE:
        raise CourierUnavailable(f"Driver {driver.name} is {driver.status.lower()}.")

    previous_status = ride.status
    ride.driver = driver
    _apply_status(ride, Ride.STATUS_ACCEPTED)
    ride.save()

    driver.status = Driver.STATUS_BUSY
    driver.save(update_fields=["status", "updated_at"])

    _announce(ride, previous_status, actor_id=driver.id)
    return ride


@transaction.atomic
def update_ride_status(ride_id, new_status, user, driver_id=None):
    """
    Move a ride along its lifecycle. The assigned driver drives every
    transition; the customer may only cancel.
    """
    ride = Ride.objects.select_for_update().get(pk=ride_id)

    if driver_id is not None:
        if str(ride.driver_id) != str(driver_id):
            raise NotCourier("Only the assigned driver can update this ride.")
        if not user.is_staff and ride.driver.user_id != user.pk:
            raise NotCourier("You can only act as your own driver profile.")
        actor_id = ride.driver_id
    elif new_status == Ride.STATUS_CANCELLED and (user.is_staff or ride.user_id == user.pk):
        actor_id = user.pk
    else:
        raise NotCourier("Only the assigned driver can update this ride.")

    if not ride.can_transition_to(new_status) or new_status == Ride.STATUS_ACCEPTED:
        raise InvalidStatusTransition(ride.status, new_status)

    previous_status = ride.status
    _apply_status(ride, new_status)
    ride.save()

    if ride.is_terminal and ride.driver_id:
        Driver.objects.filter(pk=ride.driver_id, status=Driver.STATUS_BUSY).update(
            status=Driver.STATUS_ONLINE, updated_at=timezone.now()
        )

    _announce(ride, previous_status, actor_id=actor_id)
    return ride


def rides_with_status(queryset, status_param):
    """Filter by a comma-separated status list such as ``PENDING,ACCEPTED``"""
    if not status_param:
        return queryset
    statuses = [s.strip().upper() for s in status_param.split(",") if s.strip()]
    return queryset.filter(status__in=statuses)


def ride_snapshot(ride_id):
    ride = Ride.objects.select_related("driver").filter(pk=ride_id).first()
    if ride is None:
        return None
    destination = ride.pickup_point if ride.status == Ride.STATUS_ACCEPTED else ride.dropoff_point
    return build_snapshot(
        "ride",
        ride,
        ride.driver,
        driver_locations,
        destination=destination,
        stored_polyline=ride.route_polyline,
    )
