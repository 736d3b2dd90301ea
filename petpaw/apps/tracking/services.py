import logging
from typing import Any, Dict, Optional

from django.utils.module_loading import import_string

from apps.accounts import services as account_services
from apps.core.exceptions import CourierUnavailable, NotCourier
from apps.events.services import event_service

from .broadcast import publish_status
from .routing_service import routing_service

logger = logging.getLogger(__name__)

SNAPSHOT_BUILDERS = {
    "ride": "apps.rides.services.ride_snapshot",
    "order": "apps.orders.services.order_snapshot",
}


def login_courier(model, username, password, request=None):
    """Authenticate a user and resolve their courier profile of ``model``"""
    user, token = account_services.login(username, password, request=request)
    try:
        courier = model.objects.get(user=user, is_active=True)
    except model.DoesNotExist:
        logger.info(f"User {user.pk} tried to log in as {model._meta.model_name}")
        raise NotCourier(f"This account has no active {model._meta.verbose_name} profile.")
    return courier, token


def set_courier_status(courier, status):
    if courier.status == courier.STATUS_BUSY:
        raise CourierUnavailable(f"{courier.name} is on an active job.")
    if courier.status != status:
        courier.status = status
        courier.save(update_fields=["status", "updated_at"])
        logger.info(f"{courier._meta.model_name} {courier.id} is now {status}")
    return courier


def courier_summary(courier) -> Optional[Dict[str, Any]]:
    if courier is None:
        return None
    return {
        "id": str(courier.id),
        "name": courier.name,
        "phone": courier.phone,
        "vehicle_type": courier.vehicle_type,
        "number_plate": courier.number_plate,
        "status": courier.status,
    }


def build_snapshot(
    kind: str,
    subject,
    courier,
    location_service,
    destination=None,
    stored_polyline: str = "",
) -> Dict[str, Any]:
    """
    Current view of a ride or order: status, courier, courier location and
    the route from the courier to ``destination``. Without a live courier
    location the stored polyline is used.
    """
    location = location_service.get_location(courier.id) if courier else None
    route = None
    if location and destination and not subject.is_terminal:
        route = routing_service.calculate_route(
            (location["latitude"], location["longitude"]), destination
        ).as_dict()
    elif stored_polyline:
        route = {"polyline": stored_polyline, "source": "stored"}

    return {
        "kind": kind,
        "id": str(subject.id),
        "status": subject.status,
        "courier": courier_summary(courier),
        "courier_location": location,
        "destination": (
            {"latitude": destination[0], "longitude": destination[1]}
            if destination
            else None
        ),
        "route": route,
        "updated_at": subject.updated_at.isoformat(),
    }


def get_snapshot(kind: str, subject_id) -> Optional[Dict[str, Any]]:
    """Snapshot for ``kind`` ("ride" or "order"); None when it doesn't exist"""
    builder_path = SNAPSHOT_BUILDERS.get(kind)
    if builder_path is None:
        return None
    return import_string(builder_path)(subject_id)


def announce_transition(kind, subject, previous_status, event_types, actor_id=None, notify=None, extra=None):
    """
    Records the tracking event for a status change and pushes it to the
    subject's WebSocket group once the transaction commits.
    """
    payload = {
        "id": str(subject.id),
        "status": subject.status,
        "previous_status": previous_status,
        **(extra or {}),
    }
    event_service.create_event(
        subject_type=kind,
        subject_id=subject.id,
        event_type=event_types[subject.status],
        actor_id=actor_id,
        event_data=payload,
    )
    if notify is not None:
        notify(subject)
    publish_status(kind, subject.id, payload)
    logger.info(f"{kind} {subject.id}: {previous_status} -> {subject.status}")
