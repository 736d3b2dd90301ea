"""
Fan-out of status and location changes to WebSocket groups.

Group names: ``ride_<id>``, ``order_<id>``, ``driver_<id>``, ``rider_<id>``.
"""
import json
import logging
import uuid

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.core.serializers.json import DjangoJSONEncoder
from django.db import transaction

from apps.events.constants import KAFKA_TOPICS
from infrastructure.kafka_client import kafka_client

logger = logging.getLogger(__name__)

LOCATION_TOPICS = {
    "driver": KAFKA_TOPICS["DRIVER_LOCATION_UPDATE"],
    "rider": KAFKA_TOPICS["RIDER_LOCATION_UPDATE"],
}


def group_name(kind: str, object_id) -> str:
    return f"{kind}_{object_id}"


def _jsonable(data):
    return json.loads(json.dumps(data, cls=DjangoJSONEncoder))


def broadcast(group: str, message_type: str, data: dict):
    channel_layer = get_channel_layer()
    if channel_layer is None:
        logger.warning("No channel layer configured, dropping broadcast")
        return
    async_to_sync(channel_layer.group_send)(
        group, {"type": message_type, "data": _jsonable(data)}
    )


def publish_status(subject_kind: str, subject_id, payload: dict):
    """Push a status change to the subject's group after the transaction commits"""
    group = group_name(subject_kind, subject_id)
    transaction.on_commit(lambda: broadcast(group, "status_update", payload))


def publish_location(courier_kind: str, courier_id, location: dict, subject=None):
    """
    Send a courier location to its listeners. With Kafka enabled the event
    goes through the location topic and the relay consumer fans it out;
    otherwise it is relayed in-process.
    """
    event = {
        "event_id": str(uuid.uuid4()),
        "courier_type": courier_kind,
        "courier_id": str(courier_id),
        "location": location,
        "subject_type": subject[0] if subject else None,
        "subject_id": str(subject[1]) if subject else None,
    }
    if kafka_client.enabled:
        kafka_client.publish(LOCATION_TOPICS[courier_kind], event, key=str(courier_id))
    else:
        relay_location(event)


def relay_location(event: dict):
    courier_kind = event.get("courier_type")
    courier_id = event.get("courier_id")
    if not courier_kind or not courier_id:
        return

    data = {
        "courier_type": courier_kind,
        "courier_id": courier_id,
        "location": event.get("location"),
    }
    broadcast(group_name(courier_kind, courier_id), "location_update", data)
    if event.get("subject_type") and event.get("subject_id"):
        broadcast(
            group_name(event["subject_type"], event["subject_id"]),
            "location_update",
            data,
        )
