import logging

from django.db import transaction

from infrastructure.cache import get_cache_key_value, set_cache_key
from infrastructure.kafka_client import kafka_client

from .constants import KAFKA_TOPICS
from .models import TrackingEvent

logger = logging.getLogger(__name__)

SUBJECT_TOPICS = {
    TrackingEvent.SUBJECT_RIDE: KAFKA_TOPICS["RIDE_STATUS_CHANGED"],
    TrackingEvent.SUBJECT_ORDER: KAFKA_TOPICS["ORDER_STATUS_CHANGED"],
}


# Event Idempotency
def mark_event_processed(event_id: str, ttl: int = 86400):
    set_cache_key(f"event:processed:{event_id}", {"status": "processed"}, ttl)


def is_event_processed(event_id: str) -> bool:
    data = get_cache_key_value(f"event:processed:{event_id}")
    return bool(data) and data.get("status") == "processed"


class EventService:
    @staticmethod
    def create_event(
        subject_type: str,
        subject_id,
        event_type: str,
        actor_id=None,
        event_data=None,
        location=None,
    ) -> TrackingEvent:
        """Persist a tracking event and publish it once the transaction commits"""
        event = TrackingEvent.objects.create(
            subject_type=subject_type,
            subject_id=subject_id,
            event_type=event_type,
            actor_id=str(actor_id) if actor_id else "",
            event_data=event_data or {},
            location_lat=location.get("latitude") if location else None,
            location_lng=location.get("longitude") if location else None,
        )

        kafka_msg = {
            "event_id": str(event.id),
            "event_type": event_type,
            "timestamp": event.timestamp.isoformat(),
            "subject_type": subject_type,
            "subject_id": str(subject_id),
            "actor_id": event.actor_id or None,
            "data": event_data or {},
            "location": location,
        }
        transaction.on_commit(lambda: EventService.publish(event, kafka_msg))
        return event

    @staticmethod
    def publish(event: TrackingEvent, kafka_msg: dict):
        topic = SUBJECT_TOPICS[event.subject_type]
        if kafka_client.publish(topic=topic, event_data=kafka_msg, key=str(event.subject_id)):
            TrackingEvent.objects.filter(pk=event.pk).update(published=True)
            mark_event_processed(str(event.id))
            logger.debug(f"Published {event.event_type} for {event.subject_type} {event.subject_id}")

    @staticmethod
    def get_subject_events(subject_type: str, subject_id):
        return TrackingEvent.objects.filter(
            subject_type=subject_type, subject_id=subject_id
        ).order_by("-timestamp")


event_service = EventService()
