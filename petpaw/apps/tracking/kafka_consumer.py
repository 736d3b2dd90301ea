"""
Kafka consumer relaying courier location events to WebSocket groups
"""
import json
import logging
import threading
import time

from confluent_kafka import Consumer, KafkaError, KafkaException
from django.conf import settings

from apps.events.constants import LOCATION_TOPICS
from apps.events.services import is_event_processed, mark_event_processed

from .broadcast import relay_location

logger = logging.getLogger(__name__)


class LocationUpdateConsumer:
    """Consumes driver and rider location events and fans them out"""

    def __init__(self):
        self.consumer = None
        self.running = False
        self.thread = None

    def _build_consumer(self):
        return Consumer(
            {
                "bootstrap.servers": settings.KAFKA_BOOTSTRAP_SERVERS,
                "group.id": f"{settings.KAFKA_GROUP_ID}_location_updates",
                "auto.offset.reset": "latest",
                "enable.auto.commit": True,
            }
        )

    def start(self):
        """Start consuming messages in a background thread"""
        if self.running:
            return
        try:
            self.consumer = self._build_consumer()
            self.consumer.subscribe(list(LOCATION_TOPICS))
        except KafkaException as e:
            logger.warning(f"Could not subscribe to {LOCATION_TOPICS}: {e}")
            logger.info("Run 'python manage.py create_kafka_topics' to create the required topics.")
            return

        self.running = True
        self.thread = threading.Thread(target=self._consume_loop, daemon=True)
        self.thread.start()
        logger.info(f"Location update consumer started for topics: {LOCATION_TOPICS}")

    def _consume_loop(self):
        while self.running:
            msg = self.consumer.poll(timeout=1.0)
            if msg is None:
                continue

            if msg.error():
                error_code = msg.error().code()
                if error_code == KafkaError._PARTITION_EOF:
                    continue
                if error_code == KafkaError.UNKNOWN_TOPIC_OR_PART:
                    logger.warning("Kafka topic not found. Please run: python manage.py create_kafka_topics")
                    time.sleep(5)
                    continue
                logger.error(f"Kafka error: {msg.error()}")
                continue

            try:
                data = json.loads(msg.value().decode("utf-8"))
            except (UnicodeDecodeError, json.JSONDecodeError) as e:
                logger.error(f"Skipping malformed location event: {e}")
                continue
            self.process_location_update(data)

    def process_location_update(self, data: dict) -> bool:
        """Relay one event; returns False for duplicates and incomplete events"""
        event_id = data.get("event_id")
        if event_id and is_event_processed(event_id):
            logger.debug(f"Skipping duplicate location event {event_id}")
            return False
        if not data.get("courier_type") or not data.get("courier_id"):
            logger.warning(f"Location event without courier: {data}")
            return False

        relay_location(data)
        if event_id:
            mark_event_processed(event_id, ttl=settings.COURIER_LOCATION_TTL)
        return True

    def stop(self):
        """Stop consuming messages"""
        self.running = False
        if self.thread:
            self.thread.join(timeout=5)
        if self.consumer is not None:
            self.consumer.close()


location_consumer = LocationUpdateConsumer()
