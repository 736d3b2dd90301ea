import json
import logging
from datetime import timedelta

from confluent_kafka import KafkaException, Producer
from django.conf import settings
from django.core.serializers.json import DjangoJSONEncoder
from django.utils import timezone

logger = logging.getLogger(__name__)


def dlq_backoff(retry_count: int) -> timedelta:
    """Exponential back-off for DLQ retries, capped at 60 minutes"""
    return timedelta(minutes=min(2 ** retry_count, 60))


class KafkaClient:
    def __init__(self):
        self._producer = None

    @property
    def enabled(self) -> bool:
        return bool(getattr(settings, "KAFKA_ENABLED", False))

    @property
    def producer(self):
        if self._producer is None:
            self._producer = Producer(
                {
                    "bootstrap.servers": settings.KAFKA_BOOTSTRAP_SERVERS,
                    "client.id": settings.KAFKA_CLIENT_ID,
                }
            )
        return self._producer

    def publish(self, topic: str, event_data: dict, key=None) -> bool:
        """Publish event to Kafka topic, with automatic DLQ on failure"""
        if not self.enabled:
            logger.debug(f"Kafka disabled, skipping publish to {topic}")
            return False

        delivery_failed = {"failed": False, "error": None}

        def delivery_callback(err, msg):
            if err is not None:
                delivery_failed["failed"] = True
                delivery_failed["error"] = str(err)
                logger.warning(f"Message delivery to {topic} failed: {err}")

        try:
            produce_kwargs = {
                "value": json.dumps(event_data, cls=DjangoJSONEncoder).encode("utf-8"),
                "callback": delivery_callback,
            }
            if key:
                produce_kwargs["key"] = key.encode("utf-8") if isinstance(key, str) else key

            self.producer.produce(topic, **produce_kwargs)
            self.producer.poll(0)
            remaining = self.producer.flush(timeout=5)
        except (KafkaException, BufferError) as e:
            logger.error(f"Kafka error publishing to {topic}: {e}")
            self.send_to_dlq(topic, event_data, str(e))
            return False

        if delivery_failed["failed"]:
            self.send_to_dlq(topic, event_data, delivery_failed["error"])
            return False
        if remaining:
            logger.warning(f"Delivery to {topic} timed out with {remaining} message(s) queued")
            self.send_to_dlq(topic, event_data, "delivery timed out")
            return False
        return True

    def send_to_dlq(self, topic: str, event_data: dict, error_message: str):
        """Park a failed event in the Dead Letter Queue table"""
        from apps.events.models import DeadLetterQueue

        try:
            DeadLetterQueue.objects.create(
                topic=topic,
                event_data=json.loads(json.dumps(event_data, cls=DjangoJSONEncoder)),
                error_message=error_message,
                retry_count=0,
                status=DeadLetterQueue.STATUS_PENDING,
                next_retry_at=timezone.now() + dlq_backoff(0),
            )
            logger.info(f"Event sent to DLQ: {topic}")
        except Exception as e:
            logger.error(f"Error creating DLQ entry for {topic}: {e}")

    def close(self):
        if self._producer is not None:
            self._producer.flush()


kafka_client = KafkaClient()
