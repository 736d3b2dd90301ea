import logging

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)


class TrackingConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.tracking"

    def ready(self):
        """Start the Kafka location relay when Kafka is enabled"""
        if not getattr(settings, "KAFKA_ENABLED", False):
            return

        import threading
        import time

        from apps.tracking.kafka_consumer import location_consumer

        def delayed_start():
            time.sleep(2)
            try:
                location_consumer.start()
            except Exception as e:
                logger.error(f"Failed to start location consumer: {e}")
                logger.info("If topics don't exist, run: python manage.py create_kafka_topics")

        threading.Thread(target=delayed_start, daemon=True).start()
