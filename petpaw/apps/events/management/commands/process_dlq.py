"""
Management command to process Dead Letter Queue entries.
This should be run periodically to retry failed Kafka events.
"""
import json

from confluent_kafka import KafkaException
from django.core.management.base import BaseCommand
from django.utils import timezone

from apps.events.models import DeadLetterQueue
from infrastructure.kafka_client import dlq_backoff, kafka_client


class Command(BaseCommand):
    help = "Process Dead Letter Queue entries and retry failed Kafka events"

    def add_arguments(self, parser):
        parser.add_argument(
            "--max-retries",
            type=int,
            default=5,
            help="Maximum number of retry attempts per event (default: 5)",
        )
        parser.add_argument(
            "--batch-size",
            type=int,
            default=100,
            help="Number of DLQ entries to process in one run (default: 100)",
        )

    def handle(self, *args, **options):
        max_retries = options["max_retries"]
        batch_size = options["batch_size"]

        if not kafka_client.enabled:
            self.stdout.write(self.style.WARNING("Kafka is disabled, nothing to retry."))
            return

        self.stdout.write("Processing Dead Letter Queue entries...")

        pending_entries = DeadLetterQueue.objects.filter(
            status=DeadLetterQueue.STATUS_PENDING,
            next_retry_at__lte=timezone.now(),
            retry_count__lt=max_retries,
        ).order_by("next_retry_at")[:batch_size]

        succeeded = failed = 0
        for entry in pending_entries:
            entry.status = DeadLetterQueue.STATUS_RETRYING
            entry.save(update_fields=["status", "updated_at"])

            # The client parks its own failures, so retry on the producer directly
            if self._republish(entry):
                entry.status = DeadLetterQueue.STATUS_PROCESSED
                entry.processed_at = timezone.now()
                succeeded += 1
            else:
                entry.retry_count += 1
                entry.next_retry_at = timezone.now() + dlq_backoff(entry.retry_count)
                entry.status = (
                    DeadLetterQueue.STATUS_FAILED
                    if entry.retry_count >= max_retries
                    else DeadLetterQueue.STATUS_PENDING
                )
                failed += 1
            entry.save()

        self.stdout.write(
            self.style.SUCCESS(
                f"DLQ processing completed. Processed: {succeeded + failed}, "
                f"Succeeded: {succeeded}, Failed: {failed}"
            )
        )

    def _republish(self, entry):
        try:
            kafka_client.producer.produce(
                entry.topic, value=json.dumps(entry.event_data).encode("utf-8")
            )
            remaining = kafka_client.producer.flush(timeout=5)
            return remaining == 0
        except (KafkaException, BufferError) as e:
            entry.error_message = str(e)
            self.stdout.write(
                self.style.ERROR(f"Error processing DLQ entry {entry.id}: {e}")
            )
            return False
