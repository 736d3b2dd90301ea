"""
Follow a ride or order from the command line by polling its tracking snapshot.
Usage: python manage.py track ride <ride_id> --base-url http://localhost:8000/api/v1 --token <token>
"""
import json

from django.conf import settings
from django.core.management.base import BaseCommand

from apps.tracking.client import (
    ORDER_TERMINAL_STATUSES,
    RIDE_TERMINAL_STATUSES,
    StatusPoller,
)

TERMINAL_STATUSES = {
    "ride": RIDE_TERMINAL_STATUSES,
    "order": ORDER_TERMINAL_STATUSES,
}


class Command(BaseCommand):
    help = "Poll a ride or order until it reaches a terminal status"

    def add_arguments(self, parser):
        parser.add_argument("kind", choices=sorted(TERMINAL_STATUSES))
        parser.add_argument("subject_id")
        parser.add_argument(
            "--base-url",
            default="http://localhost:8000/api/v1",
            help="API root (default: http://localhost:8000/api/v1)",
        )
        parser.add_argument("--token", help="Bearer token of the customer or courier")
        parser.add_argument(
            "--interval",
            type=float,
            default=settings.TRACKING_POLL_INTERVAL_SECONDS,
            help="Seconds between polls (default: TRACKING_POLL_INTERVAL_SECONDS)",
        )
        parser.add_argument("--max-polls", type=int, help="Give up after this many requests")

    def handle(self, *args, **options):
        kind = options["kind"]
        self.verbosity = options["verbosity"]
        url = f"{options['base_url'].rstrip('/')}/tracking/{kind}/{options['subject_id']}"

        poller = StatusPoller(
            url,
            token=options["token"],
            interval=options["interval"],
            on_update=self.show,
            max_polls=options["max_polls"],
            terminal_statuses=TERMINAL_STATUSES[kind],
        )
        self.stdout.write(f"Tracking {kind} {options['subject_id']} every {options['interval']}s...")
        try:
            last = poller.run()
        except KeyboardInterrupt:
            poller.stop()
            last = poller.last_data

        if last is None:
            self.stdout.write(self.style.ERROR("No tracking data received."))
        elif poller.last_status in poller.terminal_statuses:
            self.stdout.write(self.style.SUCCESS(f"{kind} finished as {poller.last_status}"))
        else:
            self.stdout.write(self.style.WARNING(f"Stopped while {kind} is {poller.last_status}"))

    def show(self, data):
        self.stdout.write(f"Status: {data.get('status')}")
        location = data.get("courier_location")
        if location:
            self.stdout.write(f"  courier at {location['latitude']}, {location['longitude']}")
        if self.verbosity > 1:
            self.stdout.write(json.dumps(data, indent=2))
