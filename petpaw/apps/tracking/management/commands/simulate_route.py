"""
Drive a courier along a routed path, feeding each point through the
location pipeline. Points closer than the significant-change threshold are
dropped on the way, exactly as for a real device.

Usage:
    python manage.py simulate_route driver <driver_id> --to 52.52,13.405 --start 52.50,13.39 --interval 1
    python manage.py simulate_route rider <rider_id> --to 52.52,13.405 --base-url http://localhost:8000/api/v1 --token <token>
"""
import time

from django.apps import apps
from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError
from django.utils.module_loading import import_string

from apps.tracking.client import LocationReporter
from apps.tracking.routing_service import routing_service

COURIERS = {
    "driver": ("drivers.Driver", "apps.drivers.services.driver_locations"),
    "rider": ("riders.Rider", "apps.riders.services.rider_locations"),
}


def parse_point(value):
    try:
        latitude, longitude = (float(part) for part in value.split(","))
    except ValueError:
        raise CommandError(f"Expected 'lat,lng', got {value!r}")
    return latitude, longitude


class Command(BaseCommand):
    help = "Move a driver or rider along a route, one location update per point"

    def add_arguments(self, parser):
        parser.add_argument("kind", choices=sorted(COURIERS))
        parser.add_argument("courier_id")
        parser.add_argument("--to", required=True, help="Destination as lat,lng")
        parser.add_argument(
            "--start",
            help="Start as lat,lng (default: the courier's last known location)",
        )
        parser.add_argument(
            "--interval",
            type=float,
            default=settings.LOCATION_UPDATE_INTERVAL_SECONDS,
            help="Seconds between points (default: LOCATION_UPDATE_INTERVAL_SECONDS)",
        )
        parser.add_argument(
            "--base-url",
            help="Send updates over HTTP to this API root instead of writing directly",
        )
        parser.add_argument("--token", help="Courier's bearer token, used with --base-url")

    def handle(self, *args, **options):
        kind = options["kind"]
        model_label, service_path = COURIERS[kind]
        courier_model = apps.get_model(model_label)
        location_service = import_string(service_path)

        try:
            courier = courier_model.objects.get(pk=options["courier_id"])
        except (courier_model.DoesNotExist, ValidationError, ValueError):
            raise CommandError(f"No {kind} with id {options['courier_id']}")

        start = self.resolve_start(options["start"], location_service, courier)
        route = routing_service.calculate_route(start, parse_point(options["to"]))
        self.stdout.write(
            f"Route of {route.distance_km:.2f} km with {len(route.points)} points ({route.source})"
        )

        send = self.direct_sender(location_service, courier)
        if options["base_url"]:
            send = self.http_sender(kind, courier, options["base_url"], options["token"])

        accepted = 0
        for index, (latitude, longitude) in enumerate(route.points):
            if send(latitude, longitude):
                accepted += 1
                self.stdout.write(f"  [{index + 1}/{len(route.points)}] {latitude:.5f}, {longitude:.5f}")
            if options["interval"] and index < len(route.points) - 1:
                time.sleep(options["interval"])

        self.stdout.write(
            self.style.SUCCESS(
                f"Sent {accepted} of {len(route.points)} points, "
                f"{len(route.points) - accepted} within {settings.LOCATION_SIGNIFICANT_CHANGE_METERS} m"
            )
        )

    def resolve_start(self, value, location_service, courier):
        if value:
            return parse_point(value)
        location = location_service.get_location(courier.id)
        if location is None:
            raise CommandError("The courier has no known location; pass --start")
        return location["latitude"], location["longitude"]

    def direct_sender(self, location_service, courier):
        def send(latitude, longitude):
            updated, _ = location_service.update_location(courier, latitude, longitude)
            return updated

        return send

    def http_sender(self, kind, courier, base_url, token):
        base_url = base_url.rstrip("/")
        threshold = settings.LOCATION_SIGNIFICANT_CHANGE_METERS
        if kind == "driver":
            reporter = LocationReporter(
                f"{base_url}/drivers/{courier.id}/location", token=token, threshold=threshold
            )
        else:
            reporter = LocationReporter(
                f"{base_url}/riders/location",
                token=token,
                threshold=threshold,
                method="post",
                extra={"rider_id": str(courier.id)},
            )
        return reporter.report
