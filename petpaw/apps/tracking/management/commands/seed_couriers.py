"""
Management command to create test drivers and riders, each with a login and
an initial location.
Usage: python manage.py seed_couriers --drivers 3 --riders 3
"""
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

from apps.drivers.models import Driver
from apps.drivers.services import driver_locations
from apps.riders.models import Rider
from apps.riders.services import rider_locations

User = get_user_model()

# Berlin neighbourhoods
DEFAULT_LOCATIONS = [
    (52.5200, 13.4050),  # Mitte
    (52.4990, 13.4180),  # Kreuzberg
    (52.5390, 13.4240),  # Prenzlauer Berg
    (52.4810, 13.4350),  # Neukolln
    (52.5070, 13.3320),  # Charlottenburg
    (52.4750, 13.3420),  # Schoneberg
]
VEHICLES = {
    "driver": ["car", "van"],
    "rider": ["bike", "scooter"],
}


class Command(BaseCommand):
    help = "Create test drivers and riders with logins and initial locations"

    def add_arguments(self, parser):
        parser.add_argument(
            "--drivers",
            type=int,
            default=3,
            help="Number of test drivers to create (default: 3)",
        )
        parser.add_argument(
            "--riders",
            type=int,
            default=3,
            help="Number of test riders to create (default: 3)",
        )
        parser.add_argument(
            "--password",
            default="petpaw123",
            help="Password for every created account (default: petpaw123)",
        )

    def handle(self, *args, **options):
        created_count = 0
        for kind, model, locations, count in (
            ("driver", Driver, driver_locations, options["drivers"]),
            ("rider", Rider, rider_locations, options["riders"]),
        ):
            for i in range(count):
                if self.create_courier(kind, model, locations, i, options["password"]):
                    created_count += 1

        self.stdout.write(self.style.SUCCESS(f"\nCreated {created_count} test couriers."))

    @transaction.atomic
    def create_courier(self, kind, model, locations, index, password):
        username = f"{kind}{index + 1}"
        phone_prefix = "4915100" if kind == "driver" else "4915200"
        latitude, longitude = DEFAULT_LOCATIONS[index % len(DEFAULT_LOCATIONS)]

        user, user_created = User.objects.get_or_create(
            username=username, defaults={"email": f"{username}@petpaw.test"}
        )
        if user_created:
            user.set_password(password)
            user.save()

        courier, created = model.objects.get_or_create(
            user=user,
            defaults={
                "name": f"{kind.title()} {index + 1}",
                "phone": f"{phone_prefix}{index:04d}",
                "email": user.email,
                "vehicle_type": VEHICLES[kind][index % len(VEHICLES[kind])],
                "status": model.STATUS_ONLINE,
            },
        )
        if not created:
            self.stdout.write(self.style.WARNING(f"{username} already has a {kind} profile, skipping..."))
            return False

        locations.update_location(courier, latitude, longitude, accuracy=10.0, speed=0.0)
        self.stdout.write(
            self.style.SUCCESS(
                f"Created {kind}: {courier.name} (login {username}) at ({latitude}, {longitude})"
            )
        )
        return True
