from apps.rides.models import Ride
from apps.tracking.locations import CourierLocationService

from .models import DriverLocation


def active_ride(driver):
    ride = (
        Ride.objects.filter(driver=driver, status__in=Ride.ACTIVE_STATUSES)
        .order_by("-accepted_at")
        .first()
    )
    return ("ride", ride.id, ride) if ride else None


def driver_transactions(driver, statuses=(Ride.STATUS_COMPLETED,)):
    return Ride.objects.filter(driver=driver, status__in=statuses).order_by("-created_at")


driver_locations = CourierLocationService(
    "driver", DriverLocation, "driver", active_subject=active_ride
)
