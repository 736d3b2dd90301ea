from apps.orders.models import Order
from apps.tracking.locations import CourierLocationService

from .models import RiderLocation

HISTORY_STATUSES = (Order.STATUS_DELIVERED, Order.STATUS_CANCELLED)


def active_order(rider):
    order = (
        Order.objects.filter(rider=rider, status__in=Order.ACTIVE_STATUSES)
        .order_by("-rider_accepted_at")
        .first()
    )
    return ("order", order.id, order) if order else None


def order_history(rider, statuses=HISTORY_STATUSES):
    return (
        Order.objects.filter(rider=rider, status__in=statuses)
        .prefetch_related("items")
        .order_by("-created_at")
    )


rider_locations = CourierLocationService(
    "rider", RiderLocation, "rider", active_subject=active_order
)
