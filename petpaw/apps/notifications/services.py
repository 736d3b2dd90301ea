import logging

from django.utils import timezone

from .models import Notification

logger = logging.getLogger(__name__)

RIDE_MESSAGES = {
    "ACCEPTED": ("Driver on the way", "A driver accepted your pet taxi ride."),
    "IN_PROGRESS": ("Ride started", "Your pet is on the way."),
    "COMPLETED": ("Ride completed", "Your pet has arrived safely."),
    "CANCELLED": ("Ride cancelled", "Your pet taxi ride was cancelled."),
}

ORDER_MESSAGES = {
    "ACCEPTED": ("Order accepted", "The shop accepted order #{number}."),
    "RIDER_ACCEPTED": ("Rider assigned", "A rider will pick up order #{number}."),
    "ON_THE_WAY": ("Order on the way", "Order #{number} is on its way."),
    "DELIVERED": ("Order delivered", "Order #{number} was delivered."),
    "CANCELLED": ("Order cancelled", "Order #{number} was cancelled."),
}


def notify(user, subject_type, subject_id, notification_type, title, message=""):
    notification = Notification.objects.create(
        user=user,
        subject_type=subject_type,
        subject_id=subject_id,
        notification_type=notification_type,
        title=title,
        message=message,
    )
    logger.debug(f"Notified user {user.pk}: {title}")
    return notification


def notify_ride_status(ride):
    title, message = RIDE_MESSAGES.get(ride.status, (None, None))
    if title is None:
        return None
    return notify(ride.user, "ride", ride.id, f"ride_{ride.status.lower()}", title, message)


def notify_order_status(order):
    title, message = ORDER_MESSAGES.get(order.status, (None, None))
    if title is None:
        return None
    return notify(
        order.user,
        "order",
        order.id,
        f"order_{order.status.lower()}",
        title,
        message.format(number=order.order_number),
    )


def mark_read(queryset):
    return queryset.filter(is_read=False).update(is_read=True, read_at=timezone.now())
