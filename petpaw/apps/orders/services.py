import logging
import uuid
from collections import OrderedDict
from decimal import ROUND_HALF_UP, Decimal

from django.conf import settings
from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from apps.catalog.models import Product
from apps.core.exceptions import CourierUnavailable, InvalidStatusTransition, NotCourier
from apps.events.constants import EventTypes
from apps.notifications.services import notify_order_status
from apps.riders.models import Rider
from apps.riders.services import rider_locations
from apps.tracking.services import announce_transition, build_snapshot

from .models import Order, OrderItem

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def generate_order_number():
    return f"PP{timezone.now():%y%m%d}{uuid.uuid4().hex[:6].upper()}"


def rider_share(delivery_fee) -> Decimal:
    return (Decimal(delivery_fee) * Decimal(settings.RIDER_EARNINGS_RATE)).quantize(
        CENTS, rounding=ROUND_HALF_UP
    )


def _announce(order, previous_status, actor_id=None):
    announce_transition(
        "order",
        order,
        previous_status,
        EventTypes.ORDER_STATUS_EVENTS,
        actor_id=actor_id,
        notify=notify_order_status,
        extra={
            "order_number": order.order_number,
            "rider_id": str(order.rider_id) if order.rider_id else None,
        },
    )


def _resolve_address(user, address):
    if address is None:
        address = user.addresses.first()
    if address is None:
        raise ValidationError({"delivery_address_id": "Add a delivery address before placing an order."})
    if address.user_id != user.pk:
        raise ValidationError({"delivery_address_id": "Unknown delivery address."})
    return address


@transaction.atomic
def create_order(user, items, delivery_address=None, special_instructions=""):
    """Price the cart server-side and place the order"""
    quantities = OrderedDict()
    for item in items:
        quantities[item["product_id"]] = quantities.get(item["product_id"], 0) + item["quantity"]

    products = Product.objects.filter(
        pk__in=quantities.keys(), is_available=True, shop__is_active=True
    ).in_bulk()
    missing = [str(pk) for pk in quantities if pk not in products]
    if missing:
        raise ValidationError({"items": f"Unavailable products: {', '.join(missing)}"})

    address = _resolve_address(user, delivery_address)
    subtotal = sum(
        (products[pk].price * quantity for pk, quantity in quantities.items()),
        Decimal("0.00"),
    )
    delivery_fee = Decimal(settings.ORDER_DELIVERY_FEE).quantize(CENTS)

    order = Order.objects.create(
        order_number=generate_order_number(),
        user=user,
        delivery_address=address,
        delivery_address_text=", ".join(part for part in (address.street, address.city) if part),
        delivery_latitude=address.latitude,
        delivery_longitude=address.longitude,
        subtotal=subtotal,
        delivery_fee=delivery_fee,
        total_amount=subtotal + delivery_fee,
        special_instructions=special_instructions,
    )
    OrderItem.objects.bulk_create(
        [
            OrderItem(
                order=order,
                product=products[pk],
                product_name=products[pk].name,
                unit_price=products[pk].price,
                quantity=quantity,
            )
            for pk, quantity in quantities.items()
        ]
    )
    _announce(order, None, actor_id=user.pk)
    logger.info(f"Order {order.order_number} placed by user {user.pk}, total {order.total_amount}")
    return order


def _ensure_assigned_rider(order, user):
    if user.is_staff:
        return
    if order.rider_id is None or order.rider.user_id != user.pk:
        raise NotCourier("Only the assigned rider can update this order.")


@transaction.atomic
def update_order_status(order_id, new_status, user, rider_id=None):
    order = Order.objects.select_for_update().select_related("rider").get(pk=order_id)
    if not order.can_transition_to(new_status):
        raise InvalidStatusTransition(order.status, new_status)

    previous_status = order.status
    actor_id = user.pk
    now = timezone.now()

    if new_status == Order.STATUS_ACCEPTED:
        if not user.is_staff:
            raise NotCourier("Only shop staff can accept orders.")
    elif new_status == Order.STATUS_RIDER_ACCEPTED:
        if rider_id is None:
            raise ValidationError({"rider_id": "A rider is required to accept the delivery."})
        rider = Rider.objects.select_for_update().filter(pk=rider_id).first()
        if rider is None:
            raise ValidationError({"rider_id": f"Unknown rider {rider_id}."})
        if not user.is_staff and rider.user_id != user.pk:
            raise NotCourier("You can only accept deliveries as your own rider profile.")
        if not rider.is_active or rider.status != Rider.STATUS_ONLINE:
            raise CourierUnavailable(f"Rider {rider.name} is {rider.status.lower()}.")
        order.rider = rider
        order.rider_accepted_at = now
        rider.status = Rider.STATUS_BUSY
        rider.save(update_fields=["status", "updated_at"])
        actor_id = rider.id
    elif new_status == Order.STATUS_CANCELLED:
        if not (user.is_staff or order.user_id == user.pk):
            _ensure_assigned_rider(order, user)
        order.cancelled_at = now
    else:
        _ensure_assigned_rider(order, user)
        actor_id = order.rider_id or user.pk
        if new_status == Order.STATUS_DELIVERED:
            order.delivered_at = now
            order.rider_earnings = rider_share(order.delivery_fee)

    order.status = new_status
    order.save()

    if order.is_terminal and order.rider_id:
        Rider.objects.filter(pk=order.rider_id, status=Rider.STATUS_BUSY).update(
            status=Rider.STATUS_ONLINE, updated_at=now
        )

    _announce(order, previous_status, actor_id=actor_id)
    return order


def order_snapshot(order_id):
    order = Order.objects.select_related("rider").filter(pk=order_id).first()
    if order is None:
        return None
    return build_snapshot(
        "order",
        order,
        order.rider,
        rider_locations,
        destination=order.destination_point,
    )
