from django.conf import settings
from django.db import models

from apps.core.models import TimeStampedUUIDModel


class Order(TimeStampedUUIDModel):
    STATUS_PENDING = "PENDING"
    STATUS_ACCEPTED = "ACCEPTED"
    STATUS_RIDER_ACCEPTED = "RIDER_ACCEPTED"
    STATUS_ON_THE_WAY = "ON_THE_WAY"
    STATUS_DELIVERED = "DELIVERED"
    STATUS_CANCELLED = "CANCELLED"
    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_ACCEPTED, "Accepted"),
        (STATUS_RIDER_ACCEPTED, "Rider Accepted"),
        (STATUS_ON_THE_WAY, "On The Way"),
        (STATUS_DELIVERED, "Delivered"),
        (STATUS_CANCELLED, "Cancelled"),
    ]
    TRANSITIONS = {
        STATUS_PENDING: (STATUS_ACCEPTED, STATUS_CANCELLED),
        STATUS_ACCEPTED: (STATUS_RIDER_ACCEPTED, STATUS_CANCELLED),
        STATUS_RIDER_ACCEPTED: (STATUS_ON_THE_WAY, STATUS_CANCELLED),
        STATUS_ON_THE_WAY: (STATUS_DELIVERED,),
    }
    TERMINAL_STATUSES = (STATUS_DELIVERED, STATUS_CANCELLED)
    ACTIVE_STATUSES = (STATUS_RIDER_ACCEPTED, STATUS_ON_THE_WAY)

    order_number = models.CharField(max_length=20, unique=True)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="orders"
    )
    rider = models.ForeignKey(
        "riders.Rider",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="orders",
    )
    delivery_address = models.ForeignKey(
        "accounts.Address",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="orders",
    )
    delivery_address_text = models.CharField(max_length=255, blank=True)
    delivery_latitude = models.DecimalField(max_digits=10, decimal_places=7, null=True, blank=True)
    delivery_longitude = models.DecimalField(max_digits=10, decimal_places=7, null=True, blank=True)
    subtotal = models.DecimalField(max_digits=10, decimal_places=2)
    delivery_fee = models.DecimalField(max_digits=10, decimal_places=2)
    total_amount = models.DecimalField(max_digits=10, decimal_places=2)
    rider_earnings = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)
    special_instructions = models.TextField(blank=True)
    rider_accepted_at = models.DateTimeField(null=True, blank=True)
    delivered_at = models.DateTimeField(null=True, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "orders"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status"], name="orders_status_idx"),
            models.Index(fields=["user", "-created_at"], name="orders_user_recent_idx"),
            models.Index(fields=["rider", "status"], name="orders_rider_status_idx"),
        ]

    def __str__(self):
        return f"Order #{self.order_number} - {self.status}"

    def can_transition_to(self, new_status):
        return new_status in self.TRANSITIONS.get(self.status, ())

    @property
    def is_terminal(self):
        return self.status in self.TERMINAL_STATUSES

    @property
    def destination_point(self):
        if self.delivery_latitude is None or self.delivery_longitude is None:
            return None
        return float(self.delivery_latitude), float(self.delivery_longitude)


class OrderItem(models.Model):
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="items")
    product = models.ForeignKey(
        "catalog.Product",
        on_delete=models.SET_NULL,
        null=True,
        related_name="order_items",
    )
    product_name = models.CharField(max_length=150)
    unit_price = models.DecimalField(max_digits=10, decimal_places=2)
    quantity = models.PositiveIntegerField()

    class Meta:
        db_table = "order_items"
        ordering = ["id"]

    @property
    def line_total(self):
        return self.unit_price * self.quantity
