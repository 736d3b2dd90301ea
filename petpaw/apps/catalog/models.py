from django.db import models

from apps.core.models import TimeStampedModel


class Shop(TimeStampedModel):
    name = models.CharField(max_length=150)
    description = models.TextField(blank=True)
    image_url = models.URLField(blank=True)
    address = models.CharField(max_length=255, blank=True)
    latitude = models.DecimalField(max_digits=10, decimal_places=7, null=True, blank=True)
    longitude = models.DecimalField(max_digits=10, decimal_places=7, null=True, blank=True)
    rating = models.DecimalField(max_digits=2, decimal_places=1, default=0)
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "shops"
        ordering = ["name"]

    def __str__(self):
        return self.name


class Product(TimeStampedModel):
    shop = models.ForeignKey(Shop, on_delete=models.CASCADE, related_name="products")
    name = models.CharField(max_length=150)
    description = models.TextField(blank=True)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    image_url = models.URLField(blank=True)
    category = models.CharField(max_length=50, blank=True)
    is_featured = models.BooleanField(default=False)
    is_available = models.BooleanField(default=True)

    class Meta:
        db_table = "products"
        ordering = ["name"]
        indexes = [
            models.Index(fields=["shop", "is_featured"], name="products_shop_featured_idx"),
            models.Index(fields=["category"], name="products_category_idx"),
        ]

    def __str__(self):
        return f"{self.name} ({self.shop.name})"
