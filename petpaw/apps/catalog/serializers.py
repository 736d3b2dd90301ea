from rest_framework import serializers

from .models import Product, Shop


class ShopSerializer(serializers.ModelSerializer):
    class Meta:
        model = Shop
        fields = [
            "id",
            "name",
            "description",
            "image_url",
            "address",
            "latitude",
            "longitude",
            "rating",
        ]


class ProductSerializer(serializers.ModelSerializer):
    shop_name = serializers.CharField(source="shop.name", read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "shop",
            "shop_name",
            "name",
            "description",
            "price",
            "image_url",
            "category",
            "is_featured",
            "is_available",
        ]
