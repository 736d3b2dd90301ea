from rest_framework import viewsets
from rest_framework.permissions import AllowAny

from .models import Product, Shop
from .serializers import ProductSerializer, ShopSerializer


class ShopViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = Shop.objects.filter(is_active=True)
    serializer_class = ShopSerializer
    permission_classes = [AllowAny]


class ProductViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = ProductSerializer
    permission_classes = [AllowAny]

    def get_queryset(self):
        queryset = Product.objects.select_related("shop").filter(
            is_available=True, shop__is_active=True
        )
        shop = self.request.query_params.get("shop")
        if shop:
            queryset = queryset.filter(shop_id=shop)
        category = self.request.query_params.get("category")
        if category:
            queryset = queryset.filter(category__iexact=category)
        featured = self.request.query_params.get("featured")
        if featured is not None:
            queryset = queryset.filter(is_featured=featured.lower() in ("1", "true", "yes"))
        return queryset
