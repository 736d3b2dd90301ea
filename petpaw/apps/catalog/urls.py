from django.urls import include, path

from apps.core.routers import OptionalSlashRouter

from .views import ProductViewSet, ShopViewSet

app_name = "catalog"

router = OptionalSlashRouter()
router.register(r"products", ProductViewSet, basename="product")
router.register(r"shops", ShopViewSet, basename="shop")

urlpatterns = [
    path("", include(router.urls)),
]
