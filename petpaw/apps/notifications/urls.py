from django.urls import include, path

from apps.core.routers import OptionalSlashRouter

from .views import NotificationViewSet

app_name = "notifications"

router = OptionalSlashRouter()
router.register(r"notifications", NotificationViewSet, basename="notifications")

urlpatterns = [
    path("", include(router.urls)),
]
