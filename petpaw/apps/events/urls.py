from django.urls import include, path

from apps.core.routers import OptionalSlashRouter

from .views import TrackingEventViewSet

app_name = "events"

router = OptionalSlashRouter()
router.register(r"events", TrackingEventViewSet, basename="events")

urlpatterns = [
    path("", include(router.urls)),
]
