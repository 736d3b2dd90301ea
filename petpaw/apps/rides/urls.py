from django.urls import include, path

from apps.core.routers import OptionalSlashRouter

from .views import DriverRidesView, RideViewSet, UserRidesView

app_name = "rides"

router = OptionalSlashRouter()
router.register(r"pet-taxi/rides", RideViewSet, basename="ride")

urlpatterns = [
    path("pet-taxi/rides/user/<int:user_id>", UserRidesView.as_view(), name="user-rides"),
    path("pet-taxi/rides/driver/<uuid:driver_id>", DriverRidesView.as_view(), name="driver-rides"),
    path("", include(router.urls)),
]
