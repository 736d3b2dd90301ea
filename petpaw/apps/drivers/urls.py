from django.urls import path

from .views import DriverDetailView, DriverLocationView, DriverLoginView, DriverStatusView

app_name = "drivers"

urlpatterns = [
    path("drivers/login", DriverLoginView.as_view(), name="login"),
    path("drivers/<uuid:courier_id>", DriverDetailView.as_view(), name="detail"),
    path("drivers/<uuid:courier_id>/status", DriverStatusView.as_view(), name="status"),
    path("drivers/<uuid:courier_id>/location", DriverLocationView.as_view(), name="location"),
    path(
        "pet-taxi/driver-location/<uuid:courier_id>",
        DriverLocationView.as_view(),
        name="current-location",
    ),
]
