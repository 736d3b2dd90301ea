from django.urls import path

from .views import (
    RiderDetailView,
    RiderLocationUpdateView,
    RiderLocationView,
    RiderLoginView,
    RiderOrderHistoryView,
    RiderStatusView,
)

app_name = "riders"

urlpatterns = [
    path("riders/login", RiderLoginView.as_view(), name="login"),
    path("riders/location", RiderLocationUpdateView.as_view(), name="location-update"),
    path("riders/location/<uuid:courier_id>", RiderLocationView.as_view(), name="location"),
    path("riders/<uuid:courier_id>", RiderDetailView.as_view(), name="detail"),
    path("riders/<uuid:courier_id>/status", RiderStatusView.as_view(), name="status"),
    path("orders/history", RiderOrderHistoryView.as_view(), name="order-history"),
]
