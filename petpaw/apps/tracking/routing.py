from django.urls import path

from .consumers import OrderTrackingConsumer, RideTrackingConsumer

websocket_urlpatterns = [
    path("ws/rides/<uuid:subject_id>/", RideTrackingConsumer.as_asgi()),
    path("ws/orders/<uuid:subject_id>/", OrderTrackingConsumer.as_asgi()),
]
