from django.urls import include, path

urlpatterns = [
    path("", include("apps.accounts.urls")),
    path("", include("apps.drivers.urls")),
    path("", include("apps.riders.urls")),
    path("", include("apps.rides.urls")),
    path("", include("apps.catalog.urls")),
    path("", include("apps.orders.urls")),
    path("", include("apps.tracking.urls")),
    path("", include("apps.pets.urls")),
    path("", include("apps.bookings.urls")),
    path("pet_tamagotchi/", include("apps.tamagotchi.urls")),
    path("", include("apps.events.urls")),
    path("", include("apps.notifications.urls")),
]
