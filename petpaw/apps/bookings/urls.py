from django.urls import include, path

from apps.core.routers import OptionalSlashRouter

from .views import (
    AppointmentSlotsView,
    AppointmentViewSet,
    BookedAppointmentsView,
    GroomingBookingViewSet,
    GroomingHistoryView,
    GroomingServiceViewSet,
    GroomingSlotsView,
    HotelBookingViewSet,
    PetAppointmentsView,
    PetHotelViewSet,
    UserAppointmentsView,
    VeterinarianViewSet,
    VetServiceViewSet,
)

app_name = "bookings"

router = OptionalSlashRouter()
router.register(r"veterinarians", VeterinarianViewSet, basename="veterinarian")
router.register(r"appointments/services", VetServiceViewSet, basename="vet-service")
router.register(r"appointments/appointments", AppointmentViewSet, basename="appointment")
# bookings before hotels so "bookings" is never read as a hotel id
router.register(r"pet-hotels/bookings", HotelBookingViewSet, basename="hotel-booking")
router.register(r"pet-hotels", PetHotelViewSet, basename="pet-hotel")
router.register(r"pet-grooming/services", GroomingServiceViewSet, basename="grooming-service")
router.register(r"pet-grooming/bookings", GroomingBookingViewSet, basename="grooming-booking")

urlpatterns = [
    path("appointments/available-slots", AppointmentSlotsView.as_view(), name="appointment-slots"),
    path("appointments/booked", BookedAppointmentsView.as_view(), name="booked-appointments"),
    path("appointments/user/<int:user_id>", UserAppointmentsView.as_view(), name="user-appointments"),
    path("appointments/pet/<int:pet_id>", PetAppointmentsView.as_view(), name="pet-appointments"),
    path("pet-grooming/available-slots", GroomingSlotsView.as_view(), name="grooming-slots"),
    path(
        "pet-grooming/booking-history/<int:user_id>",
        GroomingHistoryView.as_view(),
        name="grooming-history",
    ),
    path("", include(router.urls)),
]
