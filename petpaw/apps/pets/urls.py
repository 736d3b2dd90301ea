from django.urls import include, path

from apps.core.routers import OptionalSlashRouter

from .views import (
    DiaryEntryDetailView,
    DiaryEntryListView,
    ExpiringMedicalRecordsView,
    PetMedicalRecordsView,
    PetPrescriptionsView,
    PetViewSet,
    RefillRequestCreateView,
    RefillRequestDecisionView,
    RefillRequestHistoryView,
    UserPetsView,
)

app_name = "pets"

router = OptionalSlashRouter()
router.register(r"pets", PetViewSet, basename="pet")

urlpatterns = [
    path("pets/user/<int:user_id>", UserPetsView.as_view(), name="user-pets"),
    path("pets/<int:pet_id>/medical-records", PetMedicalRecordsView.as_view(), name="medical-records"),
    path("medical-records/expiring", ExpiringMedicalRecordsView.as_view(), name="expiring-records"),
    path("prescriptions/refill/request", RefillRequestCreateView.as_view(), name="refill-request"),
    path("prescriptions/<int:pet_id>", PetPrescriptionsView.as_view(), name="prescriptions"),
    path(
        "prescriptions/<int:prescription_id>/refill-requests",
        RefillRequestHistoryView.as_view(),
        name="refill-history",
    ),
    path("refill-requests/<int:refill_id>", RefillRequestDecisionView.as_view(), name="refill-decision"),
    path("pet-diary/<int:pet_id>", DiaryEntryListView.as_view(), name="diary"),
    path("pet-diary/<int:pet_id>/<int:entry_id>", DiaryEntryDetailView.as_view(), name="diary-entry"),
    path("", include(router.urls)),
]
