from django.urls import include, path

from apps.core.routers import OptionalSlashRouter

from .views import UserVirtualPetsView, VirtualPetViewSet

app_name = "tamagotchi"

router = OptionalSlashRouter()
router.register(r"virtual_pets", VirtualPetViewSet, basename="virtual-pet")

urlpatterns = [
    path("users/<int:user_id>/virtual_pets/", UserVirtualPetsView.as_view(), name="user-virtual-pets"),
    path("", include(router.urls)),
]
