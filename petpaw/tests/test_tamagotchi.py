from datetime import timedelta

import pytest
from django.utils import timezone

from apps.tamagotchi import services
from apps.tamagotchi.models import VirtualPet

PETS_URL = "/api/v1/pet_tamagotchi/virtual_pets"


@pytest.fixture
def virtual_pet(customer):
    return VirtualPet.objects.create(user=customer, name="Pixel")


def age(pet, days):
    VirtualPet.objects.filter(pk=pet.pk).update(created_at=timezone.now() - timedelta(days=days))
    pet.refresh_from_db()
    return pet


@pytest.mark.parametrize(
    "stats, mood",
    [
        ({"hunger": 20, "cleanliness": 10, "happiness": 90}, "hungry"),
        ({"hunger": 50, "cleanliness": 10, "happiness": 90}, "dirty"),
        ({"hunger": 50, "cleanliness": 50, "happiness": 71}, "happy"),
        ({"hunger": 30, "cleanliness": 30, "happiness": 70}, "normal"),
    ],
)
def test_mood(stats, mood):
    assert VirtualPet(**stats).mood == mood


def test_stats_are_clamped():
    pet = VirtualPet(hunger=95, energy=5)
    pet.adjust(hunger=20, energy=-10)
    assert pet.hunger == 100
    assert pet.energy == 0


@pytest.mark.django_db
class TestVirtualPetApi:
    def test_create_unlocks_first_day_trophy(self, api_client, customer):
        response = api_client.post(f"{PETS_URL}/", {"name": "Pixel", "type": "BSH"}, format="json")
        assert response.status_code == 201
        assert response.data["type"] == "BSH"
        assert response.data["day_count"] == 1
        assert response.data["mood"] == "normal"

        pet = VirtualPet.objects.get(pk=response.data["id"])
        assert list(pet.trophies.values_list("name", flat=True)) == ["New Friend"]
        assert pet.level == 1

    def test_actions(self, api_client, virtual_pet):
        response = api_client.post(f"{PETS_URL}/{virtual_pet.pk}/act", {"action": "feed"}, format="json")
        assert response.status_code == 200
        assert response.data["hunger"] == 70
        assert response.data["happiness"] == 55

        response = api_client.post(f"{PETS_URL}/{virtual_pet.pk}/act", {"action": "dance"}, format="json")
        assert response.status_code == 400

    def test_sync_rejects_out_of_range_stats(self, api_client, virtual_pet):
        url = f"{PETS_URL}/{virtual_pet.pk}"
        assert api_client.patch(url, {"happiness": 101}, format="json").status_code == 400
        assert api_client.patch(url, {"happiness": 80}, format="json").data["mood"] == "happy"

    def test_steps(self, api_client, virtual_pet):
        url = f"{PETS_URL}/{virtual_pet.pk}"
        api_client.post(f"{url}/update_steps", {"steps": 600}, format="json")
        response = api_client.post(f"{url}/update_steps", {"steps": 700}, format="json")
        assert response.data["total_steps"] == 1300
        assert api_client.get(f"{url}/total_steps").data["total_steps"] == 1300
        assert api_client.post(f"{url}/update_steps", {"steps": -1}, format="json").status_code == 400

    def test_check_trophies_is_idempotent(self, api_client, virtual_pet):
        age(virtual_pet, 7)
        services.add_steps(virtual_pet, 5000)
        url = f"{PETS_URL}/{virtual_pet.pk}/check-trophies"

        first = api_client.post(url, format="json").data
        assert {t["name"] for t in first["unlocked"]} == {
            "First Steps",
            "Walk in the Park",
            "New Friend",
            "Bonding Time",
        }
        assert first["level"] == 4

        second = api_client.post(url, format="json").data
        assert second["unlocked"] == []
        assert second["trophy_count"] == 4

    def test_level_is_capped_at_ten(self, virtual_pet):
        age(virtual_pet, 365)
        pet = services.add_steps(virtual_pet, 100000)
        unlocked = services.check_trophies(pet)
        assert len(unlocked) == 10
        assert pet.level == 10

    def test_manual_trophy_must_be_earned(self, api_client, virtual_pet):
        url = f"{PETS_URL}/{virtual_pet.pk}/trophies/"
        assert api_client.post(url, {"name": "Marathon Master"}, format="json").status_code == 400
        response = api_client.post(url, {"name": "New Friend"}, format="json")
        assert response.status_code == 201
        assert response.data["icon"] == "🐣"
        assert [t["name"] for t in api_client.get(url).data] == ["New Friend"]

    def test_user_pets(self, api_client, other_client, virtual_pet, customer):
        assert len(api_client.get(f"/api/v1/pet_tamagotchi/users/{customer.pk}/virtual_pets/").data) == 1
        assert other_client.get(f"{PETS_URL}/{virtual_pet.pk}").status_code == 404

    def test_let_go(self, api_client, virtual_pet):
        assert api_client.delete(f"{PETS_URL}/{virtual_pet.pk}").status_code == 204
        assert not VirtualPet.objects.filter(pk=virtual_pet.pk).exists()
