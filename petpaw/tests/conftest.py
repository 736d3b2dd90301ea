from decimal import Decimal

import pytest
import requests
from django.contrib.auth import get_user_model
from django.core.cache import cache
from rest_framework.authtoken.models import Token
from rest_framework.test import APIClient

from apps.accounts.models import Address
from apps.catalog.models import Product, Shop
from apps.drivers.models import Driver
from apps.pets.models import Pet
from apps.riders.models import Rider

User = get_user_model()


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture(autouse=True)
def offline_routing(monkeypatch):
    """No routing backend in tests: every route falls back to a straight line"""

    def unreachable(*args, **kwargs):
        raise requests.ConnectionError("routing backend unreachable in tests")

    monkeypatch.setattr("apps.tracking.routing_service.requests.get", unreachable)


def api_client_for(user):
    client = APIClient()
    token, _ = Token.objects.get_or_create(user=user)
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {token.key}")
    return client


@pytest.fixture
def customer(db):
    return User.objects.create_user(username="alice", password="s3cret-pass", email="alice@petpaw.test")


@pytest.fixture
def other_customer(db):
    return User.objects.create_user(username="bob", password="s3cret-pass")


@pytest.fixture
def staff_user(db):
    return User.objects.create_user(username="shopkeeper", password="s3cret-pass", is_staff=True)


@pytest.fixture
def api_client(customer):
    return api_client_for(customer)


@pytest.fixture
def other_client(other_customer):
    return api_client_for(other_customer)


@pytest.fixture
def staff_client(staff_user):
    return api_client_for(staff_user)


@pytest.fixture
def anonymous_client():
    return APIClient()


@pytest.fixture
def driver(db):
    user = User.objects.create_user(username="driver1", password="s3cret-pass")
    return Driver.objects.create(
        user=user,
        name="Dana Driver",
        phone="491510000001",
        vehicle_type="car",
        number_plate="B-PP 101",
        status=Driver.STATUS_ONLINE,
    )


@pytest.fixture
def driver_client(driver):
    return api_client_for(driver.user)


@pytest.fixture
def rider(db):
    user = User.objects.create_user(username="rider1", password="s3cret-pass")
    return Rider.objects.create(
        user=user,
        name="Rui Rider",
        phone="491520000001",
        vehicle_type="bike",
        status=Rider.STATUS_ONLINE,
    )


@pytest.fixture
def rider_client(rider):
    return api_client_for(rider.user)


@pytest.fixture
def address(customer):
    return Address.objects.create(
        user=customer,
        label="Home",
        street="Torstrasse 1",
        city="Berlin",
        latitude=Decimal("52.5290000"),
        longitude=Decimal("13.4010000"),
        is_default=True,
    )


@pytest.fixture
def shop(db):
    return Shop.objects.create(name="Paws & Claws", address="Alexanderplatz 3")


@pytest.fixture
def products(shop):
    return [
        Product.objects.create(shop=shop, name="Chew Toy", price=Decimal("4.50"), category="toys"),
        Product.objects.create(
            shop=shop, name="Salmon Kibble", price=Decimal("19.99"), category="food", is_featured=True
        ),
    ]


@pytest.fixture
def pet(customer):
    return Pet.objects.create(owner=customer, name="Mochi", species="cat", breed="BSH")


@pytest.fixture
def ride_payload():
    return {
        "pickup_location": "Torstrasse 1",
        "pickup_latitude": "52.5290000",
        "pickup_longitude": "13.4010000",
        "dropoff_location": "Vet clinic",
        "dropoff_latitude": "52.5200000",
        "dropoff_longitude": "13.4050000",
        "pet_type": "cat",
        "pet_name": "Mochi",
    }
