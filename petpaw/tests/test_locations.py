from unittest import mock

import pytest

from apps.drivers.models import DriverLocation
from apps.drivers.services import driver_locations
from apps.riders.models import RiderLocation
from apps.rides.models import Ride

BERLIN = {"latitude": 52.52, "longitude": 13.405}
# ~5.5 m and ~22 m north of BERLIN
NUDGE = {"latitude": 52.52005, "longitude": 13.405}
MOVE = {"latitude": 52.5202, "longitude": 13.405}


@pytest.mark.django_db
class TestDriverLocation:
    def url(self, driver):
        return f"/api/v1/drivers/{driver.pk}/location"

    def test_significant_change_gate(self, driver, driver_client):
        first = driver_client.put(self.url(driver), {**BERLIN, "speed": 4.2}, format="json")
        assert first.status_code == 200
        assert first.data["updated"] is True
        assert first.data["location"]["speed"] == 4.2

        nudge = driver_client.put(self.url(driver), NUDGE, format="json")
        assert nudge.data["updated"] is False
        assert nudge.data["location"]["latitude"] == BERLIN["latitude"]

        moved = driver_client.put(self.url(driver), MOVE, format="json")
        assert moved.data["updated"] is True
        assert DriverLocation.objects.filter(driver=driver).count() == 2

    def test_latest_location_is_cached(self, driver, driver_client, api_client):
        driver_client.put(self.url(driver), BERLIN, format="json")
        response = api_client.get(f"/api/v1/pet-taxi/driver-location/{driver.pk}")
        assert response.status_code == 200
        assert response.data["driver_id"] == str(driver.pk)
        assert response.data["latitude"] == BERLIN["latitude"]
        assert driver_locations.get_location(driver.pk)["longitude"] == BERLIN["longitude"]

    def test_no_location_yet(self, driver, api_client):
        assert api_client.get(f"/api/v1/pet-taxi/driver-location/{driver.pk}").status_code == 404

    def test_cache_outage_is_reported(self, driver, api_client):
        def down(key):
            raise ValueError(f"Cache get error for key: {key}")

        with mock.patch("apps.tracking.locations.get_cache_key_value", down):
            response = api_client.get(f"/api/v1/pet-taxi/driver-location/{driver.pk}")
        assert response.status_code == 503

    def test_cache_outage_while_refreshing_is_reported(self, driver, driver_client):
        driver_client.put(self.url(driver), BERLIN, format="json")

        def down(key, ttl):
            raise ValueError(f"Cache TTL update error for key: {key}")

        with mock.patch("apps.tracking.locations.update_key_ttl", down):
            response = driver_client.put(self.url(driver), BERLIN, format="json")
        assert response.status_code == 503

    def test_only_the_driver_reports(self, driver, api_client):
        assert api_client.put(self.url(driver), BERLIN, format="json").status_code == 403

    @pytest.mark.parametrize(
        "payload",
        [
            {"latitude": 91, "longitude": 13.4},
            {"latitude": 52.5, "longitude": -181},
            {**BERLIN, "heading": 400},
            {"latitude": 52.5},
        ],
    )
    def test_invalid_samples_are_rejected(self, driver, driver_client, payload):
        assert driver_client.put(self.url(driver), payload, format="json").status_code == 400

    def test_samples_during_a_ride_are_linked_to_it(self, driver, customer):
        ride = Ride.objects.create(
            user=customer,
            driver=driver,
            pickup_location="A",
            pickup_latitude=52.529,
            pickup_longitude=13.401,
            dropoff_location="B",
            dropoff_latitude=52.52,
            dropoff_longitude=13.405,
            pet_type="dog",
            fare="6.50",
            status=Ride.STATUS_ACCEPTED,
        )
        with mock.patch("apps.tracking.locations.publish_location") as publish:
            updated, location = driver_locations.update_location(driver, **BERLIN)

        assert updated is True
        assert DriverLocation.objects.get(driver=driver).ride == ride
        publish.assert_called_once_with("driver", driver.id, location, subject=("ride", ride.id))

    def test_insignificant_move_keeps_cached_location_alive(self, driver):
        driver_locations.update_location(driver, **BERLIN)
        with mock.patch("apps.tracking.locations.update_key_ttl") as touch:
            updated, _ = driver_locations.update_location(driver, **NUDGE)
        assert updated is False
        touch.assert_called_once()


@pytest.mark.django_db
class TestRiderLocation:
    def test_rider_posts_with_id_in_body(self, rider, rider_client):
        response = rider_client.post(
            "/api/v1/riders/location", {"rider_id": str(rider.pk), **BERLIN}, format="json"
        )
        assert response.status_code == 200
        assert response.data["updated"] is True
        assert RiderLocation.objects.filter(rider=rider).count() == 1

        response = rider_client.get(f"/api/v1/riders/location/{rider.pk}")
        assert response.data["rider_id"] == str(rider.pk)

    def test_rider_id_must_be_a_uuid(self, rider_client):
        response = rider_client.post("/api/v1/riders/location", {"rider_id": "7", **BERLIN}, format="json")
        assert response.status_code == 400


@pytest.mark.django_db
class TestCourierStatus:
    def test_go_online_and_offline(self, driver, driver_client):
        url = f"/api/v1/drivers/{driver.pk}/status"
        response = driver_client.put(url, {"status": "OFFLINE"}, format="json")
        assert response.status_code == 200
        assert response.data["status"] == "OFFLINE"

    def test_busy_driver_cannot_go_offline(self, driver, driver_client):
        driver.status = driver.STATUS_BUSY
        driver.save()
        response = driver_client.put(f"/api/v1/drivers/{driver.pk}/status", {"status": "OFFLINE"}, format="json")
        assert response.status_code == 409

    def test_courier_login(self, driver, anonymous_client):
        response = anonymous_client.post(
            "/api/v1/drivers/login", {"username": "driver1", "password": "s3cret-pass"}, format="json"
        )
        assert response.status_code == 200
        assert response.data["driver_id"] == str(driver.pk)
        assert response.data["token_type"] == "bearer"

    def test_customer_cannot_log_in_as_rider(self, customer, anonymous_client):
        response = anonymous_client.post(
            "/api/v1/riders/login", {"username": "alice", "password": "s3cret-pass"}, format="json"
        )
        assert response.status_code == 403
