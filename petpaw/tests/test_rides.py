from decimal import Decimal

import pytest

from apps.drivers.models import Driver
from apps.events.models import TrackingEvent
from apps.notifications.models import Notification
from apps.rides.models import Ride
from apps.rides.services import quote_fare
from apps.tracking.routing_service import RoutingService

RIDES_URL = "/api/v1/pet-taxi/rides"


@pytest.fixture
def ride(api_client, ride_payload):
    response = api_client.post(RIDES_URL, ride_payload, format="json")
    assert response.status_code == 201, response.data
    return Ride.objects.get(pk=response.data["id"])


def accept(client, ride, driver):
    return client.post(f"{RIDES_URL}/{ride.pk}/accept?driver_id={driver.pk}")


def set_status(client, ride, new_status, driver=None):
    payload = {"status": new_status}
    if driver is not None:
        payload["driver_id"] = str(driver.pk)
    return client.put(f"{RIDES_URL}/{ride.pk}/update_status", payload, format="json")


def test_fare_is_base_plus_distance():
    assert quote_fare(0) == Decimal("5.00")
    assert quote_fare(2) == Decimal("8.00")
    assert quote_fare(1.333) == Decimal("7.00")


@pytest.mark.django_db
class TestCreateRide:
    def test_create_prices_and_routes_the_ride(self, api_client, ride_payload, customer):
        response = api_client.post(RIDES_URL, ride_payload, format="json")

        assert response.status_code == 201
        route = RoutingService.direct_route((52.529, 13.401), (52.52, 13.405))
        distance = round(route.distance_km, 2)
        assert Decimal(response.data["distance_km"]) == Decimal(str(distance))
        assert Decimal(response.data["fare"]) == quote_fare(distance)
        assert response.data["route_polyline"] == route.encoded
        assert response.data["status"] == Ride.STATUS_PENDING
        assert response.data["user"] == customer.pk

    def test_client_fare_is_kept(self, api_client, ride_payload):
        response = api_client.post(RIDES_URL, {**ride_payload, "fare": "12.00"}, format="json")
        assert Decimal(response.data["fare"]) == Decimal("12.00")

    def test_extra_coordinate_precision_is_rounded(self, api_client, ride_payload):
        payload = {**ride_payload, "pickup_latitude": 52.529000012345}
        response = api_client.post(RIDES_URL, payload, format="json")
        assert response.status_code == 201

    def test_out_of_range_coordinates_are_rejected(self, api_client, ride_payload):
        response = api_client.post(RIDES_URL, {**ride_payload, "dropoff_latitude": "91"}, format="json")
        assert response.status_code == 400
        assert "dropoff_latitude" in response.data

    def test_requires_authentication(self, anonymous_client, ride_payload):
        response = anonymous_client.post(RIDES_URL, ride_payload, format="json")
        assert response.status_code == 401

    def test_creation_is_recorded(self, ride):
        event = TrackingEvent.objects.get(subject_id=ride.pk)
        assert event.subject_type == "ride"
        assert event.event_data["status"] == Ride.STATUS_PENDING


@pytest.mark.django_db
class TestRideLifecycle:
    def test_full_trip(self, ride, driver, driver_client, customer):
        response = accept(driver_client, ride, driver)
        assert response.status_code == 200
        assert response.data["status"] == Ride.STATUS_ACCEPTED
        assert response.data["driver"]["id"] == str(driver.pk)
        driver.refresh_from_db()
        assert driver.status == Driver.STATUS_BUSY

        assert set_status(driver_client, ride, Ride.STATUS_IN_PROGRESS, driver).status_code == 200
        response = set_status(driver_client, ride, Ride.STATUS_COMPLETED, driver)
        assert response.status_code == 200

        ride.refresh_from_db()
        assert ride.status == Ride.STATUS_COMPLETED
        assert ride.accepted_at and ride.started_at and ride.completed_at
        driver.refresh_from_db()
        assert driver.status == Driver.STATUS_ONLINE

        titles = set(Notification.objects.filter(user=customer).values_list("title", flat=True))
        assert titles == {"Ride completed", "Ride started", "Driver on the way"}
        assert TrackingEvent.objects.filter(subject_id=ride.pk).count() == 4

    def test_offline_driver_cannot_accept(self, ride, driver, driver_client):
        Driver.objects.filter(pk=driver.pk).update(status=Driver.STATUS_OFFLINE)
        response = accept(driver_client, ride, driver)
        assert response.status_code == 409
        assert response.data["detail"].code == "courier_unavailable"

    def test_ride_cannot_be_accepted_twice(self, ride, driver, driver_client, staff_client):
        accept(driver_client, ride, driver)
        Driver.objects.filter(pk=driver.pk).update(status=Driver.STATUS_ONLINE)
        response = accept(staff_client, ride, driver)
        assert response.status_code == 409

    def test_driver_cannot_accept_as_someone_else(self, ride, driver, api_client):
        response = accept(api_client, ride, driver)
        assert response.status_code == 403

    def test_customer_can_cancel_pending_ride(self, ride, api_client):
        response = set_status(api_client, ride, Ride.STATUS_CANCELLED)
        assert response.status_code == 200
        assert response.data["cancelled_at"] is not None

    def test_customer_cannot_start_ride(self, ride, api_client):
        response = set_status(api_client, ride, Ride.STATUS_IN_PROGRESS)
        assert response.status_code == 403

    def test_unassigned_driver_cannot_update(self, ride, driver, driver_client):
        response = set_status(driver_client, ride, Ride.STATUS_IN_PROGRESS, driver)
        assert response.status_code == 403

    def test_cannot_skip_in_progress(self, ride, driver, driver_client):
        accept(driver_client, ride, driver)
        response = set_status(driver_client, ride, Ride.STATUS_COMPLETED, driver)
        assert response.status_code == 409

    def test_completed_ride_cannot_be_cancelled(self, ride, driver, driver_client):
        accept(driver_client, ride, driver)
        set_status(driver_client, ride, Ride.STATUS_IN_PROGRESS, driver)
        set_status(driver_client, ride, Ride.STATUS_COMPLETED, driver)
        response = set_status(driver_client, ride, Ride.STATUS_CANCELLED, driver)
        assert response.status_code == 409

    def test_cancelling_frees_the_driver(self, ride, driver, driver_client):
        accept(driver_client, ride, driver)
        set_status(driver_client, ride, Ride.STATUS_CANCELLED, driver)
        driver.refresh_from_db()
        assert driver.status == Driver.STATUS_ONLINE

    def test_status_is_broadcast_after_commit(self, ride, driver, driver_client, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks() as callbacks:
            accept(driver_client, ride, driver)
        # tracking event publish and the WebSocket status push
        assert len(callbacks) == 2


@pytest.mark.django_db
class TestRideListings:
    def test_customers_only_see_their_rides(self, ride, other_client):
        assert other_client.get(RIDES_URL).data == []
        assert other_client.get(f"{RIDES_URL}/{ride.pk}").status_code == 404

    def test_status_filter(self, ride, api_client):
        assert len(api_client.get(RIDES_URL, {"status": "PENDING,ACCEPTED"}).data) == 1
        assert api_client.get(RIDES_URL, {"status": "COMPLETED"}).data == []

    def test_user_rides(self, ride, api_client, customer, other_customer):
        assert len(api_client.get(f"{RIDES_URL}/user/{customer.pk}").data) == 1
        assert api_client.get(f"{RIDES_URL}/user/{other_customer.pk}").status_code == 403

    def test_driver_history_defaults_to_completed(self, ride, driver, driver_client):
        accept(driver_client, ride, driver)
        url = f"{RIDES_URL}/driver/{driver.pk}"
        assert driver_client.get(url).data == []
        assert len(driver_client.get(url, {"status": "ACCEPTED"}).data) == 1
