from unittest import mock

import pytest
import requests

from apps.core import polyline
from apps.core.geo import haversine_distance
from apps.tracking.routing_service import RoutingService

START = (52.5290, 13.4010)
END = (52.5200, 13.4050)


def fake_response(payload):
    response = mock.Mock()
    response.json.return_value = payload
    response.raise_for_status.return_value = None
    return response


@pytest.fixture
def service():
    return RoutingService()


def test_direct_route_has_fifty_segments(service):
    route = service.direct_route(START, END)
    assert len(route.points) == 51
    assert route.points[0] == START
    assert route.points[-1] == pytest.approx(END)
    assert route.source == "direct"
    assert route.distance_meters == pytest.approx(haversine_distance(*START, *END), rel=1e-6)


def test_direct_route_is_encoded(service):
    route = service.direct_route(START, END, num_points=2)
    assert polyline.decode(route.encoded) == [
        (52.529, 13.401),
        (52.5245, 13.403),
        (52.52, 13.405),
    ]


def test_osrm_route(settings, service):
    settings.ROUTING_BACKEND = "osrm"
    settings.OSRM_BASE_URL = "http://osrm.test/route/v1/driving"
    encoded = polyline.encode([START, (52.525, 13.402), END])
    payload = {
        "code": "Ok",
        "routes": [{"geometry": encoded, "distance": 1234.5, "duration": 300.0}],
    }
    with mock.patch(
        "apps.tracking.routing_service.requests.get", return_value=fake_response(payload)
    ) as get:
        route = service.calculate_route(START, END)

    url = get.call_args[0][0]
    assert url == "http://osrm.test/route/v1/driving/13.401,52.529;13.405,52.52"
    assert get.call_args[1]["params"]["geometries"] == "polyline"
    assert route.source == "osrm"
    assert route.encoded == encoded
    assert route.distance_km == pytest.approx(1.2345)
    assert route.duration_seconds == 300.0
    assert len(route.points) == 3


def test_osrm_without_route_falls_back(settings, service):
    settings.ROUTING_BACKEND = "osrm"
    with mock.patch(
        "apps.tracking.routing_service.requests.get",
        return_value=fake_response({"code": "NoRoute", "routes": []}),
    ):
        route = service.calculate_route(START, END)
    assert route.source == "direct"


def test_network_error_falls_back(service):
    # the autouse fixture makes every request fail
    route = service.calculate_route(START, END)
    assert route.source == "direct"
    assert len(route.points) == 51


def test_google_route_sums_legs(settings, service):
    settings.ROUTING_BACKEND = "google"
    settings.GOOGLE_MAPS_API_KEY = "test-key"
    encoded = polyline.encode([START, END])
    payload = {
        "status": "OK",
        "routes": [
            {
                "overview_polyline": {"points": encoded},
                "legs": [
                    {"distance": {"value": 600}, "duration": {"value": 120}},
                    {"distance": {"value": 500}, "duration": {"value": 100}},
                ],
            }
        ],
    }
    with mock.patch(
        "apps.tracking.routing_service.requests.get", return_value=fake_response(payload)
    ) as get:
        route = service.calculate_route(START, END, via_points=[(52.525, 13.402)])

    params = get.call_args[1]["params"]
    assert params["origin"] == "52.529,13.401"
    assert params["waypoints"] == "52.525,13.402"
    assert route.source == "google"
    assert route.distance_meters == 1100
    assert route.duration_seconds == 220


def test_google_without_key_uses_osrm(settings, service):
    settings.ROUTING_BACKEND = "google"
    settings.GOOGLE_MAPS_API_KEY = ""
    with mock.patch(
        "apps.tracking.routing_service.requests.get",
        side_effect=requests.Timeout("slow"),
    ) as get:
        route = service.calculate_route(START, END)
    assert get.call_args[0][0].startswith(settings.OSRM_BASE_URL)
    assert route.source == "direct"
