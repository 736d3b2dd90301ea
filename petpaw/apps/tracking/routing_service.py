"""
Route calculation using OSRM or the Google Directions API.
Both are asked for an encoded polyline; falls back to a straight line when
the backend is unavailable.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import requests
from django.conf import settings

from apps.core import polyline
from apps.core.geo import route_distance

logger = logging.getLogger(__name__)

GOOGLE_DIRECTIONS_URL = "https://maps.googleapis.com/maps/api/directions/json"

Point = Tuple[float, float]


@dataclass
class Route:
    points: List[Point]
    distance_meters: float
    duration_seconds: Optional[float] = None
    source: str = "direct"
    encoded: str = field(default="")

    def __post_init__(self):
        if not self.encoded:
            self.encoded = polyline.encode(self.points)

    @property
    def distance_km(self) -> float:
        return self.distance_meters / 1000

    def as_dict(self):
        return {
            "polyline": self.encoded,
            "distance_meters": round(self.distance_meters, 1),
            "duration_seconds": self.duration_seconds,
            "source": self.source,
        }


class RoutingService:
    timeout = 5

    def calculate_route(
        self,
        start: Point,
        end: Point,
        via_points: Optional[List[Point]] = None,
    ) -> Route:
        backend = getattr(settings, "ROUTING_BACKEND", "osrm")
        try:
            if backend == "google" and settings.GOOGLE_MAPS_API_KEY:
                route = self._google_route(start, end, via_points)
            else:
                route = self._osrm_route(start, end, via_points)
            if route is not None:
                return route
        except (requests.RequestException, ValueError, KeyError) as e:
            logger.warning(f"{backend} routing failed: {e}, using direct route")

        return self.direct_route(start, end)

    def _osrm_route(self, start, end, via_points) -> Optional[Route]:
        # OSRM uses lng,lat
        coords = [start, *(via_points or []), end]
        coords_str = ";".join(f"{lng},{lat}" for lat, lng in coords)
        url = f"{settings.OSRM_BASE_URL}/{coords_str}"

        response = requests.get(
            url,
            params={"overview": "full", "geometries": "polyline"},
            timeout=self.timeout,
        )
        response.raise_for_status()
        data = response.json()
        if data.get("code") != "Ok" or not data.get("routes"):
            logger.warning(f"OSRM returned no route: {data.get('code')}")
            return None

        best = data["routes"][0]
        encoded = best["geometry"]
        return Route(
            points=polyline.decode(encoded),
            distance_meters=float(best["distance"]),
            duration_seconds=float(best["duration"]),
            source="osrm",
            encoded=encoded,
        )

    def _google_route(self, start, end, via_points) -> Optional[Route]:
        params = {
            "origin": f"{start[0]},{start[1]}",
            "destination": f"{end[0]},{end[1]}",
            "key": settings.GOOGLE_MAPS_API_KEY,
        }
        if via_points:
            params["waypoints"] = "|".join(f"{lat},{lng}" for lat, lng in via_points)

        response = requests.get(GOOGLE_DIRECTIONS_URL, params=params, timeout=self.timeout)
        response.raise_for_status()
        data = response.json()
        if data.get("status") != "OK" or not data.get("routes"):
            logger.warning(f"Google Directions returned {data.get('status')}")
            return None

        best = data["routes"][0]
        encoded = best["overview_polyline"]["points"]
        legs = best.get("legs", [])
        return Route(
            points=polyline.decode(encoded),
            distance_meters=float(sum(leg["distance"]["value"] for leg in legs)),
            duration_seconds=float(sum(leg["duration"]["value"] for leg in legs)),
            source="google",
            encoded=encoded,
        )

    @staticmethod
    def direct_route(start: Point, end: Point, num_points: int = 50) -> Route:
        """Straight line with intermediate points"""
        points = []
        for i in range(num_points + 1):
            ratio = i / num_points
            points.append(
                (
                    start[0] + (end[0] - start[0]) * ratio,
                    start[1] + (end[1] - start[1]) * ratio,
                )
            )
        return Route(points=points, distance_meters=route_distance(points))


routing_service = RoutingService()
