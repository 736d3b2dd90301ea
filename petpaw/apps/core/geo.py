"""
Distance helpers and the significant-change filter used to gate courier
location updates.
"""
import math
from typing import Optional, Tuple

EARTH_RADIUS_METERS = 6371e3


def haversine_distance(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance between two points, in metres"""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lng2 - lng1)

    a = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_METERS * c


def route_distance(points) -> float:
    """Total length of a path of (lat, lng) points, in metres"""
    if len(points) < 2:
        return 0.0
    return sum(
        haversine_distance(a[0], a[1], b[0], b[1]) for a, b in zip(points, points[1:])
    )


class SignificantChangeFilter:
    """
    Accepts a location sample only when it is more than ``threshold`` metres
    away from the last accepted sample. The first sample is always accepted.
    """

    def __init__(self, threshold: float = 10.0):
        self.threshold = threshold
        self.last_location: Optional[Tuple[float, float]] = None

    def is_significant(self, lat: float, lng: float) -> bool:
        if self.last_location is None:
            self.last_location = (lat, lng)
            return True

        distance = haversine_distance(
            self.last_location[0], self.last_location[1], lat, lng
        )
        if distance > self.threshold:
            self.last_location = (lat, lng)
            return True
        return False

    def reset(self):
        self.last_location = None
