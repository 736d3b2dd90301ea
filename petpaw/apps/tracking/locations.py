import logging
from typing import Any, Callable, Dict, Optional, Tuple

from django.conf import settings
from django.utils import timezone

from apps.core.exceptions import ServiceUnavailable
from apps.core.geo import SignificantChangeFilter
from infrastructure.cache import (
    get_cache_key_value,
    set_cache_key,
    update_key_ttl,
)

from .broadcast import publish_location

logger = logging.getLogger(__name__)


class CourierLocationService:
    """
    Latest-location store for one courier type.

    The last accepted location lives in the cache under
    ``<kind>:location:<courier_id>`` and is the reference point for the
    significant-change filter, so every worker process gates against the
    same sample.
    """

    def __init__(
        self,
        kind: str,
        history_model,
        courier_field: str,
        active_subject: Optional[Callable] = None,
    ):
        self.kind = kind
        self.history_model = history_model
        self.courier_field = courier_field
        self.active_subject = active_subject

    def cache_key(self, courier_id) -> str:
        return f"{self.kind}:location:{courier_id}"

    def get_location(self, courier_id) -> Optional[Dict[str, Any]]:
        try:
            return get_cache_key_value(self.cache_key(courier_id))
        except ValueError as e:
            raise ServiceUnavailable("Location store is unavailable.") from e

    def update_location(
        self,
        courier,
        latitude: float,
        longitude: float,
        accuracy=None,
        speed=None,
        heading=None,
    ) -> Tuple[bool, Optional[Dict[str, Any]]]:
        """
        Returns ``(updated, location)``. An update within the threshold of
        the cached location only refreshes its TTL and returns the cached one.
        """
        key = self.cache_key(courier.id)
        ttl = settings.COURIER_LOCATION_TTL
        latitude, longitude = float(latitude), float(longitude)

        cached = self.get_location(courier.id)
        change_filter = SignificantChangeFilter(settings.LOCATION_SIGNIFICANT_CHANGE_METERS)
        if cached:
            change_filter.last_location = (cached["latitude"], cached["longitude"])

        if not change_filter.is_significant(latitude, longitude):
            try:
                update_key_ttl(key, ttl)
            except ValueError as e:
                raise ServiceUnavailable("Location store is unavailable.") from e
            logger.debug(f"Ignoring insignificant move for {self.kind} {courier.id}")
            return False, cached

        subject = self.active_subject(courier) if self.active_subject else None
        location = {
            "latitude": latitude,
            "longitude": longitude,
            "accuracy": float(accuracy) if accuracy is not None else None,
            "speed": float(speed) if speed is not None else None,
            "heading": float(heading) if heading is not None else None,
            "timestamp": timezone.now().isoformat(),
        }
        try:
            set_cache_key(key, location, ttl)
        except ValueError as e:
            raise ServiceUnavailable("Location store is unavailable.") from e

        history_fields = {
            self.courier_field: courier,
            "latitude": round(latitude, 7),
            "longitude": round(longitude, 7),
            "accuracy": accuracy,
            "speed": speed,
            "heading": heading,
        }
        if subject:
            history_fields[subject[0]] = subject[2]
        self.history_model.objects.create(**history_fields)

        publish_location(
            self.kind,
            courier.id,
            location,
            subject=(subject[0], subject[1]) if subject else None,
        )
        logger.info(f"{self.kind} {courier.id} moved to ({latitude}, {longitude})")
        return True, location
