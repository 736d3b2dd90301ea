"""
Client-side tracking helpers: poll a ride/order until it reaches a terminal
status, and push courier locations only when they moved significantly.
"""
import logging
import time
from typing import Any, Callable, Dict, Iterable, Optional

import requests

from apps.core.geo import SignificantChangeFilter

logger = logging.getLogger(__name__)

RIDE_TERMINAL_STATUSES = ("COMPLETED", "CANCELLED")
ORDER_TERMINAL_STATUSES = ("DELIVERED", "CANCELLED")


def _session(token: Optional[str], session: Optional[requests.Session]) -> requests.Session:
    session = session or requests.Session()
    if token:
        session.headers["Authorization"] = f"Bearer {token}"
    return session


class StatusPoller:
    """
    GETs ``url`` every ``interval`` seconds and calls ``on_update`` whenever
    the ``status`` field changes. Stops at a terminal status, after
    ``max_polls`` requests, or when ``stop()`` is called.
    """

    def __init__(
        self,
        url: str,
        token: Optional[str] = None,
        interval: float = 10,
        on_update: Optional[Callable[[Dict[str, Any]], None]] = None,
        max_polls: Optional[int] = None,
        terminal_statuses: Iterable[str] = RIDE_TERMINAL_STATUSES,
        session: Optional[requests.Session] = None,
        timeout: float = 10,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.url = url
        self.interval = interval
        self.on_update = on_update
        self.max_polls = max_polls
        self.terminal_statuses = set(terminal_statuses)
        self.session = _session(token, session)
        self.timeout = timeout
        self.sleep = sleep

        self.polls = 0
        self.last_status = None
        self.last_data = None
        self._stopped = False

    def poll_once(self) -> Dict[str, Any]:
        response = self.session.get(self.url, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def run(self) -> Optional[Dict[str, Any]]:
        """Poll until done; returns the last payload seen"""
        while not self._stopped:
            self.polls += 1
            try:
                data = self.poll_once()
            except (requests.RequestException, ValueError) as e:
                logger.warning(f"Polling {self.url} failed: {e}")
            else:
                self._handle(data)
                if self.last_status in self.terminal_statuses:
                    logger.info(f"{self.url} reached {self.last_status}")
                    break

            if self.max_polls is not None and self.polls >= self.max_polls:
                logger.info(f"Stopped polling {self.url} after {self.polls} polls")
                break
            self.sleep(self.interval)
        return self.last_data

    def _handle(self, data: Dict[str, Any]):
        self.last_data = data
        status = data.get("status")
        if status != self.last_status:
            logger.debug(f"{self.url}: {self.last_status} -> {status}")
            self.last_status = status
            if self.on_update:
                self.on_update(data)

    def stop(self):
        self._stopped = True


class LocationReporter:
    """
    Sends location samples to ``url`` through a significant-change filter.
    Samples within ``threshold`` metres of the last sent one are dropped.
    """

    def __init__(
        self,
        url: str,
        token: Optional[str] = None,
        threshold: float = 10.0,
        method: str = "put",
        extra: Optional[Dict[str, Any]] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 10,
    ):
        self.url = url
        self.method = method
        self.extra = extra or {}
        self.session = _session(token, session)
        self.timeout = timeout
        self.change_filter = SignificantChangeFilter(threshold)
        self.sent = 0

    def report(self, latitude: float, longitude: float, **readings) -> bool:
        """Returns True when the sample was sent"""
        previous = self.change_filter.last_location
        if not self.change_filter.is_significant(latitude, longitude):
            return False

        payload = {**self.extra, "latitude": latitude, "longitude": longitude, **readings}
        try:
            response = self.session.request(
                self.method.upper(), self.url, json=payload, timeout=self.timeout
            )
            response.raise_for_status()
        except requests.RequestException:
            # unsent samples must not become the reference point
            self.change_filter.last_location = previous
            raise
        self.sent += 1
        return True
