"""
automation/services/location.py

Keeps the most recent location-change event reported by the device.
Triggers read the latest fix from a LocationTracker instead of a global plugin.
"""

import threading
from typing import Optional

import structlog

from automation.schemas import LocationChangeEvent

logger = structlog.get_logger(__name__)


class LocationTracker:
    """Thread-safe holder of the latest LocationChangeEvent."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._latest: Optional[LocationChangeEvent] = None

    @property
    def latest(self) -> Optional[LocationChangeEvent]:
        with self._lock:
            return self._latest

    def update(self, event: LocationChangeEvent) -> None:
        with self._lock:
            self._latest = event
        logger.debug(
            "location_updated",
            latitude=event.latitude,
            longitude=event.longitude,
            timestamp=event.timestamp,
        )

    def clear(self) -> None:
        with self._lock:
            self._latest = None


# Process-wide tracker fed by the /location endpoint
location_tracker = LocationTracker()
