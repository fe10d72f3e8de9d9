"""
automation/triggers/location.py

TriggerLocation: fires when the device is within a distance threshold of a
saved point, at most once per TRIGGER_COOLDOWN_MIN minutes.
"""

from typing import Any, Optional

import structlog

from automation.constants import (
    DISTANCE_DEFAULT_M,
    DISTANCE_MAX_M,
    DISTANCE_MIN_M,
    LATITUDE_MAX,
    LATITUDE_MIN,
    LEGACY_LOCATION_TRIGGER_TYPE,
    LONGITUDE_MAX,
    LONGITUDE_MIN,
    TRIGGER_COOLDOWN_MS,
)
from automation.geo import haversine_distance
from automation.services.location import LocationTracker
from automation.triggers.base import Clock, Trigger

logger = structlog.get_logger(__name__)


def _checked(field: str, value: Any, low: float, high: float) -> float:
    number = float(value)
    if not low <= number <= high:
        raise ValueError(f"{field}={number} outside [{low}, {high}]")
    return number


class TriggerLocation(Trigger):
    """Proximity to a saved location."""

    type_aliases = (LEGACY_LOCATION_TRIGGER_TYPE, "TriggerLocation")

    def __init__(
        self,
        tracker: Optional[LocationTracker] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        super().__init__(tracker, clock)
        self._latitude: float = 0.0
        self._longitude: float = 0.0
        self._distance: float = DISTANCE_DEFAULT_M
        self._name: str = ""

    # ── Editable fields ──────────────────────────────────────

    @property
    def latitude(self) -> float:
        return self._latitude

    @latitude.setter
    def latitude(self, value: float) -> None:
        with self._lock:
            self._latitude = _checked("latitude", value, LATITUDE_MIN, LATITUDE_MAX)

    @property
    def longitude(self) -> float:
        return self._longitude

    @longitude.setter
    def longitude(self, value: float) -> None:
        with self._lock:
            self._longitude = _checked(
                "longitude", value, LONGITUDE_MIN, LONGITUDE_MAX
            )

    @property
    def distance(self) -> float:
        """Threshold in meters."""
        return self._distance

    @distance.setter
    def distance(self, value: float) -> None:
        with self._lock:
            self._distance = _checked(
                "distance", value, DISTANCE_MIN_M, DISTANCE_MAX_M
            )

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: Optional[str]) -> None:
        with self._lock:
            self._name = "" if value is None else str(value)

    # ── Condition ────────────────────────────────────────────

    def should_run(self) -> bool:
        with self._lock:
            event = self._tracker.latest
            if event is None:
                return False

            if self.last_run > self.now() - TRIGGER_COOLDOWN_MS:
                return False

            calculated_distance = haversine_distance(
                event.latitude, event.longitude, self._latitude, self._longitude
            )
            if calculated_distance < self._distance:
                logger.debug(
                    "trigger_ready_for_execution",
                    description=self.friendly_description(),
                    distance_m=round(calculated_distance, 1),
                )
                return True
            return False

    def grab_current_location(self) -> bool:
        """Copy the latest known device location into latitude/longitude."""
        event = self._tracker.latest
        if event is None:
            return False
        with self._lock:
            self.latitude = event.latitude
            self.longitude = event.longitude
        logger.debug(
            "grabbed_location",
            latitude=self._latitude,
            longitude=self._longitude,
        )
        return True

    # ── Serialization ────────────────────────────────────────

    def to_data(self) -> dict[str, Any]:
        return {
            "latitude": self._latitude,
            "longitude": self._longitude,
            "distance": self._distance,
            "name": self._name,
            "lastRun": self.last_run,
        }

    def apply_data(self, data: dict[str, Any]) -> None:
        # Missing keys fall back to zero values, as the Android app does
        self.latitude = data.get("latitude", 0.0)
        self.longitude = data.get("longitude", 0.0)
        self.distance = data.get("distance", 0.0)
        self.name = data.get("name")
        self.last_run = int(data.get("lastRun", 0))

    # ── Presentation ─────────────────────────────────────────

    def friendly_name(self) -> str:
        return "Location"

    def friendly_description(self) -> str:
        return f"Location is {self._name}"

    def duplicate(self) -> "TriggerLocation":
        with self._lock:
            copy = TriggerLocation(tracker=self._tracker, clock=self._clock)
            copy._latitude = self._latitude
            copy._longitude = self._longitude
            copy._distance = self._distance
            copy._name = self._name
            copy.last_run = self.last_run
        return copy
