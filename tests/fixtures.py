"""
tests/fixtures.py

Shared test data and helper functions for constructing test objects.
All tests must use these fixtures instead of hardcoding test values.
"""

from automation.schemas import LocationChangeEvent
from automation.services.location import LocationTracker
from automation.triggers.location import TriggerLocation
from insulin.schemas import Treatment

# ── Reference points ────────────────────────────────────────

HOME_LAT: float = 50.0
HOME_LNG: float = 14.0
# 0.0009 degrees of latitude is roughly 100 m
NEAR_HOME_LAT: float = 50.0009
# 0.01 degrees of latitude is roughly 1.1 km
FAR_FROM_HOME_LAT: float = 50.01

NOW_MS: int = 1_560_000_000_000
MINUTE_MS: int = 60 * 1000
HOUR_MS: int = 60 * MINUTE_MS


class FakeClock:
    """Settable epoch-ms clock for injecting into triggers and insulin models."""

    def __init__(self, now: int = NOW_MS) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


def build_location_event(
    latitude: float = NEAR_HOME_LAT,
    longitude: float = HOME_LNG,
    timestamp: int = NOW_MS,
) -> LocationChangeEvent:
    """Build a LocationChangeEvent with sensible defaults for testing."""
    return LocationChangeEvent(
        latitude=latitude,
        longitude=longitude,
        timestamp=timestamp,
        provider="gps",
    )


def build_location_trigger(
    tracker: LocationTracker,
    clock: FakeClock,
    latitude: float = HOME_LAT,
    longitude: float = HOME_LNG,
    distance: float = 200.0,
    name: str = "Home",
    last_run: int = 0,
) -> TriggerLocation:
    """Build a TriggerLocation targeting HOME with a 200 m threshold."""
    trigger = TriggerLocation(tracker=tracker, clock=clock)
    trigger.latitude = latitude
    trigger.longitude = longitude
    trigger.distance = distance
    trigger.name = name
    trigger.last_run = last_run
    return trigger


def build_location_trigger_json(
    latitude: float = HOME_LAT,
    longitude: float = HOME_LNG,
    distance: float = 200.0,
    name: str = "Home",
    last_run: int = 0,
    type_name: str = "automation.triggers.location.TriggerLocation",
) -> dict:
    """Build a trigger JSON envelope as exchanged over the API."""
    return {
        "type": type_name,
        "data": {
            "latitude": latitude,
            "longitude": longitude,
            "distance": distance,
            "name": name,
            "lastRun": last_run,
        },
    }


def build_treatment(
    insulin: float = 10.0,
    minutes_ago: float = 60,
    now: int = NOW_MS,
) -> Treatment:
    """Build a bolus Treatment delivered `minutes_ago` before `now`."""
    return Treatment(date=int(now - minutes_ago * MINUTE_MS), insulin=insulin)
