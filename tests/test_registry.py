"""
tests/test_registry.py

Unit tests for automation/triggers/registry.py.
"""

import json

import pytest

from automation.services.location import LocationTracker
from automation.triggers.location import TriggerLocation
from automation.triggers.registry import instantiate, trigger_class
from tests.fixtures import (
    NOW_MS,
    FakeClock,
    build_location_event,
    build_location_trigger_json,
)


def test_instantiate_from_dict() -> None:
    trigger = instantiate(build_location_trigger_json(name="Work", last_run=NOW_MS))
    assert isinstance(trigger, TriggerLocation)
    assert trigger.name == "Work"
    assert trigger.last_run == NOW_MS


def test_instantiate_from_string_uses_injected_tracker_and_clock() -> None:
    tracker = LocationTracker()
    clock = FakeClock()
    trigger = instantiate(
        json.dumps(build_location_trigger_json()), tracker=tracker, clock=clock
    )
    assert trigger.now() == NOW_MS
    assert trigger.should_run() is False


@pytest.mark.parametrize(
    "type_name",
    [
        "automation.triggers.location.TriggerLocation",
        "TriggerLocation",
        "info.nightscout.androidaps.plugins.general.automation.triggers.TriggerLocation",
    ],
)
def test_accepts_known_type_names(type_name) -> None:
    assert trigger_class(type_name) is TriggerLocation


def test_unknown_type_raises() -> None:
    with pytest.raises(ValueError):
        instantiate({"type": "TriggerBg", "data": {}})


def test_missing_type_raises() -> None:
    with pytest.raises(ValueError):
        instantiate({"data": {}})


def test_round_trip_through_to_json() -> None:
    original = instantiate(build_location_trigger_json(distance=1234, name="Lake"))
    restored = instantiate(original.to_json())
    assert restored.to_json() == original.to_json()


@pytest.mark.parametrize("type_value", [["TriggerLocation"], {"name": "x"}, 7, None])
def test_non_string_type_raises_value_error(type_value) -> None:
    with pytest.raises(ValueError):
        instantiate({"type": type_value, "data": {}})


def test_instantiate_passes_tracker_to_trigger() -> None:
    """The registry builds every trigger with the same tracker/clock arguments."""
    tracker = LocationTracker()
    trigger = instantiate(build_location_trigger_json(), tracker=tracker, clock=FakeClock())
    tracker.update(build_location_event())
    assert trigger.should_run() is True
