"""
automation/triggers/registry.py

Maps "type" names found in trigger JSON to Trigger classes and builds
triggers from their JSON envelope.
"""

import json
from typing import Any, Optional

import structlog

from automation.services.location import LocationTracker
from automation.triggers.base import Clock, Trigger
from automation.triggers.location import TriggerLocation

logger = structlog.get_logger(__name__)

TRIGGER_CLASSES: tuple[type[Trigger], ...] = (TriggerLocation,)

_by_type_name: dict[str, type[Trigger]] = {}
for _cls in TRIGGER_CLASSES:
    _by_type_name[_cls.type_name()] = _cls
    for _alias in _cls.type_aliases:
        _by_type_name[_alias] = _cls


def trigger_class(type_name: str) -> type[Trigger]:
    """Resolve a "type" value to its Trigger class, or raise ValueError."""
    if not isinstance(type_name, str):
        raise ValueError(f"trigger type must be a string, got {type_name!r}")
    try:
        return _by_type_name[type_name]
    except KeyError:
        raise ValueError(f"unknown trigger type: {type_name}") from None


def instantiate(
    envelope: str | dict[str, Any],
    tracker: Optional[LocationTracker] = None,
    clock: Optional[Clock] = None,
) -> Trigger:
    """
    Build a trigger from its {"type", "data"} JSON.

    Raises ValueError when the envelope is malformed or the type is unknown.
    Errors inside "data" follow Trigger.from_json and are only logged.
    """
    if isinstance(envelope, str):
        envelope = json.loads(envelope)
    if not isinstance(envelope, dict) or "type" not in envelope:
        raise ValueError("trigger JSON must be an object with a 'type' key")

    cls = trigger_class(envelope["type"])
    trigger = cls(tracker=tracker, clock=clock)

    data = envelope.get("data", {})
    logger.debug("trigger_instantiated", type=cls.type_name())
    return trigger.from_json(json.dumps(data))
