"""
automation/schemas.py

Pydantic data models for the automation layer.
- LocationChangeEvent: a live location update from the user's device
- TriggerEnvelope: the persisted {"type", "data"} trigger JSON
- StoredTrigger: a trigger envelope together with its store id
"""

import time
from typing import Any, Optional

from pydantic import BaseModel, Field

from automation.constants import (
    LATITUDE_MAX,
    LATITUDE_MIN,
    LONGITUDE_MAX,
    LONGITUDE_MIN,
)


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


class LocationChangeEvent(BaseModel):
    """A location fix reported by the user's device."""

    latitude: float = Field(ge=LATITUDE_MIN, le=LATITUDE_MAX)
    longitude: float = Field(ge=LONGITUDE_MIN, le=LONGITUDE_MAX)
    timestamp: int = Field(default_factory=now_ms)  # epoch ms
    provider: Optional[str] = None


class TriggerEnvelope(BaseModel):
    """Trigger JSON as stored and exchanged: {"type": ..., "data": {...}}."""

    type: str
    data: dict[str, Any] = Field(default_factory=dict)


class StoredTrigger(BaseModel):
    """A live trigger with the id assigned by the trigger store."""

    id: int
    trigger: TriggerEnvelope
    description: str
