"""
automation/triggers/base.py

Base class for automation triggers.

A trigger is a user-configured condition that gates an automated action.
Every trigger carries a last-run timestamp and serializes itself as
{"type": <type name>, "data": {...}}. Subclasses provide the condition
(should_run) and the "data" payload (to_data / apply_data).

Evaluation, serialization and edits are mutually exclusive per instance,
since the API edits triggers while the evaluator reads them.
"""

import json
import threading
from typing import Any, Callable, Optional

import structlog

from automation.schemas import now_ms
from automation.services.location import LocationTracker, location_tracker

logger = structlog.get_logger(__name__)

Clock = Callable[[], int]


class Trigger:
    """A condition evaluated by the automation layer."""

    # Extra type names accepted when instantiating from JSON
    type_aliases: tuple[str, ...] = ()

    def __init__(
        self,
        tracker: Optional[LocationTracker] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self._lock = threading.RLock()
        self._tracker = tracker or location_tracker
        self._clock: Clock = clock or now_ms
        self.last_run: int = 0  # epoch ms

    @classmethod
    def type_name(cls) -> str:
        """Fully qualified name written to the "type" key."""
        return f"{cls.__module__}.{cls.__qualname__}"

    def now(self) -> int:
        return self._clock()

    # ── Condition ────────────────────────────────────────────

    def should_run(self) -> bool:
        raise NotImplementedError

    def executed(self, time: int) -> None:
        """Record that the gated action ran at `time` (epoch ms)."""
        with self._lock:
            self.last_run = time

    # ── Serialization ────────────────────────────────────────

    def to_data(self) -> dict[str, Any]:
        raise NotImplementedError

    def apply_data(self, data: dict[str, Any]) -> None:
        raise NotImplementedError

    def to_json(self) -> str:
        """Serialize to the {"type", "data"} envelope; errors are logged, not raised."""
        with self._lock:
            try:
                return json.dumps(
                    {"type": self.type_name(), "data": self.to_data()},
                    allow_nan=False,
                )
            except (TypeError, ValueError):
                logger.exception("trigger_to_json_failed", type=self.type_name())
                return "{}"

    def from_json(self, data: str) -> "Trigger":
        """
        Apply the "data" payload encoded in `data` and return self.

        Parse and validation errors are logged and swallowed. Fields applied
        before the failing one keep their new values.
        """
        with self._lock:
            try:
                payload = json.loads(data)
                if not isinstance(payload, dict):
                    raise ValueError("trigger data must be a JSON object")
                self.apply_data(payload)
            except Exception:
                logger.exception("trigger_from_json_failed", type=self.type_name())
        return self

    # ── Presentation ─────────────────────────────────────────

    def friendly_name(self) -> str:
        raise NotImplementedError

    def friendly_description(self) -> str:
        raise NotImplementedError

    def duplicate(self) -> "Trigger":
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.friendly_description()!r}>"
