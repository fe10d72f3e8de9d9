"""
automation/services/store.py

In-memory collection of live triggers keyed by integer id.
The database only mirrors this store; evaluation always reads from here.
"""

import itertools
import threading
from typing import Optional

from automation.triggers.base import Trigger


class TriggerStore:
    """Thread-safe id -> Trigger mapping."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._triggers: dict[int, Trigger] = {}
        self._ids = itertools.count(1)

    def add(self, trigger: Trigger, trigger_id: Optional[int] = None) -> int:
        with self._lock:
            if trigger_id is None:
                trigger_id = next(self._ids)
                while trigger_id in self._triggers:
                    trigger_id = next(self._ids)
            self._triggers[trigger_id] = trigger
            return trigger_id

    def get(self, trigger_id: int) -> Optional[Trigger]:
        with self._lock:
            return self._triggers.get(trigger_id)

    def remove(self, trigger_id: int) -> Optional[Trigger]:
        with self._lock:
            return self._triggers.pop(trigger_id, None)

    def items(self) -> list[tuple[int, Trigger]]:
        with self._lock:
            return sorted(self._triggers.items())

    def clear(self) -> None:
        with self._lock:
            self._triggers.clear()
            self._ids = itertools.count(1)

    def __len__(self) -> int:
        with self._lock:
            return len(self._triggers)


trigger_store = TriggerStore()
