"""
automation/services/evaluator.py

Trigger evaluation on location changes.
- evaluate_location_change: records the new fix, then runs every stored
  trigger's condition and fires the ones that are ready
"""

import structlog

from automation.schemas import LocationChangeEvent
from automation.services.location import LocationTracker, location_tracker
from automation.services.notification import send_push
from automation.services.persistence import save_trigger
from automation.services.store import TriggerStore, trigger_store

logger = structlog.get_logger(__name__)


async def evaluate_location_change(
    event: LocationChangeEvent,
    store: TriggerStore = trigger_store,
    tracker: LocationTracker = location_tracker,
) -> list[int]:
    """
    Evaluate all stored triggers against a new location fix.

    Fired triggers get their last_run stamped, are persisted and produce a
    push notification. Returns the ids of the triggers that fired.
    """
    tracker.update(event)
    fired: list[int] = []

    for trigger_id, trigger in store.items():
        if not trigger.should_run():
            continue

        trigger.executed(trigger.now())
        fired.append(trigger_id)
        description = trigger.friendly_description()
        logger.info(
            "trigger_fired",
            trigger_id=trigger_id,
            description=description,
            last_run=trigger.last_run,
        )

        try:
            await save_trigger(trigger_id, trigger)
        except Exception as exc:
            logger.warning(
                "fired_trigger_persist_failed",
                trigger_id=trigger_id,
                error=str(exc),
            )
        await send_push(description, trigger_id=trigger_id)

    return fired
