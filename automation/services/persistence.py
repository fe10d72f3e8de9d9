"""
automation/services/persistence.py

Mirrors live triggers and location events to the MySQL database.
Uses SQLAlchemy 2.0 async sessions.
"""

import structlog
from sqlalchemy import select

from automation.schemas import LocationChangeEvent
from automation.triggers.base import Trigger
from db.models import AsyncSessionLocal, AutomationTrigger, LocationEventLog

logger = structlog.get_logger(__name__)


async def save_trigger(trigger_id: int, trigger: Trigger) -> None:
    """Insert or update the serialized trigger under `trigger_id`."""
    try:
        async with AsyncSessionLocal() as session:
            record = AutomationTrigger(
                id=trigger_id,
                trigger_type=trigger.type_name(),
                trigger_json=trigger.to_json(),
            )
            await session.merge(record)
            await session.commit()
            logger.info("trigger_persisted", trigger_id=trigger_id)
    except Exception as exc:
        logger.error(
            "trigger_persist_failed",
            trigger_id=trigger_id,
            error=str(exc),
        )
        raise


async def delete_trigger(trigger_id: int) -> None:
    """Remove the stored row for `trigger_id`, if any."""
    try:
        async with AsyncSessionLocal() as session:
            record = await session.get(AutomationTrigger, trigger_id)
            if record is not None:
                await session.delete(record)
                await session.commit()
            logger.info("trigger_deleted", trigger_id=trigger_id)
    except Exception as exc:
        logger.error(
            "trigger_delete_failed",
            trigger_id=trigger_id,
            error=str(exc),
        )
        raise


async def load_triggers() -> list[tuple[int, str]]:
    """
    Return (id, trigger JSON) pairs for every stored trigger.

    Degrades to an empty list when the database is unreachable so the
    service can still start.
    """
    try:
        async with AsyncSessionLocal() as session:
            result = await session.execute(
                select(AutomationTrigger.id, AutomationTrigger.trigger_json)
                .order_by(AutomationTrigger.id)
            )
            rows = [(int(row[0]), row[1]) for row in result.all()]
            logger.info("triggers_loaded", count=len(rows))
            return rows
    except Exception as exc:
        logger.warning("trigger_load_failed", error=str(exc))
        return []


async def persist_location_event(event: LocationChangeEvent) -> None:
    """Insert a location fix into location_event_log."""
    try:
        async with AsyncSessionLocal() as session:
            session.add(
                LocationEventLog(
                    recorded_at_ms=event.timestamp,
                    latitude=event.latitude,
                    longitude=event.longitude,
                    provider=event.provider,
                )
            )
            await session.commit()
    except Exception as exc:
        logger.error("location_event_persist_failed", error=str(exc))
        raise
