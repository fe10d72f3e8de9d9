"""
automation/routers/location.py

POST /location endpoint.
Receives a location fix, persists it, and evaluates triggers concurrently.
"""

import asyncio

import structlog
from fastapi import APIRouter

from automation.schemas import LocationChangeEvent
from automation.services.evaluator import evaluate_location_change
from automation.services.persistence import persist_location_event

logger = structlog.get_logger(__name__)

router = APIRouter()


async def _log_location_event(event: LocationChangeEvent) -> bool:
    """Persist the fix; a database failure must not hide fired triggers."""
    try:
        await persist_location_event(event)
        return True
    except Exception as exc:
        logger.warning(
            "location_event_not_logged",
            timestamp=event.timestamp,
            error=str(exc),
        )
        return False


@router.post("/location")
async def receive_location(event: LocationChangeEvent) -> dict:
    """
    Receive a location-change event from the user's device.

    The fix becomes the latest known location for every trigger; triggers
    that are ready fire immediately.
    """
    logger.info(
        "location_received",
        latitude=event.latitude,
        longitude=event.longitude,
        provider=event.provider,
    )

    _, fired = await asyncio.gather(
        _log_location_event(event),
        evaluate_location_change(event),
    )
    return {"status": "received", "fired": fired}
