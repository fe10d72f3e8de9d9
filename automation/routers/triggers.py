"""
automation/routers/triggers.py

CRUD endpoints for automation triggers.
Triggers are exchanged in their {"type", "data"} JSON form.
"""

import json

import structlog
from fastapi import APIRouter, HTTPException

from automation.schemas import StoredTrigger, TriggerEnvelope
from automation.services.persistence import delete_trigger, save_trigger
from automation.services.store import trigger_store
from automation.triggers.base import Trigger
from automation.triggers.location import TriggerLocation
from automation.triggers.registry import instantiate

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/triggers")


def _stored(trigger_id: int, trigger: Trigger) -> StoredTrigger:
    return StoredTrigger(
        id=trigger_id,
        trigger=TriggerEnvelope.model_validate(json.loads(trigger.to_json())),
        description=trigger.friendly_description(),
    )


def _get_or_404(trigger_id: int) -> Trigger:
    trigger = trigger_store.get(trigger_id)
    if trigger is None:
        raise HTTPException(status_code=404, detail=f"trigger {trigger_id} not found")
    return trigger


@router.get("")
async def list_triggers() -> list[StoredTrigger]:
    return [_stored(trigger_id, trigger) for trigger_id, trigger in trigger_store.items()]


async def _add_and_save(trigger: Trigger) -> int:
    """Store a new trigger; it is dropped again if the database write fails."""
    trigger_id = trigger_store.add(trigger)
    try:
        await save_trigger(trigger_id, trigger)
    except Exception as exc:
        trigger_store.remove(trigger_id)
        raise HTTPException(
            status_code=503, detail="trigger could not be saved"
        ) from exc
    return trigger_id


@router.post("")
async def create_trigger(envelope: TriggerEnvelope) -> StoredTrigger:
    """Create a trigger from its JSON; unknown types are rejected with 400."""
    try:
        trigger = instantiate(envelope.model_dump())
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    trigger_id = await _add_and_save(trigger)
    logger.info("trigger_created", trigger_id=trigger_id, type=trigger.type_name())
    return _stored(trigger_id, trigger)


@router.get("/{trigger_id}")
async def get_trigger(trigger_id: int) -> StoredTrigger:
    return _stored(trigger_id, _get_or_404(trigger_id))


@router.delete("/{trigger_id}")
async def remove_trigger(trigger_id: int) -> dict[str, int]:
    _get_or_404(trigger_id)
    try:
        await delete_trigger(trigger_id)
    except Exception as exc:
        raise HTTPException(
            status_code=503, detail="trigger could not be deleted"
        ) from exc
    trigger_store.remove(trigger_id)
    return {"deleted": trigger_id}


@router.post("/{trigger_id}/duplicate")
async def duplicate_trigger(trigger_id: int) -> StoredTrigger:
    copy = _get_or_404(trigger_id).duplicate()
    copy_id = await _add_and_save(copy)
    logger.info("trigger_duplicated", source_id=trigger_id, trigger_id=copy_id)
    return _stored(copy_id, copy)


@router.post("/{trigger_id}/current-location")
async def use_current_location(trigger_id: int) -> StoredTrigger:
    """Set a location trigger's point to the latest known device location."""
    trigger = _get_or_404(trigger_id)
    if not isinstance(trigger, TriggerLocation):
        raise HTTPException(status_code=400, detail="not a location trigger")

    previous = (trigger.latitude, trigger.longitude)
    if not trigger.grab_current_location():
        raise HTTPException(status_code=409, detail="no location received yet")
    try:
        await save_trigger(trigger_id, trigger)
    except Exception as exc:
        trigger.latitude, trigger.longitude = previous
        raise HTTPException(
            status_code=503, detail="trigger could not be saved"
        ) from exc
    return _stored(trigger_id, trigger)
