"""
automation/main.py

FastAPI application entry point for the automation service.
Restores stored triggers on startup and registers routers.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI

from automation.routers.insulin import router as insulin_router
from automation.routers.location import router as location_router
from automation.routers.triggers import router as triggers_router
from automation.services.persistence import load_triggers
from automation.services.store import trigger_store
from automation.triggers.registry import instantiate

logger = structlog.get_logger(__name__)


async def restore_triggers() -> int:
    """Load persisted triggers into the in-memory store; returns the count."""
    restored = 0
    for trigger_id, trigger_json in await load_triggers():
        try:
            trigger_store.add(instantiate(trigger_json), trigger_id=trigger_id)
            restored += 1
        except (ValueError, TypeError) as exc:
            logger.warning(
                "trigger_restore_skipped",
                trigger_id=trigger_id,
                error=str(exc),
            )
    return restored


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifecycle: startup and shutdown."""
    restored = await restore_triggers()
    logger.info("automation_starting", port=8000, triggers=restored)
    yield
    logger.info("automation_shutting_down")


app = FastAPI(
    title="AAPS Automation",
    description="Location trigger evaluation and insulin-on-board service",
    version="1.0.0",
    lifespan=lifespan,
)

app.include_router(location_router)
app.include_router(triggers_router)
app.include_router(insulin_router)
