"""
automation/routers/insulin.py

POST /iob endpoint.
Computes total insulin-on-board for a list of treatments with the
configured oref insulin.
"""

from typing import Optional

import structlog
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from automation.schemas import now_ms
from insulin.iob import total_iob
from insulin.oref import get_insulin
from insulin.schemas import Treatment

logger = structlog.get_logger(__name__)

router = APIRouter()


class IobRequest(BaseModel):
    """Treatments to evaluate and the instant (epoch ms) to evaluate them at."""

    treatments: list[Treatment] = Field(default_factory=list)
    time: Optional[int] = None


class IobResponse(BaseModel):
    iob: float
    activity: float
    insulin: str
    comment: str


@router.post("/iob")
async def calculate_iob(request: IobRequest) -> IobResponse:
    time = request.time if request.time is not None else now_ms()
    try:
        insulin = get_insulin()
        result = total_iob(insulin, request.treatments, time)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    logger.info(
        "iob_calculated",
        treatments=len(request.treatments),
        iob=round(result.iob_contrib, 3),
        insulin=insulin.id,
    )
    return IobResponse(
        iob=result.iob_contrib,
        activity=result.activity_contrib,
        insulin=insulin.friendly_name,
        comment=insulin.comment(),
    )
