"""
insulin/schemas.py

Pydantic data models for insulin-on-board calculations.
- Treatment: a bolus record (time and units)
- Iob: insulin-on-board and activity contribution of one or more treatments
"""

from pydantic import BaseModel, Field


class Treatment(BaseModel):
    """An insulin dose delivered at `date` (epoch ms)."""

    date: int = 0
    insulin: float = Field(default=0.0, ge=0.0)  # units


class Iob(BaseModel):
    """IOB and activity contributed at a point in time."""

    iob_contrib: float = 0.0  # units still on board
    activity_contrib: float = 0.0  # units per minute

    def plus(self, other: "Iob") -> "Iob":
        return Iob(
            iob_contrib=self.iob_contrib + other.iob_contrib,
            activity_contrib=self.activity_contrib + other.activity_contrib,
        )
