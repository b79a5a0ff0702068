# tourlead/schemas/availability.py
from __future__ import annotations

from datetime import date
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class AvailabilityUpdateRequest(BaseModel):
    """The full set of days the guide is unavailable. Replaces the saved set."""

    model_config = ConfigDict(extra="ignore")

    unavailable_days: List[date] = Field(default_factory=list, max_length=1000)


class AvailabilityView(BaseModel):
    unavailable_days: List[date] = Field(default_factory=list)
    # Days covered by upcoming commitments; not editable by the guide
    booked_days: List[date] = Field(default_factory=list)
