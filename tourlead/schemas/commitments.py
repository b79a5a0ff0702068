# tourlead/schemas/commitments.py
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RateCommitmentRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = Field(default=None, max_length=2000)


class ReputationResponse(BaseModel):
    rating: float
    reviews: int
