# tourlead/schemas/subscriptions.py
from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, model_validator


class SubscriptionCreateRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    company_id: UUID
    start_date: datetime
    end_date: datetime

    @model_validator(mode="after")
    def check_window(self):
        if self.end_date <= self.start_date:
            raise ValueError("end_date must be after start_date")
        return self
