# tourlead/schemas/offers.py
from __future__ import annotations

from datetime import date
from typing import Annotated, Any, List, Mapping, Optional, Type, TypeVar
from uuid import UUID

import pydantic
from pydantic import BaseModel, ConfigDict, Field, StringConstraints, model_validator

from tourlead.core.exceptions import ValidationError

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

SchemaT = TypeVar("SchemaT", bound=BaseModel)


class _DateRange(BaseModel):
    @model_validator(mode="after")
    def check_date_order(self):
        start = getattr(self, "start_date", None)
        end = getattr(self, "end_date", None)
        if start is not None and end is not None and end < start:
            raise ValueError("end_date must not be before start_date")
        return self


class OfferCreateRequest(_DateRange):
    """One offer row is created per guide id. Also used to add guides to a campaign."""

    model_config = ConfigDict(extra="ignore")

    guide_ids: List[UUID] = Field(..., min_length=1)
    job_type: NonEmptyStr
    description: NonEmptyStr
    start_date: date
    end_date: date
    contact_person: NonEmptyStr
    contact_phone: NonEmptyStr


class AcceptOfferRequest(_DateRange):
    model_config = ConfigDict(extra="ignore")

    offer_id: int = Field(..., ge=1)
    guide_id: UUID
    company_id: UUID
    job_type: NonEmptyStr
    start_date: date
    end_date: date


class CancelCampaignRequest(BaseModel):
    """Either a campaign_id or the full (job_type, start_date, end_date) tuple."""

    model_config = ConfigDict(extra="ignore")

    campaign_id: Optional[UUID] = None
    job_type: Optional[NonEmptyStr] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @model_validator(mode="after")
    def require_campaign_key(self):
        if self.campaign_id is not None:
            return self
        missing = [
            name for name in ("job_type", "start_date", "end_date")
            if getattr(self, name) in (None, "")
        ]
        if missing:
            raise ValueError(f"missing campaign fields: {', '.join(missing)}")
        return self


class UpdateOfferDetailsRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    offer_ids: List[int] = Field(..., min_length=1)
    job_type: NonEmptyStr
    description: NonEmptyStr
    contact_person: NonEmptyStr
    contact_phone: NonEmptyStr


class ActionResult(BaseModel):
    """The whole caller-facing result of a lifecycle operation."""

    success: bool
    message: str

    @classmethod
    def ok(cls, message: str) -> "ActionResult":
        return cls(success=True, message=message)

    @classmethod
    def fail(cls, message: str) -> "ActionResult":
        return cls(success=False, message=message)


def _describe(error: Mapping[str, Any]) -> str:
    loc = ".".join(str(part) for part in error.get("loc", ()))
    kind = error.get("type", "")
    msg = str(error.get("msg", "invalid value"))

    if not loc:
        return msg.removeprefix("Value error, ")
    if kind in ("missing", "string_too_short"):
        return f"{loc} is required"
    if kind == "too_short":
        return f"{loc} must contain at least one item"
    if kind.startswith("uuid"):
        return f"{loc} is not a valid id"
    return f"{loc}: {msg}"


def parse_payload(schema: Type[SchemaT], data: Any) -> SchemaT:
    """Validate input, folding every field error into one ValidationError."""
    if not isinstance(data, Mapping):
        raise ValidationError(message="Invalid form data: a JSON object is required", code="invalid_payload")
    try:
        return schema.model_validate(dict(data))
    except pydantic.ValidationError as e:
        errors = [_describe(err) for err in e.errors()]
        raise ValidationError(
            message=f"Invalid form data: {', '.join(errors)}",
            code="invalid_payload",
            details={"errors": errors},
        ) from e
