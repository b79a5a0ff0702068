# tourlead/routes/availability.py
from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from tourlead.routes.deps import get_availability_service
from tourlead.schemas.availability import AvailabilityView
from tourlead.schemas.offers import ActionResult
from tourlead.services.auth import get_current_actor
from tourlead.services.availability import AvailabilityService

router = APIRouter(prefix="/availability", tags=["availability"])


@router.get("", response_model=AvailabilityView)
async def get_availability(
    actor_id: str = Depends(get_current_actor),
    service: AvailabilityService = Depends(get_availability_service),
) -> AvailabilityView:
    """The guide's unavailable days plus the days already booked by commitments."""
    return await service.get_availability(actor_id)


@router.put("", response_model=ActionResult)
async def set_availability(
    payload: Dict[str, Any] = Body(...),
    actor_id: str = Depends(get_current_actor),
    service: AvailabilityService = Depends(get_availability_service),
) -> ActionResult:
    return await service.set_availability(actor_id, payload)
