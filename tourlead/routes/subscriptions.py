# tourlead/routes/subscriptions.py
from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from tourlead.routes.deps import get_subscription_service
from tourlead.schemas.offers import ActionResult
from tourlead.services.auth import get_current_actor
from tourlead.services.subscriptions import SubscriptionService

router = APIRouter(prefix="/subscriptions", tags=["subscriptions"])


@router.post("", response_model=ActionResult)
async def create_subscription(
    payload: Dict[str, Any] = Body(...),
    actor_id: str = Depends(get_current_actor),
    service: SubscriptionService = Depends(get_subscription_service),
) -> ActionResult:
    return await service.create_subscription(actor_id, payload)


@router.post("/{subscription_id}/cancel", response_model=ActionResult)
async def cancel_subscription(
    subscription_id: int,
    actor_id: str = Depends(get_current_actor),
    service: SubscriptionService = Depends(get_subscription_service),
) -> ActionResult:
    return await service.cancel_subscription(actor_id, subscription_id)
