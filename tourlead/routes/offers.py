# tourlead/routes/offers.py
"""
Offer endpoints.

Mutations always answer 200 with an ActionResult; `success` and `message`
carry the outcome. Payloads are validated by the controller so that every
input problem comes back in the same "Invalid form data" shape.
"""
from __future__ import annotations

from datetime import date
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends

from tourlead.schemas.listings import CampaignView, PendingOfferView
from tourlead.schemas.offers import ActionResult
from tourlead.routes.deps import get_commitment_store, get_offer_controller, get_offer_store
from tourlead.services.auth import get_current_actor
from tourlead.services.commitment_store import CommitmentStore
from tourlead.services.listings import campaigns_for_company, pending_offers_for_guide
from tourlead.services.offer_lifecycle import OfferLifecycleController
from tourlead.services.offer_store import OfferStore

router = APIRouter(prefix="/offers", tags=["offers"])


@router.post("", response_model=ActionResult)
async def create_offer(
    payload: Dict[str, Any] = Body(...),
    actor_id: str = Depends(get_current_actor),
    controller: OfferLifecycleController = Depends(get_offer_controller),
) -> ActionResult:
    """Send an offer to one or more guides."""
    return await controller.create_offer(actor_id, payload)


@router.patch("", response_model=ActionResult)
async def update_offer_details(
    payload: Dict[str, Any] = Body(...),
    actor_id: str = Depends(get_current_actor),
    controller: OfferLifecycleController = Depends(get_offer_controller),
) -> ActionResult:
    return await controller.update_offer_details(actor_id, payload)


@router.post("/campaign/guides", response_model=ActionResult)
async def add_guides_to_campaign(
    payload: Dict[str, Any] = Body(...),
    actor_id: str = Depends(get_current_actor),
    controller: OfferLifecycleController = Depends(get_offer_controller),
) -> ActionResult:
    return await controller.add_guides_to_offer_campaign(actor_id, payload)


@router.post("/campaign/cancel", response_model=ActionResult)
async def cancel_campaign(
    payload: Dict[str, Any] = Body(...),
    actor_id: str = Depends(get_current_actor),
    controller: OfferLifecycleController = Depends(get_offer_controller),
) -> ActionResult:
    """Reject every still-pending offer of a campaign."""
    return await controller.cancel_pending_offers_for_job(actor_id, payload)


@router.post("/{offer_id}/accept", response_model=ActionResult)
async def accept_offer(
    offer_id: int,
    payload: Dict[str, Any] = Body(...),
    actor_id: str = Depends(get_current_actor),
    controller: OfferLifecycleController = Depends(get_offer_controller),
) -> ActionResult:
    return await controller.accept_offer(actor_id, {**payload, "offer_id": offer_id})


@router.post("/{offer_id}/reject", response_model=ActionResult)
async def reject_offer(
    offer_id: int,
    actor_id: str = Depends(get_current_actor),
    controller: OfferLifecycleController = Depends(get_offer_controller),
) -> ActionResult:
    return await controller.reject_offer(actor_id, offer_id)


@router.post("/{offer_id}/guide-reject", response_model=ActionResult)
async def guide_reject_offer(
    offer_id: int,
    actor_id: str = Depends(get_current_actor),
    controller: OfferLifecycleController = Depends(get_offer_controller),
) -> ActionResult:
    return await controller.guide_reject_offer(actor_id, offer_id)


@router.post("/{offer_id}/remind", response_model=ActionResult)
async def remind_offer(
    offer_id: int,
    actor_id: str = Depends(get_current_actor),
    controller: OfferLifecycleController = Depends(get_offer_controller),
) -> ActionResult:
    return await controller.remind_offer(actor_id, offer_id)


@router.get("/pending", response_model=List[PendingOfferView])
async def list_pending_offers(
    actor_id: str = Depends(get_current_actor),
    store: OfferStore = Depends(get_offer_store),
    commitments: CommitmentStore = Depends(get_commitment_store),
) -> List[PendingOfferView]:
    return await pending_offers_for_guide(store, commitments, actor_id)


@router.get("/campaigns", response_model=List[CampaignView])
async def list_campaigns(
    actor_id: str = Depends(get_current_actor),
    store: OfferStore = Depends(get_offer_store),
    commitments: CommitmentStore = Depends(get_commitment_store),
) -> List[CampaignView]:
    return await campaigns_for_company(store, commitments, actor_id, today=date.today())
