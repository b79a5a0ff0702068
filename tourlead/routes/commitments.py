# tourlead/routes/commitments.py
from __future__ import annotations

from datetime import date
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, Query

from tourlead.routes.deps import get_commitment_store, get_reputation_service
from tourlead.schemas.commitments import ReputationResponse
from tourlead.schemas.listings import CommitmentView
from tourlead.schemas.offers import ActionResult
from tourlead.services.auth import get_current_actor
from tourlead.services.commitment_store import CommitmentStore
from tourlead.services.listings import commitments_for_actor
from tourlead.services.reputation import ReputationService

router = APIRouter(tags=["commitments"])


@router.get("/commitments", response_model=List[CommitmentView])
async def list_commitments(
    history: bool = Query(False, description="Finished commitments instead of upcoming ones"),
    actor_id: str = Depends(get_current_actor),
    store: CommitmentStore = Depends(get_commitment_store),
) -> List[CommitmentView]:
    return await commitments_for_actor(store, actor_id, today=date.today(), history=history)


@router.post("/commitments/{commitment_id}/rate", response_model=ActionResult)
async def rate_commitment(
    commitment_id: int,
    payload: Dict[str, Any] = Body(...),
    actor_id: str = Depends(get_current_actor),
    service: ReputationService = Depends(get_reputation_service),
) -> ActionResult:
    return await service.rate_commitment(actor_id, commitment_id, payload)


@router.get("/reputation/guides/{guide_id}", response_model=ReputationResponse)
async def guide_reputation(
    guide_id: str,
    service: ReputationService = Depends(get_reputation_service),
) -> ReputationResponse:
    return await service.guide_reputation(guide_id)


@router.get("/reputation/companies/{company_id}", response_model=ReputationResponse)
async def company_reputation(
    company_id: str,
    service: ReputationService = Depends(get_reputation_service),
) -> ReputationResponse:
    return await service.company_reputation(company_id)
