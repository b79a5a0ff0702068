# tourlead/services/reputation.py
"""
Ratings left on finished commitments and the reputation figures built from them.

A guide rates the company (company_rating) and a company rates the guide
(guide_rating). Only the two parties of a commitment may rate it, and only
once the job has ended. Rating again overwrites the earlier rating.
"""
from __future__ import annotations

from datetime import date
from typing import Any, Callable, Mapping, Optional

from tourlead.core.exceptions import (
    AuthorizationError,
    NotFoundError,
    PersistenceError,
    StateError,
)
from tourlead.core.logging import get_structlog_logger
from tourlead.schemas.commitments import RateCommitmentRequest, ReputationResponse
from tourlead.schemas.offers import ActionResult, parse_payload
from tourlead.services import messages
from tourlead.services.actions import action_boundary
from tourlead.services.commitment_store import CommitmentStore

logger = get_structlog_logger()


def summarize(average: Optional[float], count: int) -> ReputationResponse:
    if not count or average is None:
        return ReputationResponse(rating=0.0, reviews=0)
    return ReputationResponse(rating=round(average, 1), reviews=count)


class ReputationService:
    def __init__(self, commitments: CommitmentStore, today: Callable[[], date] = date.today):
        self.commitments = commitments
        self.today = today

    @action_boundary("rate_commitment")
    async def rate_commitment(self, actor_id: str, commitment_id: int, payload: Mapping[str, Any]) -> ActionResult:
        req = parse_payload(RateCommitmentRequest, payload)

        try:
            commitment = await self.commitments.get(commitment_id)
        except PersistenceError as e:
            raise PersistenceError(messages.RATING_FAILED, code=e.code, details=e.details) from e
        if commitment is None:
            raise NotFoundError(messages.COMMITMENT_NOT_FOUND, code="commitment_not_found")

        if actor_id == commitment.guide_id:
            values = {"company_rating": req.rating, "company_rating_comment": req.comment}
        elif actor_id == commitment.company_id:
            values = {"guide_rating": req.rating, "guide_rating_comment": req.comment}
        else:
            raise AuthorizationError(messages.RATING_NOT_AUTHORIZED, code="not_commitment_party")

        if commitment.end_date >= self.today():
            raise StateError(messages.RATING_TOO_EARLY, code="job_not_finished")

        try:
            updated = await self.commitments.set_rating(commitment.id, values)
        except PersistenceError as e:
            raise PersistenceError(messages.RATING_FAILED, code=e.code, details=e.details) from e
        if updated == 0:
            raise NotFoundError(messages.COMMITMENT_NOT_FOUND, code="commitment_not_found")

        logger.info(
            "commitment.rated",
            commitment_id=commitment.id,
            rated_field=next(iter(values)),
            rating=req.rating,
        )
        return ActionResult.ok(messages.RATING_SAVED)

    async def guide_reputation(self, guide_id: str) -> ReputationResponse:
        average, count = await self.commitments.rating_stats(guide_id=guide_id)
        return summarize(average, count)

    async def company_reputation(self, company_id: str) -> ReputationResponse:
        average, count = await self.commitments.rating_stats(company_id=company_id)
        return summarize(average, count)
