# tourlead/schemas/__init__.py
"""
Pydantic schemas for request validation and caller-facing results.
"""

from tourlead.schemas.availability import AvailabilityUpdateRequest, AvailabilityView
from tourlead.schemas.commitments import RateCommitmentRequest, ReputationResponse
from tourlead.schemas.offers import (
    AcceptOfferRequest,
    ActionResult,
    CancelCampaignRequest,
    OfferCreateRequest,
    UpdateOfferDetailsRequest,
    parse_payload,
)
from tourlead.schemas.subscriptions import SubscriptionCreateRequest

__all__ = [
    "AcceptOfferRequest",
    "ActionResult",
    "AvailabilityUpdateRequest",
    "AvailabilityView",
    "CancelCampaignRequest",
    "OfferCreateRequest",
    "RateCommitmentRequest",
    "ReputationResponse",
    "SubscriptionCreateRequest",
    "UpdateOfferDetailsRequest",
    "parse_payload",
]
