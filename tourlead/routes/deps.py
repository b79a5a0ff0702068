# tourlead/routes/deps.py
from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tourlead.db.session import get_session
from tourlead.services.availability import AvailabilityService
from tourlead.services.commitment_store import CommitmentStore
from tourlead.services.notifications import Notifier, get_notifier
from tourlead.services.offer_lifecycle import OfferLifecycleController
from tourlead.services.offer_store import OfferStore
from tourlead.services.reputation import ReputationService
from tourlead.services.subscriptions import SubscriptionService


def get_offer_controller(
    session: AsyncSession = Depends(get_session),
    notifier: Notifier = Depends(get_notifier),
) -> OfferLifecycleController:
    return OfferLifecycleController.from_session(session, notifier)


def get_offer_store(session: AsyncSession = Depends(get_session)) -> OfferStore:
    return OfferStore(session)


def get_commitment_store(session: AsyncSession = Depends(get_session)) -> CommitmentStore:
    return CommitmentStore(session)


def get_reputation_service(
    store: CommitmentStore = Depends(get_commitment_store),
) -> ReputationService:
    return ReputationService(store)


def get_subscription_service(session: AsyncSession = Depends(get_session)) -> SubscriptionService:
    return SubscriptionService(session)


def get_availability_service(session: AsyncSession = Depends(get_session)) -> AvailabilityService:
    return AvailabilityService(session)
