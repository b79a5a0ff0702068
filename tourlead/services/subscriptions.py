# tourlead/services/subscriptions.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Mapping

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tourlead.core.exceptions import AuthorizationError, NotFoundError, PersistenceError
from tourlead.core.logging import get_structlog_logger
from tourlead.db.errors import translate_store_error
from tourlead.models import Subscription
from tourlead.schemas.offers import ActionResult, parse_payload
from tourlead.schemas.subscriptions import SubscriptionCreateRequest
from tourlead.services import messages
from tourlead.services.actions import action_boundary
from tourlead.services.directory import Directory

logger = get_structlog_logger()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SubscriptionService:
    """Company subscriptions. Only active admins may create or cancel them."""

    def __init__(self, session: AsyncSession, now: Callable[[], datetime] = _utcnow):
        self.session = session
        self.directory = Directory(session)
        self.now = now

    async def _require_admin(self, actor_id: str) -> None:
        if not await self.directory.is_active_admin(actor_id):
            raise AuthorizationError(messages.SUBSCRIPTION_NOT_ADMIN, code="not_admin")

    @action_boundary("create_subscription")
    async def create_subscription(self, actor_id: str, payload: Mapping[str, Any]) -> ActionResult:
        req = parse_payload(SubscriptionCreateRequest, payload)
        await self._require_admin(actor_id)

        subscription = Subscription(
            company_id=str(req.company_id),
            start_date=req.start_date,
            end_date=req.end_date,
            admin_id=actor_id,
        )
        try:
            self.session.add(subscription)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            error = translate_store_error(e, "create_subscription")
            raise PersistenceError(messages.SUBSCRIPTION_CREATE_FAILED, code=error.code, details=error.details) from e

        logger.info("subscription.created", subscription_id=subscription.id, company_id=subscription.company_id)
        return ActionResult.ok(messages.SUBSCRIPTION_CREATED)

    @action_boundary("cancel_subscription")
    async def cancel_subscription(self, actor_id: str, subscription_id: int) -> ActionResult:
        """Ends the subscription now and records which admin cancelled it."""
        await self._require_admin(actor_id)

        try:
            result = await self.session.execute(
                select(Subscription).where(Subscription.id == subscription_id)
            )
            subscription = result.scalar_one_or_none()
            if subscription is None:
                raise NotFoundError(messages.SUBSCRIPTION_NOT_FOUND, code="subscription_not_found")

            subscription.end_date = self.now()
            subscription.canceled_by_admin_id = actor_id
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            error = translate_store_error(e, "cancel_subscription")
            raise PersistenceError(messages.SUBSCRIPTION_CANCEL_FAILED, code=error.code, details=error.details) from e

        logger.info("subscription.cancelled", subscription_id=subscription_id, admin_id=actor_id)
        return ActionResult.ok(messages.SUBSCRIPTION_CANCELLED)
