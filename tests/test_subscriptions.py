# tests/test_subscriptions.py
from datetime import datetime, timezone

import pytest
from sqlalchemy import select

from tourlead.models import Subscription
from tourlead.services import messages
from tourlead.services.subscriptions import SubscriptionService

from tests.conftest import ADMIN_ID, COMPANY_ID, GUIDE_ID, INACTIVE_ADMIN_ID

CANCELLED_AT = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)

WINDOW = {
    "company_id": COMPANY_ID,
    "start_date": "2024-06-01T00:00:00+00:00",
    "end_date": "2025-06-01T00:00:00+00:00",
}


@pytest.fixture
def service(session):
    return SubscriptionService(session, now=lambda: CANCELLED_AT)


async def subscriptions(session):
    stmt = select(Subscription).execution_options(populate_existing=True)
    return list((await session.execute(stmt)).scalars().all())


@pytest.mark.asyncio
async def test_admin_creates_subscription(session, service):
    result = await service.create_subscription(ADMIN_ID, WINDOW)

    assert result.success is True
    assert result.message == messages.SUBSCRIPTION_CREATED
    (subscription,) = await subscriptions(session)
    assert subscription.company_id == COMPANY_ID
    assert subscription.admin_id == ADMIN_ID
    assert subscription.canceled_by_admin_id is None


@pytest.mark.asyncio
@pytest.mark.parametrize("actor_id", [GUIDE_ID, INACTIVE_ADMIN_ID])
async def test_only_active_admins_manage_subscriptions(session, service, actor_id):
    result = await service.create_subscription(actor_id, WINDOW)

    assert result.success is False
    assert result.message == messages.SUBSCRIPTION_NOT_ADMIN
    assert await subscriptions(session) == []


@pytest.mark.asyncio
async def test_cancel_ends_subscription_now(session, service):
    await service.create_subscription(ADMIN_ID, WINDOW)
    (subscription,) = await subscriptions(session)

    result = await service.cancel_subscription(ADMIN_ID, subscription.id)

    assert result.message == messages.SUBSCRIPTION_CANCELLED
    (subscription,) = await subscriptions(session)
    assert subscription.canceled_by_admin_id == ADMIN_ID
    assert subscription.end_date.replace(tzinfo=None) == CANCELLED_AT.replace(tzinfo=None)


@pytest.mark.asyncio
async def test_cancel_unknown_subscription(service):
    result = await service.cancel_subscription(ADMIN_ID, 12345)

    assert result.message == messages.SUBSCRIPTION_NOT_FOUND
