# tests/conftest.py
import os

os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "tourlead-test-secret-key-0123456789abcdef")
os.environ.setdefault("EMAIL_PROVIDER", "console")
os.environ.setdefault("LOG_FORMAT", "console")

from datetime import date  # noqa: E402
from typing import List, Optional, Set, Tuple  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from sqlalchemy import select  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from tourlead.core.exceptions import NotificationError  # noqa: E402
from tourlead.db.session import init_models  # noqa: E402
from tourlead.models import Admin, Commitment, Company, Guide, Offer  # noqa: E402
from tourlead.services.notifications import Notifier, RenderedEmail  # noqa: E402
from tourlead.services.offer_lifecycle import OfferLifecycleController  # noqa: E402

GUIDE_ID = "11111111-1111-4111-8111-111111111111"
GUIDE2_ID = "11111111-1111-4111-8111-222222222222"
GUIDE_NO_EMAIL_ID = "11111111-1111-4111-8111-333333333333"
COMPANY_ID = "22222222-2222-4222-8222-111111111111"
OTHER_COMPANY_ID = "22222222-2222-4222-8222-222222222222"
ADMIN_ID = "33333333-3333-4333-8333-111111111111"
INACTIVE_ADMIN_ID = "33333333-3333-4333-8333-222222222222"


class RecordingNotifier(Notifier):
    """Keeps every rendered email; kinds listed in fail_kinds raise instead."""

    def __init__(self, fail_kinds: Optional[Set[str]] = None):
        self.sent: List[Tuple[str, RenderedEmail]] = []
        self.fail_kinds = fail_kinds or set()

    async def deliver(self, message: RenderedEmail, kind: str) -> None:
        if kind in self.fail_kinds:
            raise NotificationError("The email could not be sent.", code="email_send_failed")
        self.sent.append((kind, message))

    def kinds(self) -> List[str]:
        return [kind for kind, _ in self.sent]


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await init_models(bind=engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine):
    factory = async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
    async with factory() as session:
        session.add_all([
            Guide(id=GUIDE_ID, name="Ana", email="ana@example.com"),
            Guide(id=GUIDE2_ID, name="Bruno", email="bruno@example.com"),
            Guide(id=GUIDE_NO_EMAIL_ID, name="Carla", email=None),
            Company(id=COMPANY_ID, name="Andes Tours", email="ops@andes.example.com"),
            Company(id=OTHER_COMPANY_ID, name="Patagonia Trips", email="hello@patagonia.example.com"),
            Admin(user_id=ADMIN_ID, is_active=True),
            Admin(user_id=INACTIVE_ADMIN_ID, is_active=False),
        ])
        await session.commit()
        yield session


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def controller(session, notifier):
    return OfferLifecycleController.from_session(session, notifier)


def offer_payload(guide_ids=(GUIDE_ID,), **overrides):
    payload = {
        "guide_ids": list(guide_ids),
        "job_type": "City tour",
        "description": "Full day walking tour of the old town",
        "start_date": "2024-06-01",
        "end_date": "2024-06-03",
        "contact_person": "Marta",
        "contact_phone": "+56 9 1234 5678",
    }
    payload.update(overrides)
    return payload


def accept_payload(offer, **overrides):
    payload = {
        "offer_id": offer.id,
        "guide_id": offer.guide_id,
        "company_id": offer.company_id,
        "job_type": offer.job_type,
        "start_date": offer.start_date.isoformat(),
        "end_date": offer.end_date.isoformat(),
    }
    payload.update(overrides)
    return payload


async def all_offers(session) -> List[Offer]:
    stmt = select(Offer).order_by(Offer.id).execution_options(populate_existing=True)
    return list((await session.execute(stmt)).scalars().all())


async def all_commitments(session) -> List[Commitment]:
    stmt = select(Commitment).order_by(Commitment.id).execution_options(populate_existing=True)
    return list((await session.execute(stmt)).scalars().all())


async def add_commitment(session, *, guide_id=GUIDE_ID, company_id=OTHER_COMPANY_ID,
                         start=date(2024, 6, 3), end=date(2024, 6, 5), job_type="Trekking"):
    commitment = Commitment(
        guide_id=guide_id,
        company_id=company_id,
        job_type=job_type,
        start_date=start,
        end_date=end,
    )
    session.add(commitment)
    await session.commit()
    return commitment
