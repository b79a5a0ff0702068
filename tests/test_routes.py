# tests/test_routes.py
from datetime import date, timedelta

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from tourlead.db.session import get_session
from tourlead.main import app
from tourlead.services import messages
from tourlead.services.auth import create_access_token
from tourlead.services.notifications import get_notifier

from tests.conftest import ADMIN_ID, COMPANY_ID, GUIDE2_ID, GUIDE_ID, add_commitment, all_offers

START = date.today() + timedelta(days=30)
END = START + timedelta(days=2)


def auth(user_id):
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}


@pytest_asyncio.fixture
async def client(session, notifier):
    async def _session():
        yield session

    app.dependency_overrides[get_session] = _session
    app.dependency_overrides[get_notifier] = lambda: notifier
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


def new_offer(guide_ids=(GUIDE_ID, GUIDE2_ID)):
    return {
        "guide_ids": list(guide_ids),
        "job_type": "Glacier trek",
        "description": "Two day trek with camping",
        "start_date": START.isoformat(),
        "end_date": END.isoformat(),
        "contact_person": "Marta",
        "contact_phone": "+56 9 1234 5678",
    }


@pytest.mark.asyncio
async def test_missing_or_bad_token_is_401(client):
    missing = await client.post("/api/offers", json=new_offer())
    bad = await client.post("/api/offers", json=new_offer(), headers={"Authorization": "Bearer nope"})

    assert missing.status_code == 401
    assert missing.json()["code"] == "missing_token"
    assert bad.status_code == 401
    assert bad.json()["code"] == "invalid_token"


@pytest.mark.asyncio
async def test_offer_flow_over_http(client, session, notifier):
    created = await client.post("/api/offers", json=new_offer(), headers=auth(COMPANY_ID))
    assert created.status_code == 200
    assert created.json() == {"success": True, "message": messages.OFFER_CREATED}
    assert "X-Request-ID" in created.headers

    pending = await client.get("/api/offers/pending", headers=auth(GUIDE_ID))
    assert pending.status_code == 200
    (offer,) = pending.json()
    assert offer["company_name"] == "Andes Tours"
    assert offer["job_type"] == "Glacier trek"

    accepted = await client.post(
        f"/api/offers/{offer['id']}/accept",
        json={
            "guide_id": GUIDE_ID,
            "company_id": COMPANY_ID,
            "job_type": offer["job_type"],
            "start_date": offer["start_date"],
            "end_date": offer["end_date"],
        },
        headers=auth(GUIDE_ID),
    )
    assert accepted.json() == {"success": True, "message": messages.OFFER_ACCEPTED}

    campaigns = await client.get("/api/offers/campaigns", headers=auth(COMPANY_ID))
    (campaign,) = campaigns.json()
    assert campaign["job_type"] == "Glacier trek"
    assert sorted(o["status"] for o in campaign["offers"]) == ["accepted", "pending"]

    commitments = await client.get("/api/commitments", headers=auth(GUIDE_ID))
    (commitment,) = commitments.json()
    assert commitment["offer_id"] == offer["id"]
    assert commitment["counterpart_name"] == "Andes Tours"

    history = await client.get("/api/commitments", params={"history": "true"}, headers=auth(GUIDE_ID))
    assert history.json() == []

    cancelled = await client.post(
        "/api/offers/campaign/cancel",
        json={"campaign_id": campaign["campaign_id"]},
        headers=auth(COMPANY_ID),
    )
    assert cancelled.json()["message"] == messages.CAMPAIGN_CANCELLED.format(count=1)
    assert sorted(o.status for o in await all_offers(session)) == ["accepted", "rejected"]

    assert notifier.kinds() == ["offer_created", "offer_created", "offer_accepted"]


@pytest.mark.asyncio
async def test_invalid_payload_comes_back_as_failed_result(client):
    response = await client.post("/api/offers", json={"guide_ids": []}, headers=auth(COMPANY_ID))

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is False
    assert body["message"].startswith("Invalid form data: ")


@pytest.mark.asyncio
async def test_guide_reject_and_remind(client, session):
    await client.post("/api/offers", json=new_offer([GUIDE_ID]), headers=auth(COMPANY_ID))
    (offer,) = await all_offers(session)

    reminded = await client.post(f"/api/offers/{offer.id}/remind", headers=auth(COMPANY_ID))
    rejected = await client.post(f"/api/offers/{offer.id}/guide-reject", headers=auth(GUIDE_ID))
    again = await client.post(f"/api/offers/{offer.id}/reject", headers=auth(COMPANY_ID))

    assert reminded.json()["message"] == messages.REMINDER_SENT.format(guide_name="Ana")
    assert rejected.json() == {"success": True, "message": messages.OFFER_REJECTED}
    assert again.json() == {"success": False, "message": messages.REJECT_NOT_PENDING}


@pytest.mark.asyncio
async def test_reputation_and_subscription_endpoints(client):
    reputation = await client.get(f"/api/reputation/guides/{GUIDE_ID}")
    assert reputation.json() == {"rating": 0.0, "reviews": 0}

    created = await client.post(
        "/api/subscriptions",
        json={
            "company_id": COMPANY_ID,
            "start_date": "2024-06-01T00:00:00+00:00",
            "end_date": "2025-06-01T00:00:00+00:00",
        },
        headers=auth(ADMIN_ID),
    )
    refused = await client.post("/api/subscriptions/1/cancel", headers=auth(COMPANY_ID))
    cancelled = await client.post("/api/subscriptions/1/cancel", headers=auth(ADMIN_ID))

    assert created.json()["message"] == messages.SUBSCRIPTION_CREATED
    assert refused.json() == {"success": False, "message": messages.SUBSCRIPTION_NOT_ADMIN}
    assert cancelled.json()["message"] == messages.SUBSCRIPTION_CANCELLED


@pytest.mark.asyncio
async def test_listings_carry_counterpart_reputation(client, session):
    finished = await add_commitment(
        session, company_id=COMPANY_ID, start=date(2024, 5, 1), end=date(2024, 5, 2)
    )
    finished.guide_rating = 4
    finished.company_rating = 5
    await session.commit()
    await client.post("/api/offers", json=new_offer(), headers=auth(COMPANY_ID))

    (offer,) = (await client.get("/api/offers/pending", headers=auth(GUIDE_ID))).json()
    (campaign,) = (await client.get("/api/offers/campaigns", headers=auth(COMPANY_ID))).json()

    assert (offer["rating"], offer["reviews"]) == (5.0, 1)
    by_guide = {row["guide_id"]: (row["rating"], row["reviews"]) for row in campaign["offers"]}
    assert by_guide == {GUIDE_ID: (4.0, 1), GUIDE2_ID: (0.0, 0)}


@pytest.mark.asyncio
async def test_availability_over_http(client, session):
    await add_commitment(session, company_id=COMPANY_ID, start=START, end=START + timedelta(days=1))
    later = END + timedelta(days=5)
    sooner = END + timedelta(days=3)

    saved = await client.put(
        "/api/availability",
        json={"unavailable_days": [later.isoformat(), sooner.isoformat(), sooner.isoformat()]},
        headers=auth(GUIDE_ID),
    )
    view = await client.get("/api/availability", headers=auth(GUIDE_ID))

    assert saved.json() == {"success": True, "message": messages.AVAILABILITY_SAVED}
    assert view.json() == {
        "unavailable_days": [sooner.isoformat(), later.isoformat()],
        "booked_days": [START.isoformat(), (START + timedelta(days=1)).isoformat()],
    }


@pytest.mark.asyncio
async def test_availability_is_for_guides_only(client):
    saved = await client.put("/api/availability", json={"unavailable_days": []}, headers=auth(COMPANY_ID))
    view = await client.get("/api/availability", headers=auth(COMPANY_ID))

    assert saved.json() == {"success": False, "message": messages.GUIDE_NOT_FOUND}
    assert view.status_code == 404
    assert view.json()["code"] == "guide_not_found"


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/api/health")

    assert response.status_code == 200
    body = response.json()
    assert body["checks"]["database"]["status"] == "healthy"
    assert body["status"] == "healthy"
