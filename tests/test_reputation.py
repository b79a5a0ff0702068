# tests/test_reputation.py
from datetime import date

import pytest

from tourlead.services import messages
from tourlead.services.commitment_store import CommitmentStore
from tourlead.services.reputation import ReputationService, summarize

from tests.conftest import (
    COMPANY_ID,
    GUIDE2_ID,
    GUIDE_ID,
    OTHER_COMPANY_ID,
    add_commitment,
    all_commitments,
)

AFTER_JOBS = date(2024, 7, 1)


@pytest.fixture
def service(session):
    return ReputationService(CommitmentStore(session), today=lambda: AFTER_JOBS)


def test_summarize_rounds_to_one_decimal():
    assert summarize(13 / 3, 3).model_dump() == {"rating": 4.3, "reviews": 3}
    assert summarize(None, 0).model_dump() == {"rating": 0.0, "reviews": 0}


@pytest.mark.asyncio
async def test_each_party_rates_the_other(session, service):
    commitment = await add_commitment(session, company_id=COMPANY_ID)

    by_company = await service.rate_commitment(COMPANY_ID, commitment.id, {"rating": 5, "comment": "Great guide"})
    by_guide = await service.rate_commitment(GUIDE_ID, commitment.id, {"rating": 3})

    assert by_company.message == messages.RATING_SAVED
    assert by_guide.message == messages.RATING_SAVED
    (commitment,) = await all_commitments(session)
    assert commitment.guide_rating == 5
    assert commitment.guide_rating_comment == "Great guide"
    assert commitment.company_rating == 3


@pytest.mark.asyncio
async def test_outsider_cannot_rate(session, service):
    commitment = await add_commitment(session, company_id=COMPANY_ID)

    result = await service.rate_commitment(OTHER_COMPANY_ID, commitment.id, {"rating": 4})

    assert result.success is False
    assert result.message == messages.RATING_NOT_AUTHORIZED


@pytest.mark.asyncio
async def test_cannot_rate_before_job_ends(session):
    commitment = await add_commitment(session, company_id=COMPANY_ID, start=date(2024, 6, 3), end=date(2024, 6, 5))
    service = ReputationService(CommitmentStore(session), today=lambda: date(2024, 6, 5))

    result = await service.rate_commitment(COMPANY_ID, commitment.id, {"rating": 4})

    assert result.message == messages.RATING_TOO_EARLY


@pytest.mark.asyncio
async def test_rating_out_of_range_or_missing_commitment(session, service):
    commitment = await add_commitment(session, company_id=COMPANY_ID)

    too_high = await service.rate_commitment(COMPANY_ID, commitment.id, {"rating": 6})
    missing = await service.rate_commitment(COMPANY_ID, 9999, {"rating": 4})

    assert too_high.success is False
    assert too_high.message.startswith("Invalid form data: rating")
    assert missing.message == messages.COMMITMENT_NOT_FOUND


@pytest.mark.asyncio
async def test_reputation_averages_received_ratings(session, service):
    for rating in (4, 4, 5):
        commitment = await add_commitment(session, company_id=COMPANY_ID)
        await service.rate_commitment(COMPANY_ID, commitment.id, {"rating": rating})
    other = await add_commitment(session, guide_id=GUIDE2_ID, company_id=COMPANY_ID)
    await service.rate_commitment(GUIDE2_ID, other.id, {"rating": 2})

    guide = await service.guide_reputation(GUIDE_ID)
    company = await service.company_reputation(COMPANY_ID)
    unrated = await service.guide_reputation(GUIDE2_ID)

    assert (guide.rating, guide.reviews) == (4.3, 3)
    assert (company.rating, company.reviews) == (2.0, 1)
    assert (unrated.rating, unrated.reviews) == (0.0, 0)
