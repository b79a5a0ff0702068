# tests/test_schemas.py
from datetime import date

import pytest

from tourlead.core.exceptions import ValidationError
from tourlead.schemas import (
    AcceptOfferRequest,
    ActionResult,
    CancelCampaignRequest,
    OfferCreateRequest,
    SubscriptionCreateRequest,
    parse_payload,
)

GUIDE_ID = "11111111-1111-4111-8111-111111111111"


def test_offer_create_strips_text_fields():
    req = parse_payload(
        OfferCreateRequest,
        {
            "guide_ids": [GUIDE_ID],
            "job_type": "  City tour ",
            "description": "Walk",
            "start_date": "2024-06-01",
            "end_date": "2024-06-01",
            "contact_person": "Marta",
            "contact_phone": "123",
            "unknown": "ignored",
        },
    )
    assert req.job_type == "City tour"
    assert req.start_date == req.end_date == date(2024, 6, 1)


def test_missing_fields_are_listed_in_one_message():
    with pytest.raises(ValidationError) as exc_info:
        parse_payload(OfferCreateRequest, {"guide_ids": [GUIDE_ID]})

    error = exc_info.value
    assert error.code == "invalid_payload"
    assert error.status_code == 422
    assert error.message.startswith("Invalid form data: ")
    for name in ("job_type", "description", "start_date", "end_date", "contact_person", "contact_phone"):
        assert f"{name} is required" in error.message
    assert len(error.details["errors"]) == 6


def test_non_object_payload():
    with pytest.raises(ValidationError) as exc_info:
        parse_payload(AcceptOfferRequest, ["not", "a", "mapping"])
    assert exc_info.value.message == "Invalid form data: a JSON object is required"


def test_accept_request_rejects_non_positive_offer_id():
    with pytest.raises(ValidationError) as exc_info:
        parse_payload(
            AcceptOfferRequest,
            {
                "offer_id": 0,
                "guide_id": GUIDE_ID,
                "company_id": GUIDE_ID,
                "job_type": "City tour",
                "start_date": "2024-06-01",
                "end_date": "2024-06-03",
            },
        )
    assert "offer_id" in exc_info.value.message


def test_cancel_campaign_accepts_either_key():
    by_id = parse_payload(CancelCampaignRequest, {"campaign_id": GUIDE_ID})
    by_tuple = parse_payload(
        CancelCampaignRequest,
        {"job_type": "City tour", "start_date": "2024-06-01", "end_date": "2024-06-03"},
    )
    assert str(by_id.campaign_id) == GUIDE_ID
    assert by_tuple.campaign_id is None

    with pytest.raises(ValidationError) as exc_info:
        parse_payload(CancelCampaignRequest, {})
    assert exc_info.value.message == "Invalid form data: missing campaign fields: job_type, start_date, end_date"


def test_cancel_campaign_rejects_blank_job_type():
    with pytest.raises(ValidationError) as exc_info:
        parse_payload(
            CancelCampaignRequest,
            {"job_type": "   ", "start_date": "2024-06-01", "end_date": "2024-06-03"},
        )
    assert exc_info.value.message == "Invalid form data: job_type is required"


def test_subscription_window_must_be_positive():
    with pytest.raises(ValidationError) as exc_info:
        parse_payload(
            SubscriptionCreateRequest,
            {
                "company_id": GUIDE_ID,
                "start_date": "2024-06-01T00:00:00+00:00",
                "end_date": "2024-06-01T00:00:00+00:00",
            },
        )
    assert "end_date must be after start_date" in exc_info.value.message


def test_action_result_helpers():
    assert ActionResult.ok("done").model_dump() == {"success": True, "message": "done"}
    assert ActionResult.fail("no").model_dump() == {"success": False, "message": "no"}
