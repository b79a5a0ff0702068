# tourlead/services/listings.py
"""Read-only views for the guide and company dashboards."""
from __future__ import annotations

from datetime import date
from typing import Dict, List, Tuple

from tourlead.schemas.commitments import ReputationResponse
from tourlead.schemas.listings import (
    CampaignOfferView,
    CampaignView,
    CommitmentView,
    PendingOfferView,
)
from tourlead.services.commitment_store import CommitmentStore
from tourlead.services.offer_store import OfferStore
from tourlead.services.reputation import summarize


async def _reputations(commitments: CommitmentStore, ids, *, of: str) -> Dict[str, ReputationResponse]:
    """Reputation per distinct id; `of` is "guide" or "company"."""
    reputations = {}
    for owner_id in dict.fromkeys(ids):
        average, count = await commitments.rating_stats(**{f"{of}_id": owner_id})
        reputations[owner_id] = summarize(average, count)
    return reputations


async def pending_offers_for_guide(
    store: OfferStore, commitments: CommitmentStore, guide_id: str
) -> List[PendingOfferView]:
    rows = await store.list_pending_for_guide(guide_id)
    reputations = await _reputations(commitments, (offer.company_id for offer, _ in rows), of="company")
    return [
        PendingOfferView(
            id=offer.id,
            campaign_id=offer.campaign_id,
            company_id=offer.company_id,
            company_name=company.name if company else None,
            job_type=offer.job_type,
            description=offer.description,
            start_date=offer.start_date,
            end_date=offer.end_date,
            contact_person=offer.contact_person,
            contact_phone=offer.contact_phone,
            rating=reputations[offer.company_id].rating,
            reviews=reputations[offer.company_id].reviews,
        )
        for offer, company in rows
    ]


async def campaigns_for_company(
    store: OfferStore, commitments: CommitmentStore, company_id: str, *, today: date
) -> List[CampaignView]:
    """
    Pending and accepted offers whose job has not ended, grouped into campaigns.

    Offers group by campaign_id; rows without one fall back to the
    (job_type, start_date, end_date) tuple. Campaigns come back ordered by
    start date. Each offer row carries the guide's reputation.
    """
    rows = await store.list_open_for_company(company_id, today=today)
    reputations = await _reputations(commitments, (offer.guide_id for offer, _ in rows), of="guide")

    campaigns: Dict[Tuple, CampaignView] = {}
    for offer, guide in rows:
        key = (
            ("campaign", offer.campaign_id)
            if offer.campaign_id
            else ("tuple", offer.job_type, offer.start_date, offer.end_date)
        )
        campaign = campaigns.get(key)
        if campaign is None:
            campaign = campaigns[key] = CampaignView(
                campaign_id=offer.campaign_id,
                job_type=offer.job_type,
                description=offer.description,
                start_date=offer.start_date,
                end_date=offer.end_date,
                contact_person=offer.contact_person,
                contact_phone=offer.contact_phone,
            )
        campaign.offers.append(
            CampaignOfferView(
                id=offer.id,
                guide_id=offer.guide_id,
                guide_name=guide.name if guide else None,
                status=offer.status,
                rating=reputations[offer.guide_id].rating,
                reviews=reputations[offer.guide_id].reviews,
            )
        )

    return sorted(campaigns.values(), key=lambda c: c.start_date)


async def commitments_for_actor(
    store: CommitmentStore, actor_id: str, *, today: date, history: bool = False
) -> List[CommitmentView]:
    """Commitments where the actor is either the guide or the company."""
    views = []
    for commitment, company in await store.list_for_guide(actor_id, today=today, history=history):
        views.append(_commitment_view(commitment, company.name if company else None))
    for commitment, guide in await store.list_for_company(actor_id, today=today, history=history):
        views.append(_commitment_view(commitment, guide.name if guide else None))

    views.sort(key=lambda v: v.start_date, reverse=history)
    return views


def _commitment_view(commitment, counterpart_name) -> CommitmentView:
    return CommitmentView(
        id=commitment.id,
        offer_id=commitment.offer_id,
        guide_id=commitment.guide_id,
        company_id=commitment.company_id,
        counterpart_name=counterpart_name,
        job_type=commitment.job_type,
        start_date=commitment.start_date,
        end_date=commitment.end_date,
        guide_rating=commitment.guide_rating,
        guide_rating_comment=commitment.guide_rating_comment,
        company_rating=commitment.company_rating,
        company_rating_comment=commitment.company_rating_comment,
    )
