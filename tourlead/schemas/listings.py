# tourlead/schemas/listings.py
from __future__ import annotations

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field


class PendingOfferView(BaseModel):
    id: int
    campaign_id: Optional[str] = None
    company_id: str
    company_name: Optional[str] = None
    job_type: str
    description: str
    start_date: date
    end_date: date
    contact_person: Optional[str] = None
    contact_phone: Optional[str] = None
    # Reputation of the sending company
    rating: float = 0.0
    reviews: int = 0


class CampaignOfferView(BaseModel):
    id: int
    guide_id: str
    guide_name: Optional[str] = None
    status: str
    # Reputation of the guide
    rating: float = 0.0
    reviews: int = 0


class CampaignView(BaseModel):
    """Offers a company sent together for one job."""

    campaign_id: Optional[str] = None
    job_type: str
    description: str
    start_date: date
    end_date: date
    contact_person: Optional[str] = None
    contact_phone: Optional[str] = None
    offers: List[CampaignOfferView] = Field(default_factory=list)


class CommitmentView(BaseModel):
    id: int
    offer_id: Optional[int] = None
    guide_id: str
    company_id: str
    counterpart_name: Optional[str] = None
    job_type: str
    start_date: date
    end_date: date
    guide_rating: Optional[int] = None
    guide_rating_comment: Optional[str] = None
    company_rating: Optional[int] = None
    company_rating_comment: Optional[str] = None
