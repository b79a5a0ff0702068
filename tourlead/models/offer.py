# tourlead/models/offer.py
from __future__ import annotations

import enum
from datetime import date
from typing import Optional

from sqlalchemy import Date, Enum, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from tourlead.db.base import Base


class OfferStatus(str, enum.Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class Offer(Base):
    __tablename__ = "offers"

    guide_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("guides.id", ondelete="CASCADE"), nullable=False, index=True
    )
    company_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Offers sent together share this id; legacy rows are grouped by
    # (company_id, job_type, start_date, end_date) instead.
    campaign_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True, index=True)

    job_type: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)

    status: Mapped[str] = mapped_column(
        Enum(*[s.value for s in OfferStatus], name="offer_status"),
        nullable=False,
        default=OfferStatus.PENDING.value,
        server_default=OfferStatus.PENDING.value,
    )

    contact_person: Mapped[Optional[str]] = mapped_column(String(200))
    contact_phone: Mapped[Optional[str]] = mapped_column(String(50))

    __table_args__ = (
        Index("idx_offers_guide_status", "guide_id", "status"),
        Index("idx_offers_campaign_tuple", "company_id", "job_type", "start_date", "end_date"),
    )
