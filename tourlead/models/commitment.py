# tourlead/models/commitment.py
from __future__ import annotations

from datetime import date
from typing import Optional

from sqlalchemy import CheckConstraint, Date, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from tourlead.db.base import Base


class Commitment(Base):
    """A booked date range, created when a guide accepts an offer."""

    __tablename__ = "commitments"

    guide_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("guides.id", ondelete="CASCADE"), nullable=False, index=True
    )
    company_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True
    )
    offer_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("offers.id", ondelete="SET NULL"), nullable=True, index=True
    )

    job_type: Mapped[str] = mapped_column(String(200), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)

    # guide_rating is given by the company, company_rating by the guide.
    guide_rating: Mapped[Optional[int]] = mapped_column(Integer)
    guide_rating_comment: Mapped[Optional[str]] = mapped_column(Text)
    company_rating: Mapped[Optional[int]] = mapped_column(Integer)
    company_rating_comment: Mapped[Optional[str]] = mapped_column(Text)

    __table_args__ = (
        Index("idx_commitments_guide_range", "guide_id", "start_date", "end_date"),
        CheckConstraint("guide_rating IS NULL OR (guide_rating BETWEEN 1 AND 5)", name="guide_rating_range"),
        CheckConstraint("company_rating IS NULL OR (company_rating BETWEEN 1 AND 5)", name="company_rating_range"),
    )
