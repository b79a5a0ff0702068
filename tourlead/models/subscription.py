# tourlead/models/subscription.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from tourlead.db.base import Base


class Subscription(Base):
    """A company's access window, managed by admins."""

    __tablename__ = "subscriptions"

    company_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True
    )
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    admin_id: Mapped[str] = mapped_column(String(36), nullable=False)
    canceled_by_admin_id: Mapped[Optional[str]] = mapped_column(String(36))
