# tourlead/models/profile.py
from __future__ import annotations

from typing import List, Optional

from sqlalchemy import JSON, Boolean, String, true
from sqlalchemy.orm import Mapped, mapped_column

from tourlead.db.base import Base


class Guide(Base):
    __tablename__ = "guides"

    # Same UUID as the guide's auth user
    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(200))
    phone: Mapped[Optional[str]] = mapped_column(String(50))
    # ISO dates the guide marked as unavailable
    availability: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)


class Company(Base):
    __tablename__ = "companies"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(200))


class Admin(Base):
    __tablename__ = "admins"

    user_id: Mapped[str] = mapped_column(String(36), nullable=False, unique=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default=true())
