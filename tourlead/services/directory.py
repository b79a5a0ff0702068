# tourlead/services/directory.py
from __future__ import annotations

from typing import Dict, Iterable, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tourlead.db.errors import translate_store_error
from tourlead.models import Admin, Company, Guide


class Directory:
    """Read-only lookups of guide and company contact details."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_company(self, company_id: str) -> Optional[Company]:
        try:
            result = await self.session.execute(select(Company).where(Company.id == company_id))
        except SQLAlchemyError as e:
            raise translate_store_error(e, "get_company") from e
        return result.scalar_one_or_none()

    async def get_guide(self, guide_id: str) -> Optional[Guide]:
        try:
            result = await self.session.execute(select(Guide).where(Guide.id == guide_id))
        except SQLAlchemyError as e:
            raise translate_store_error(e, "get_guide") from e
        return result.scalar_one_or_none()

    async def get_guides(self, guide_ids: Iterable[str]) -> Dict[str, Guide]:
        ids = list(guide_ids)
        if not ids:
            return {}
        try:
            result = await self.session.execute(select(Guide).where(Guide.id.in_(ids)))
        except SQLAlchemyError as e:
            raise translate_store_error(e, "get_guides") from e
        return {guide.id: guide for guide in result.scalars().all()}

    async def is_active_admin(self, user_id: str) -> bool:
        stmt = select(Admin.id).where(Admin.user_id == user_id, Admin.is_active.is_(True))
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise translate_store_error(e, "is_active_admin") from e
        return result.first() is not None
