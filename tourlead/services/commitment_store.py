# tourlead/services/commitment_store.py
from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tourlead.core.logging import get_structlog_logger
from tourlead.db.errors import translate_store_error
from tourlead.models import Commitment, Company, Guide

logger = get_structlog_logger()


class CommitmentStore:
    """Reads and writes commitment rows. Mutations commit immediately."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(
        self,
        *,
        offer_id: int,
        guide_id: str,
        company_id: str,
        job_type: str,
        start_date: date,
        end_date: date,
    ) -> Commitment:
        commitment = Commitment(
            offer_id=offer_id,
            guide_id=guide_id,
            company_id=company_id,
            job_type=job_type,
            start_date=start_date,
            end_date=end_date,
        )
        try:
            self.session.add(commitment)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise translate_store_error(e, "create_commitment") from e

        logger.info("commitment_store.created", commitment_id=commitment.id, offer_id=offer_id)
        return commitment

    async def delete(self, commitment_id: int) -> int:
        """Delete by id. Deleting an already-missing row affects zero rows."""
        stmt = delete(Commitment).where(Commitment.id == commitment_id)
        try:
            result = await self.session.execute(stmt)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise translate_store_error(e, "delete_commitment") from e

        logger.info("commitment_store.deleted", commitment_id=commitment_id, rowcount=result.rowcount)
        return result.rowcount

    async def get(self, commitment_id: int) -> Optional[Commitment]:
        stmt = (
            select(Commitment)
            .where(Commitment.id == commitment_id)
            .execution_options(populate_existing=True)
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise translate_store_error(e, "get_commitment") from e
        return result.scalar_one_or_none()

    async def find_overlapping(self, guide_id: str, start_date: date, end_date: date) -> List[Commitment]:
        """Commitments of the guide touching [start_date, end_date], bounds inclusive."""
        stmt = (
            select(Commitment)
            .where(
                Commitment.guide_id == guide_id,
                Commitment.start_date <= end_date,
                Commitment.end_date >= start_date,
            )
            .order_by(Commitment.start_date)
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise translate_store_error(e, "find_overlapping") from e
        return list(result.scalars().all())

    async def list_for_guide(
        self, guide_id: str, *, today: date, history: bool = False
    ) -> List[Tuple[Commitment, Optional[Company]]]:
        period = Commitment.end_date < today if history else Commitment.end_date >= today
        stmt = (
            select(Commitment, Company)
            .outerjoin(Company, Company.id == Commitment.company_id)
            .where(Commitment.guide_id == guide_id, period)
            .order_by(Commitment.start_date.desc() if history else Commitment.start_date)
            .execution_options(populate_existing=True)
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise translate_store_error(e, "list_for_guide") from e
        return [(c, company) for c, company in result.all()]

    async def list_for_company(
        self, company_id: str, *, today: date, history: bool = False
    ) -> List[Tuple[Commitment, Optional[Guide]]]:
        period = Commitment.end_date < today if history else Commitment.end_date >= today
        stmt = (
            select(Commitment, Guide)
            .outerjoin(Guide, Guide.id == Commitment.guide_id)
            .where(Commitment.company_id == company_id, period)
            .order_by(Commitment.start_date.desc() if history else Commitment.start_date)
            .execution_options(populate_existing=True)
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise translate_store_error(e, "list_for_company") from e
        return [(c, guide) for c, guide in result.all()]

    async def set_rating(self, commitment_id: int, values: Dict[str, Any]) -> int:
        stmt = (
            update(Commitment)
            .where(Commitment.id == commitment_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        try:
            result = await self.session.execute(stmt)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise translate_store_error(e, "set_rating") from e
        return result.rowcount

    async def rating_stats(
        self, *, guide_id: Optional[str] = None, company_id: Optional[str] = None
    ) -> Tuple[Optional[float], int]:
        """Average and count of the ratings received by a guide or a company."""
        if guide_id is not None:
            column, owner = Commitment.guide_rating, Commitment.guide_id == guide_id
        else:
            column, owner = Commitment.company_rating, Commitment.company_id == company_id

        stmt = select(func.avg(column), func.count(column)).where(owner, column.is_not(None))
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise translate_store_error(e, "rating_stats") from e
        avg, count = result.one()
        return (float(avg) if avg is not None else None, int(count or 0))
