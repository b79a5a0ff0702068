# tourlead/services/offer_store.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Sequence

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tourlead.core.logging import get_structlog_logger
from tourlead.db.errors import translate_store_error
from tourlead.models import Company, Guide, Offer, OfferStatus

logger = get_structlog_logger()


@dataclass(frozen=True)
class ReminderDetails:
    offer_id: int
    job_type: Optional[str]
    start_date: Optional[date]
    end_date: Optional[date]
    contact_person: Optional[str]
    contact_phone: Optional[str]
    guide_name: Optional[str]
    guide_email: Optional[str]
    company_name: Optional[str]


class OfferStore:
    """
    Every write to the offers table goes through here.

    Each mutation commits on its own. Status changes are conditional updates
    and return the affected row count so callers can tell "nothing matched"
    apart from a store failure (which raises PersistenceError).
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _commit(self, operation: str) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise translate_store_error(e, operation) from e

    async def insert_offers(self, rows: Sequence[Dict[str, Any]]) -> List[Offer]:
        offers = [Offer(status=OfferStatus.PENDING.value, **row) for row in rows]
        try:
            self.session.add_all(offers)
            await self.session.flush()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise translate_store_error(e, "insert_offers") from e
        await self._commit("insert_offers")

        logger.info("offer_store.inserted", count=len(offers), offer_ids=[o.id for o in offers])
        return offers

    async def get_offer(self, offer_id: int) -> Optional[Offer]:
        stmt = (
            select(Offer)
            .where(Offer.id == offer_id)
            .execution_options(populate_existing=True)
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise translate_store_error(e, "get_offer") from e
        return result.scalar_one_or_none()

    async def find_campaign_id(
        self,
        *,
        company_id: str,
        job_type: str,
        start_date: date,
        end_date: date,
    ) -> Optional[str]:
        stmt = (
            select(Offer.campaign_id)
            .where(
                Offer.company_id == company_id,
                Offer.job_type == job_type,
                Offer.start_date == start_date,
                Offer.end_date == end_date,
                Offer.campaign_id.is_not(None),
            )
            .order_by(Offer.id)
            .limit(1)
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise translate_store_error(e, "find_campaign_id") from e
        return result.scalar_one_or_none()

    async def transition(
        self,
        offer_id: int,
        *,
        to_status: OfferStatus,
        guide_id: Optional[str] = None,
        company_id: Optional[str] = None,
        from_status: OfferStatus = OfferStatus.PENDING,
    ) -> int:
        """Compare-and-swap the status of one offer. Returns rows affected."""
        conditions = [Offer.id == offer_id, Offer.status == from_status.value]
        if guide_id is not None:
            conditions.append(Offer.guide_id == guide_id)
        if company_id is not None:
            conditions.append(Offer.company_id == company_id)

        stmt = (
            update(Offer)
            .where(*conditions)
            .values(status=to_status.value)
            .execution_options(synchronize_session=False)
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise translate_store_error(e, "transition_offer") from e
        await self._commit("transition_offer")

        logger.info(
            "offer_store.transition",
            offer_id=offer_id,
            to_status=to_status.value,
            rowcount=result.rowcount,
        )
        return result.rowcount

    async def reject_pending_in_campaign(
        self,
        *,
        company_id: str,
        job_type: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        campaign_id: Optional[str] = None,
    ) -> int:
        conditions = [
            Offer.company_id == company_id,
            Offer.status == OfferStatus.PENDING.value,
        ]
        if campaign_id is not None:
            conditions.append(Offer.campaign_id == campaign_id)
        else:
            conditions.extend([
                Offer.job_type == job_type,
                Offer.start_date == start_date,
                Offer.end_date == end_date,
            ])

        stmt = (
            update(Offer)
            .where(*conditions)
            .values(status=OfferStatus.REJECTED.value)
            .execution_options(synchronize_session=False)
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise translate_store_error(e, "reject_campaign") from e
        await self._commit("reject_campaign")
        return result.rowcount

    async def update_details(
        self,
        offer_ids: Iterable[int],
        *,
        company_id: str,
        values: Dict[str, Any],
    ) -> int:
        stmt = (
            update(Offer)
            .where(Offer.id.in_(list(offer_ids)), Offer.company_id == company_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise translate_store_error(e, "update_offer_details") from e
        await self._commit("update_offer_details")
        return result.rowcount

    async def get_reminder_details(self, offer_id: int, *, company_id: str) -> Optional[ReminderDetails]:
        """Offer joined with its guide and company, only while still pending."""
        stmt = (
            select(
                Offer.id,
                Offer.job_type,
                Offer.start_date,
                Offer.end_date,
                Offer.contact_person,
                Offer.contact_phone,
                Guide.name.label("guide_name"),
                Guide.email.label("guide_email"),
                Company.name.label("company_name"),
            )
            .select_from(Offer)
            .outerjoin(Guide, Guide.id == Offer.guide_id)
            .outerjoin(Company, Company.id == Offer.company_id)
            .where(
                Offer.id == offer_id,
                Offer.company_id == company_id,
                Offer.status == OfferStatus.PENDING.value,
            )
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise translate_store_error(e, "get_reminder_details") from e

        row = result.first()
        if row is None:
            return None
        return ReminderDetails(
            offer_id=row.id,
            job_type=row.job_type,
            start_date=row.start_date,
            end_date=row.end_date,
            contact_person=row.contact_person,
            contact_phone=row.contact_phone,
            guide_name=row.guide_name,
            guide_email=row.guide_email,
            company_name=row.company_name,
        )

    async def list_pending_for_guide(self, guide_id: str) -> List[tuple[Offer, Optional[Company]]]:
        stmt = (
            select(Offer, Company)
            .outerjoin(Company, Company.id == Offer.company_id)
            .where(Offer.guide_id == guide_id, Offer.status == OfferStatus.PENDING.value)
            .order_by(Offer.start_date, Offer.id)
            .execution_options(populate_existing=True)
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise translate_store_error(e, "list_pending_for_guide") from e
        return [(offer, company) for offer, company in result.all()]

    async def list_open_for_company(self, company_id: str, *, today: date) -> List[tuple[Offer, Optional[Guide]]]:
        """Pending and accepted offers of a company whose job has not ended."""
        stmt = (
            select(Offer, Guide)
            .outerjoin(Guide, Guide.id == Offer.guide_id)
            .where(
                Offer.company_id == company_id,
                Offer.status.in_([OfferStatus.PENDING.value, OfferStatus.ACCEPTED.value]),
                Offer.end_date >= today,
            )
            .order_by(Offer.start_date, Offer.id)
            .execution_options(populate_existing=True)
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise translate_store_error(e, "list_open_for_company") from e
        return [(offer, guide) for offer, guide in result.all()]
