# tourlead/services/availability.py
"""
Guide calendars.

A guide is available every day unless the day is in their saved
unavailable set. Days covered by an upcoming commitment are reported
separately as booked; the guide cannot edit those.
"""
from __future__ import annotations

from datetime import date, timedelta
from typing import Any, Callable, Iterable, List, Mapping

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tourlead.core.exceptions import NotFoundError, PersistenceError
from tourlead.core.logging import get_structlog_logger
from tourlead.db.errors import translate_store_error
from tourlead.schemas.availability import AvailabilityUpdateRequest, AvailabilityView
from tourlead.schemas.offers import ActionResult, parse_payload
from tourlead.services import messages
from tourlead.services.actions import action_boundary
from tourlead.services.commitment_store import CommitmentStore
from tourlead.services.directory import Directory

logger = get_structlog_logger()


def days_between(start: date, end: date) -> List[date]:
    """Every day from start to end, both included."""
    return [start + timedelta(days=n) for n in range((end - start).days + 1)]


def booked_days(commitments: Iterable[Any]) -> List[date]:
    days = set()
    for commitment in commitments:
        days.update(days_between(commitment.start_date, commitment.end_date))
    return sorted(days)


class AvailabilityService:
    def __init__(self, session: AsyncSession, today: Callable[[], date] = date.today):
        self.session = session
        self.directory = Directory(session)
        self.commitments = CommitmentStore(session)
        self.today = today

    async def get_availability(self, guide_id: str) -> AvailabilityView:
        guide = await self.directory.get_guide(guide_id)
        if guide is None:
            raise NotFoundError(messages.GUIDE_NOT_FOUND, code="guide_not_found")

        rows = await self.commitments.list_for_guide(guide_id, today=self.today())
        return AvailabilityView(
            unavailable_days=sorted(date.fromisoformat(day) for day in guide.availability or []),
            booked_days=booked_days(commitment for commitment, _ in rows),
        )

    @action_boundary("set_availability")
    async def set_availability(self, actor_id: str, payload: Mapping[str, Any]) -> ActionResult:
        req = parse_payload(AvailabilityUpdateRequest, payload)

        try:
            guide = await self.directory.get_guide(actor_id)
        except PersistenceError as e:
            raise PersistenceError(messages.AVAILABILITY_SAVE_FAILED, code=e.code, details=e.details) from e
        if guide is None:
            raise NotFoundError(messages.GUIDE_NOT_FOUND, code="guide_not_found")

        days = sorted(set(req.unavailable_days))
        try:
            guide.availability = [day.isoformat() for day in days]
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            error = translate_store_error(e, "set_availability")
            raise PersistenceError(messages.AVAILABILITY_SAVE_FAILED, code=error.code, details=error.details) from e

        logger.info("availability.saved", guide_id=actor_id, unavailable_days=len(days))
        return ActionResult.ok(messages.AVAILABILITY_SAVED)
