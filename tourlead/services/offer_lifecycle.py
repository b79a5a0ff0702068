# tourlead/services/offer_lifecycle.py
"""
Offer lifecycle: create, accept, reject, cancel, edit and remind.

Every public operation takes the caller's id explicitly, validates its
payload, and returns an ActionResult. Errors are raised internally with the
caller-facing message and converted at the operation boundary, so nothing
escapes to the caller.

Acceptance is two writes without a wrapping transaction: the commitment is
inserted first, then the offer is moved to accepted with a conditional
update. If that second write fails or matches no row, the commitment is
deleted again before the failure is reported.
"""
from __future__ import annotations

from typing import Any, List, Mapping
from uuid import uuid4

from sqlalchemy.ext.asyncio import AsyncSession

from tourlead.core.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    NotificationError,
    PermissionDeniedError,
    PersistenceError,
    StateError,
    ValidationError,
)
from tourlead.core.logging import get_structlog_logger
from tourlead.models import Offer, OfferStatus
from tourlead.schemas.offers import (
    AcceptOfferRequest,
    ActionResult,
    CancelCampaignRequest,
    OfferCreateRequest,
    UpdateOfferDetailsRequest,
    parse_payload,
)
from tourlead.services import messages
from tourlead.services.actions import action_boundary
from tourlead.services.commitment_store import CommitmentStore
from tourlead.services.conflicts import find_conflicting_commitments
from tourlead.services.directory import Directory
from tourlead.services.notifications import Notifier, OfferEmail, notify_all
from tourlead.services.offer_store import OfferStore

logger = get_structlog_logger()


def _parse_offer_id(value: Any) -> int:
    try:
        offer_id = int(value)
    except (TypeError, ValueError):
        raise ValidationError(message="Invalid form data: offer_id is not a valid id", code="invalid_payload")
    if offer_id < 1:
        raise ValidationError(message="Invalid form data: offer_id is not a valid id", code="invalid_payload")
    return offer_id


class OfferLifecycleController:
    """Stateless orchestrator over the offer and commitment stores."""

    def __init__(
        self,
        offers: OfferStore,
        commitments: CommitmentStore,
        directory: Directory,
        notifier: Notifier,
    ):
        self.offers = offers
        self.commitments = commitments
        self.directory = directory
        self.notifier = notifier

    @classmethod
    def from_session(cls, session: AsyncSession, notifier: Notifier) -> "OfferLifecycleController":
        return cls(OfferStore(session), CommitmentStore(session), Directory(session), notifier)

    # Create

    @action_boundary("create_offer")
    async def create_offer(self, actor_id: str, payload: Mapping[str, Any]) -> ActionResult:
        notified = await self._send_offers(actor_id, payload, reuse_campaign=False)
        return ActionResult.ok(messages.OFFER_CREATED if notified else messages.OFFER_CREATED_NOT_NOTIFIED)

    @action_boundary("add_guides_to_offer_campaign")
    async def add_guides_to_offer_campaign(self, actor_id: str, payload: Mapping[str, Any]) -> ActionResult:
        notified = await self._send_offers(actor_id, payload, reuse_campaign=True)
        return ActionResult.ok(messages.GUIDES_ADDED if notified else messages.GUIDES_ADDED_NOT_NOTIFIED)

    async def _send_offers(self, actor_id: str, payload: Mapping[str, Any], *, reuse_campaign: bool) -> bool:
        req = parse_payload(OfferCreateRequest, payload)
        guide_ids = list(dict.fromkeys(str(g) for g in req.guide_ids))

        try:
            campaign_id = None
            if reuse_campaign:
                campaign_id = await self.offers.find_campaign_id(
                    company_id=actor_id,
                    job_type=req.job_type,
                    start_date=req.start_date,
                    end_date=req.end_date,
                )
            campaign_id = campaign_id or str(uuid4())
            rows = [
                {
                    "guide_id": guide_id,
                    "company_id": actor_id,
                    "campaign_id": campaign_id,
                    "job_type": req.job_type,
                    "description": req.description,
                    "start_date": req.start_date,
                    "end_date": req.end_date,
                    "contact_person": req.contact_person,
                    "contact_phone": req.contact_phone,
                }
                for guide_id in guide_ids
            ]
            await self.offers.insert_offers(rows)
        except PersistenceError as e:
            raise PersistenceError(messages.OFFER_CREATE_FAILED, code=e.code, details=e.details) from e

        logger.info(
            "offer.created",
            company_id=actor_id,
            campaign_id=campaign_id,
            guide_count=len(guide_ids),
            job_type=req.job_type,
        )
        return await self._notify_new_offers(actor_id, req, guide_ids)

    async def _notify_new_offers(self, company_id: str, req: OfferCreateRequest, guide_ids: List[str]) -> bool:
        """Returns False only when the guide/company lookup itself failed."""
        try:
            company = await self.directory.get_company(company_id)
            guides = await self.directory.get_guides(guide_ids)
        except PersistenceError as e:
            logger.warning("offer.notify.lookup_failed", company_id=company_id, error=e.message)
            return False

        if company is None:
            logger.warning("offer.notify.company_missing", company_id=company_id)
            return False

        sends = []
        for guide_id in guide_ids:
            guide = guides.get(guide_id)
            if guide is None or not guide.email:
                logger.info("offer.notify.skipped", guide_id=guide_id, reason="no_email")
                continue
            sends.append(
                self.notifier.send_offer_created(
                    OfferEmail(
                        to=guide.email,
                        recipient_name=guide.name or "Guide",
                        counterpart_name=company.name or "A company",
                        job_type=req.job_type,
                        start_date=req.start_date,
                        end_date=req.end_date,
                        contact_person=req.contact_person,
                        contact_phone=req.contact_phone,
                    )
                )
            )

        failures = await notify_all(sends, event="offer_created")
        logger.info("offer.notify.done", attempted=len(sends), failed=failures)
        return True

    # Accept

    @action_boundary("accept_offer")
    async def accept_offer(self, actor_id: str, payload: Mapping[str, Any]) -> ActionResult:
        req = parse_payload(AcceptOfferRequest, payload)
        guide_id = str(req.guide_id)

        if actor_id != guide_id:
            raise AuthorizationError(messages.ACCEPT_NOT_AUTHORIZED, code="not_offer_guide")

        try:
            conflicts = await find_conflicting_commitments(
                self.commitments, guide_id, req.start_date, req.end_date
            )
        except PersistenceError as e:
            raise PersistenceError(messages.COMMITMENT_CREATE_FAILED, code=e.code, details=e.details) from e
        if conflicts:
            logger.info(
                "offer.accept.conflict",
                offer_id=req.offer_id,
                guide_id=guide_id,
                commitment_ids=[c.id for c in conflicts],
            )
            raise ConflictError(
                messages.ACCEPT_CONFLICT,
                code="commitment_overlap",
                details={"commitment_ids": [c.id for c in conflicts]},
            )

        offer = await self._load_pending_offer(req.offer_id, actor_id)
        if (
            offer.company_id != str(req.company_id)
            or offer.start_date != req.start_date
            or offer.end_date != req.end_date
        ):
            raise ValidationError(messages.OFFER_DETAILS_CHANGED, code="offer_mismatch")

        try:
            commitment = await self.commitments.create(
                offer_id=offer.id,
                guide_id=offer.guide_id,
                company_id=offer.company_id,
                job_type=offer.job_type,
                start_date=offer.start_date,
                end_date=offer.end_date,
            )
        except PermissionDeniedError as e:
            logger.error("offer.accept.commitment_permission_denied", offer_id=offer.id, error=e.message)
            raise PersistenceError(messages.COMMITMENT_PERMISSION_DENIED, code=e.code, details=e.details) from e
        except PersistenceError as e:
            logger.error("offer.accept.commitment_failed", offer_id=offer.id, error=e.message)
            raise PersistenceError(messages.COMMITMENT_CREATE_FAILED, code=e.code, details=e.details) from e

        # From here on the commitment exists and must be undone on any failure.
        try:
            updated = await self.offers.transition(
                offer.id,
                to_status=OfferStatus.ACCEPTED,
                guide_id=actor_id,
            )
        except PersistenceError as e:
            logger.error("offer.accept.status_update_failed", offer_id=offer.id, error=e.message)
            await self._rollback_commitment(commitment.id, offer.id)
            raise PersistenceError(messages.ACCEPT_STATUS_UPDATE_FAILED, code=e.code, details=e.details) from e

        if updated == 0:
            logger.warning("offer.accept.lost_race", offer_id=offer.id, commitment_id=commitment.id)
            await self._rollback_commitment(commitment.id, offer.id)
            raise StateError(messages.OFFER_ALREADY_RESOLVED, code="offer_not_pending")

        logger.info("offer.accepted", offer_id=offer.id, commitment_id=commitment.id, guide_id=actor_id)

        notified = await self._notify_acceptance(offer)
        return ActionResult.ok(messages.OFFER_ACCEPTED if notified else messages.OFFER_ACCEPTED_NOT_NOTIFIED)

    async def _load_pending_offer(self, offer_id: int, guide_id: str) -> Offer:
        try:
            offer = await self.offers.get_offer(offer_id)
        except PersistenceError as e:
            raise PersistenceError(messages.COMMITMENT_CREATE_FAILED, code=e.code, details=e.details) from e

        if offer is None:
            raise NotFoundError(messages.OFFER_NOT_FOUND, code="offer_not_found")
        if offer.status != OfferStatus.PENDING.value:
            raise StateError(messages.OFFER_ALREADY_RESOLVED, code="offer_not_pending")
        if offer.guide_id != guide_id:
            raise AuthorizationError(messages.ACCEPT_NOT_AUTHORIZED, code="not_offer_guide")
        return offer

    async def _rollback_commitment(self, commitment_id: int, offer_id: int) -> None:
        try:
            await self.commitments.delete(commitment_id)
        except PersistenceError as e:
            logger.error(
                "offer.accept.rollback_failed",
                offer_id=offer_id,
                commitment_id=commitment_id,
                error=e.message,
            )
            raise PersistenceError(messages.ACCEPT_ROLLBACK_FAILED, code="rollback_failed", details=e.details) from e
        logger.info("offer.accept.rolled_back", offer_id=offer_id, commitment_id=commitment_id)

    async def _notify_acceptance(self, offer: Offer) -> bool:
        try:
            company = await self.directory.get_company(offer.company_id)
            guide = await self.directory.get_guide(offer.guide_id)
        except PersistenceError as e:
            logger.warning("offer.accept.notify_lookup_failed", offer_id=offer.id, error=e.message)
            return False

        if company is None or not company.email:
            logger.info("offer.accept.notify_skipped", offer_id=offer.id, reason="no_company_email")
            return False

        failures = await notify_all(
            [
                self.notifier.send_offer_accepted(
                    OfferEmail(
                        to=company.email,
                        recipient_name=company.name or "Company",
                        counterpart_name=(guide.name if guide else None) or "A guide",
                        job_type=offer.job_type,
                        start_date=offer.start_date,
                        end_date=offer.end_date,
                    )
                )
            ],
            event="offer_accepted",
        )
        return failures == 0

    # Reject

    @action_boundary("reject_offer")
    async def reject_offer(self, actor_id: str, offer_id: Any) -> ActionResult:
        """Company withdraws a single pending offer."""
        await self._reject(actor_id, _parse_offer_id(offer_id), owner="company")
        return ActionResult.ok(messages.OFFER_REJECTED)

    @action_boundary("guide_reject_offer")
    async def guide_reject_offer(self, actor_id: str, offer_id: Any) -> ActionResult:
        """Guide declines a pending offer."""
        await self._reject(actor_id, _parse_offer_id(offer_id), owner="guide")
        return ActionResult.ok(messages.OFFER_REJECTED)

    async def _reject(self, actor_id: str, offer_id: int, *, owner: str) -> None:
        owner_filter = {"company_id": actor_id} if owner == "company" else {"guide_id": actor_id}
        try:
            updated = await self.offers.transition(offer_id, to_status=OfferStatus.REJECTED, **owner_filter)
            if updated:
                logger.info("offer.rejected", offer_id=offer_id, by=owner)
                return
            offer = await self.offers.get_offer(offer_id)
        except PersistenceError as e:
            raise PersistenceError(messages.REJECT_FAILED, code=e.code, details=e.details) from e

        # Nothing matched: tell the caller why.
        if offer is None:
            raise NotFoundError(messages.OFFER_NOT_FOUND, code="offer_not_found")
        if getattr(offer, f"{owner}_id") != actor_id:
            raise AuthorizationError(messages.REJECT_NOT_AUTHORIZED, code=f"not_offer_{owner}")
        raise StateError(messages.REJECT_NOT_PENDING, code="offer_not_pending")

    # Campaign

    @action_boundary("cancel_pending_offers_for_job")
    async def cancel_pending_offers_for_job(self, actor_id: str, payload: Mapping[str, Any]) -> ActionResult:
        req = parse_payload(CancelCampaignRequest, payload)
        try:
            cancelled = await self.offers.reject_pending_in_campaign(
                company_id=actor_id,
                job_type=req.job_type,
                start_date=req.start_date,
                end_date=req.end_date,
                campaign_id=str(req.campaign_id) if req.campaign_id else None,
            )
        except PersistenceError as e:
            raise PersistenceError(messages.CAMPAIGN_CANCEL_FAILED, code=e.code, details=e.details) from e

        logger.info("offer.campaign_cancelled", company_id=actor_id, cancelled=cancelled)
        if cancelled == 0:
            return ActionResult.ok(messages.CAMPAIGN_NOTHING_PENDING)
        return ActionResult.ok(messages.CAMPAIGN_CANCELLED.format(count=cancelled))

    @action_boundary("update_offer_details")
    async def update_offer_details(self, actor_id: str, payload: Mapping[str, Any]) -> ActionResult:
        """Edit descriptive fields. Dates and guides stay fixed; guides are not re-notified."""
        req = parse_payload(UpdateOfferDetailsRequest, payload)
        try:
            updated = await self.offers.update_details(
                req.offer_ids,
                company_id=actor_id,
                values={
                    "job_type": req.job_type,
                    "description": req.description,
                    "contact_person": req.contact_person,
                    "contact_phone": req.contact_phone,
                },
            )
        except PersistenceError as e:
            raise PersistenceError(messages.OFFER_DETAILS_UPDATE_FAILED, code=e.code, details=e.details) from e

        if updated == 0:
            raise NotFoundError(messages.OFFER_DETAILS_NOT_FOUND, code="offers_not_found")
        logger.info("offer.details_updated", company_id=actor_id, updated=updated)
        return ActionResult.ok(messages.OFFER_DETAILS_UPDATED)

    # Remind

    @action_boundary("remind_offer")
    async def remind_offer(self, actor_id: str, offer_id: Any) -> ActionResult:
        offer_id = _parse_offer_id(offer_id)
        try:
            details = await self.offers.get_reminder_details(offer_id, company_id=actor_id)
        except PersistenceError as e:
            raise PersistenceError(messages.REMINDER_LOOKUP_FAILED, code=e.code, details=e.details) from e

        if details is None:
            raise NotFoundError(messages.REMINDER_NOT_FOUND, code="offer_not_found")

        required = {
            "guide_email": details.guide_email,
            "guide_name": details.guide_name,
            "company_name": details.company_name,
            "job_type": details.job_type,
            "start_date": details.start_date,
            "end_date": details.end_date,
        }
        missing = [name for name, value in required.items() if not value]
        if missing:
            raise ValidationError(messages.REMINDER_INCOMPLETE, code="reminder_incomplete", details={"missing": missing})

        try:
            await self.notifier.send_offer_reminder(
                OfferEmail(
                    to=details.guide_email,
                    recipient_name=details.guide_name,
                    counterpart_name=details.company_name,
                    job_type=details.job_type,
                    start_date=details.start_date,
                    end_date=details.end_date,
                    contact_person=details.contact_person,
                    contact_phone=details.contact_phone,
                )
            )
        except Exception as e:
            logger.warning("offer.remind.send_failed", offer_id=offer_id, error=str(e))
            raise NotificationError(messages.REMINDER_SEND_FAILED, code="reminder_not_sent") from e

        return ActionResult.ok(messages.REMINDER_SENT.format(guide_name=details.guide_name))
