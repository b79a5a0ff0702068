# tourlead/services/notifications.py
"""
Transactional email for the offer lifecycle.

Three message kinds exist: offer-created (to the guide), offer-accepted (to
the company) and offer-reminder (to the guide). A Notifier raises
NotificationError when a send fails; it never reports delivery status.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import date
from typing import Any, Awaitable, Dict, List, Optional, Sequence

import resend

from tourlead.core.config import settings
from tourlead.core.exceptions import NotificationError
from tourlead.core.logging import get_structlog_logger

logger = get_structlog_logger()


@dataclass(frozen=True)
class OfferEmail:
    to: str
    recipient_name: str
    counterpart_name: str
    job_type: str
    start_date: date
    end_date: date
    contact_person: Optional[str] = None
    contact_phone: Optional[str] = None


@dataclass(frozen=True)
class RenderedEmail:
    to: str
    subject: str
    text: str
    html: str


def format_date(value: date) -> str:
    return f"{value.day} {value.strftime('%B %Y')}"


def _contact_lines(email: OfferEmail) -> List[str]:
    lines = []
    if email.contact_person:
        lines.append(f"Contact person: {email.contact_person}")
    if email.contact_phone:
        lines.append(f"Contact phone: {email.contact_phone}")
    return lines


def _render(to: str, subject: str, greeting: str, paragraphs: Sequence[str], details: Sequence[str], link: str) -> RenderedEmail:
    text_parts = [greeting, "", *paragraphs]
    if details:
        text_parts += ["", *[f"- {d}" for d in details]]
    text_parts += ["", link, "", "Thanks for using TourLead Connect!"]

    html_details = "".join(f"<li>{d}</li>" for d in details)
    html = (
        '<div style="font-family: Arial, sans-serif; line-height: 1.6;">'
        f"<h1>{greeting}</h1>"
        + "".join(f"<p>{p}</p>" for p in paragraphs)
        + (f"<ul>{html_details}</ul>" if details else "")
        + f'<p><a href="{link}">{link}</a></p>'
        "<p>Thanks for using TourLead Connect!</p></div>"
    )
    return RenderedEmail(to=to, subject=subject, text="\n".join(text_parts), html=html)


def render_offer_created(email: OfferEmail) -> RenderedEmail:
    return _render(
        email.to,
        f"You have a new job offer from {email.counterpart_name}!",
        f"Hello {email.recipient_name}!",
        [f"You have a new job offer from {email.counterpart_name} on TourLead Connect."],
        [
            f"Job type: {email.job_type}",
            f"Dates: {format_date(email.start_date)} to {format_date(email.end_date)}",
            *_contact_lines(email),
        ],
        f"{settings.app_base_url}/guide/offers",
    )


def render_offer_accepted(email: OfferEmail) -> RenderedEmail:
    return _render(
        email.to,
        f"Good news! {email.counterpart_name} accepted your offer.",
        f"Hello {email.recipient_name}!",
        [
            f"The guide {email.counterpart_name} accepted your job offer for {email.job_type}.",
            f"They are now confirmed from {format_date(email.start_date)} to {format_date(email.end_date)}.",
        ],
        [],
        f"{settings.app_base_url}/company/hired",
    )


def render_offer_reminder(email: OfferEmail) -> RenderedEmail:
    return _render(
        email.to,
        f"Reminder: {email.counterpart_name} is waiting for your answer",
        f"Hello {email.recipient_name}!",
        [f"{email.counterpart_name} is still waiting for your answer to their job offer."],
        [
            f"Job type: {email.job_type}",
            f"Dates: {format_date(email.start_date)} to {format_date(email.end_date)}",
            *_contact_lines(email),
        ],
        f"{settings.app_base_url}/guide/offers",
    )


class Notifier:
    """Base dispatcher. Subclasses implement deliver()."""

    async def deliver(self, message: RenderedEmail, kind: str) -> None:
        raise NotImplementedError

    async def send_offer_created(self, email: OfferEmail) -> None:
        await self.deliver(render_offer_created(email), "offer_created")

    async def send_offer_accepted(self, email: OfferEmail) -> None:
        await self.deliver(render_offer_accepted(email), "offer_accepted")

    async def send_offer_reminder(self, email: OfferEmail) -> None:
        await self.deliver(render_offer_reminder(email), "offer_reminder")


class ConsoleNotifier(Notifier):
    """Logs emails instead of sending them. Default outside production."""

    async def deliver(self, message: RenderedEmail, kind: str) -> None:
        logger.info("email.console", kind=kind, to=message.to, subject=message.subject)


class ResendNotifier(Notifier):
    def __init__(self, api_key: Optional[str], from_address: str):
        self.api_key = api_key
        self.from_address = from_address

    async def deliver(self, message: RenderedEmail, kind: str) -> None:
        if not self.api_key:
            logger.error("email.resend.not_configured", kind=kind)
            raise NotificationError(message="The email service is not configured.", code="email_not_configured")

        params: Dict[str, Any] = {
            "from": self.from_address,
            "to": [message.to],
            "subject": message.subject,
            "html": message.html,
            "text": message.text,
        }
        resend.api_key = self.api_key
        try:
            response = await asyncio.to_thread(resend.Emails.send, params)
        except Exception as e:
            logger.warning("email.resend.failed", kind=kind, to=message.to, error=str(e))
            raise NotificationError(
                message="The email could not be sent.",
                code="email_send_failed",
                details={"error": str(e)[:200]},
            ) from e

        logger.info("email.resend.sent", kind=kind, to=message.to, email_id=_response_id(response))


def _response_id(response: Any) -> Optional[str]:
    if isinstance(response, dict):
        return response.get("id")
    return getattr(response, "id", None)


def get_notifier() -> Notifier:
    if settings.email_provider == "resend":
        return ResendNotifier(settings.resend_api_key, settings.email_from_address)
    return ConsoleNotifier()


async def notify_all(sends: Sequence[Awaitable[None]], *, event: str) -> int:
    """
    Start every send, wait for all of them to settle and return the number
    that failed. Failures are logged, never raised.
    """
    if not sends:
        return 0
    results = await asyncio.gather(*sends, return_exceptions=True)
    failures = 0
    for index, outcome in enumerate(results):
        if isinstance(outcome, BaseException):
            failures += 1
            logger.warning(
                "notification.failed",
                notification_event=event,
                index=index,
                error_type=type(outcome).__name__,
                error=str(outcome),
            )
    return failures
