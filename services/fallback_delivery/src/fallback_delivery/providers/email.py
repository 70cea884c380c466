"""Email delivery provider."""

import logging
from datetime import datetime, timezone

from shared.enums import Channel, Outcome
from shared.models import NotificationPayload, RecipientProfile

from fallback_delivery.providers.base import ChannelOutcome, DeliveryProvider
from fallback_delivery.rendering import render_email
from fallback_delivery.transport import MailTransport, compose_email

logger = logging.getLogger(__name__)


class EmailProvider(DeliveryProvider):
    """Sends one templated message per call through the mail transport.

    There is no retry here; a single submission is the whole attempt.
    """

    channel = Channel.EMAIL

    def __init__(
        self,
        transport: MailTransport,
        *,
        app_name: str = "Site Notifications",
        timezone_name: str = "Australia/Melbourne",
    ) -> None:
        self._transport = transport
        self._app_name = app_name
        self._timezone = timezone_name

    def unavailable_reason(self, recipient: RecipientProfile) -> str | None:
        return None

    def target(self, recipient: RecipientProfile) -> str:
        return str(recipient.email)

    async def deliver(
        self, recipient: RecipientProfile, payload: NotificationPayload
    ) -> ChannelOutcome:
        return await self.send(str(recipient.email), payload)

    async def send(self, email: str, payload: NotificationPayload) -> ChannelOutcome:
        if not self._transport.is_configured:
            logger.error("SMTP not configured, cannot send email", extra={"to": email})
            return ChannelOutcome(Outcome.FAILED, email, "transport not configured")

        try:
            rendered = render_email(
                payload,
                app_name=self._app_name,
                timezone=self._timezone,
                now=datetime.now(timezone.utc),
            )
            message = compose_email(
                self._transport.sender,
                email,
                rendered.subject,
                rendered.text,
                rendered.html,
            )
            await self._transport.verify()
            await self._transport.send(message)
        except Exception as exc:
            logger.warning("Email failed", extra={"to": email, "reason": str(exc)})
            return ChannelOutcome(
                Outcome.FAILED, email, str(exc) or type(exc).__name__
            )

        logger.info(
            "Email sent",
            extra={"to": email, "category": str(payload.category)},
        )
        return ChannelOutcome(Outcome.DELIVERED, email, "accepted by mail relay")
