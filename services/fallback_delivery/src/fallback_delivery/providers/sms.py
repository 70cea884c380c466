"""SMS delivery provider, relayed through carrier email-to-SMS gateways."""

import logging

from shared.enums import Carrier, Channel, Outcome
from shared.models import NotificationPayload, RecipientProfile

from fallback_delivery.gateways import GatewayMultiplexer
from fallback_delivery.phone import COUNTRY_CODE, normalize_phone, truncate_sms
from fallback_delivery.providers.base import ChannelOutcome, DeliveryProvider
from fallback_delivery.transport import MailTransport

logger = logging.getLogger(__name__)


class SMSProvider(DeliveryProvider):
    """SMS by way of the mail transport.

    The text is "title: body" cut to one segment. A relay accepted by any
    gateway is reported as delivered. That is an optimistic reading: the
    carrier gives no handset receipt.
    """

    channel = Channel.SMS

    def __init__(self, transport: MailTransport) -> None:
        self._transport = transport
        self._multiplexer = GatewayMultiplexer(transport)

    def unavailable_reason(self, recipient: RecipientProfile) -> str | None:
        if not recipient.phone:
            return "no phone number on file"
        return None

    def target(self, recipient: RecipientProfile) -> str:
        return normalize_phone(recipient.phone) if recipient.phone else ""

    async def deliver(
        self, recipient: RecipientProfile, payload: NotificationPayload
    ) -> ChannelOutcome:
        if not recipient.phone:
            return ChannelOutcome(Outcome.SKIPPED, "", "no phone number on file")
        return await self.send(recipient.phone, payload, recipient.carrier_hint)

    async def send(
        self,
        phone: str,
        payload: NotificationPayload,
        carrier_hint: Carrier | None = None,
    ) -> ChannelOutcome:
        number = normalize_phone(phone)
        log_ctx = {"number": number, "carrier_hint": str(carrier_hint or Carrier.AUTO)}

        if not self._transport.is_configured:
            logger.error("SMTP not configured, cannot relay SMS", extra=log_ctx)
            return ChannelOutcome(Outcome.FAILED, number, "transport not configured")

        if number == COUNTRY_CODE:
            logger.warning("Phone number has no subscriber digits", extra=log_ctx)
            return ChannelOutcome(Outcome.FAILED, number, "invalid phone number")

        text = truncate_sms(f"{payload.title}: {payload.body}")
        try:
            result = await self._multiplexer.relay(number, text, carrier_hint)
        except Exception as exc:
            logger.exception("SMS relay error", extra=log_ctx)
            return ChannelOutcome(Outcome.FAILED, number, str(exc) or type(exc).__name__)

        if result.accepted_by is None:
            logger.warning(
                "All SMS gateways failed",
                extra={**log_ctx, "tries": len(result.relays)},
            )
            return ChannelOutcome(
                Outcome.FAILED, number, "all gateways failed", result.relays
            )

        return ChannelOutcome(
            Outcome.DELIVERED,
            result.accepted_by.address,
            f"accepted by gateway {result.accepted_by.gateway}",
            result.relays,
        )
