"""Fallback chain across channels: push, then email, then SMS."""

import logging
from uuid import UUID, uuid4

from shared.enums import CHANNEL_PRIORITY, Channel, Outcome
from shared.log import delivery_context
from shared.models import (
    DeliveryAttempt,
    DeliveryResult,
    NotificationPayload,
    RecipientProfile,
)

from fallback_delivery.providers import ProviderRegistry
from fallback_delivery.providers.base import ChannelOutcome
from fallback_delivery.reporters import LoggingOutcomeReporter, OutcomeReporter

logger = logging.getLogger(__name__)


class DeliveryOrchestrator:
    """Delivers one payload to one recipient on the first channel that works.

    Channels are tried strictly in priority order and the chain stops at the
    first delivery. Every channel reached appears in the result, skipped or
    not. Provider and reporter errors are turned into outcomes or logged;
    only invalid input raises.

    Holds no per-delivery state, so one instance serves concurrent calls.
    """

    def __init__(
        self,
        registry: ProviderRegistry,
        reporter: OutcomeReporter | None = None,
    ) -> None:
        self._registry = registry
        self._reporter = reporter or LoggingOutcomeReporter()

    async def deliver(
        self, recipient: RecipientProfile, payload: NotificationPayload
    ) -> DeliveryResult:
        if not recipient.email:
            raise ValueError("recipient email is required")

        delivery_id = uuid4()
        with delivery_context(delivery_id=str(delivery_id)):
            attempts = await self._run_chain(delivery_id, recipient, payload)

        result = DeliveryResult(delivery_id=delivery_id, attempts=attempts)
        log = logger.info if result.succeeded else logger.error
        log(
            "Delivery finished",
            extra={
                "delivery_id": str(delivery_id),
                "succeeded": result.succeeded,
                "trail": result.summary(),
            },
        )
        return result

    async def _run_chain(
        self,
        delivery_id: UUID,
        recipient: RecipientProfile,
        payload: NotificationPayload,
    ) -> list[DeliveryAttempt]:
        attempts: list[DeliveryAttempt] = []
        for channel in CHANNEL_PRIORITY:
            outcome = await self._try_channel(channel, recipient, payload)
            attempt = DeliveryAttempt(
                channel=channel,
                target=outcome.target,
                outcome=outcome.outcome,
                reason=outcome.reason,
                relays=outcome.relays,
            )
            attempts.append(attempt)
            self._report(delivery_id, attempt)

            if attempt.outcome == Outcome.DELIVERED:
                break
        return attempts

    async def _try_channel(
        self,
        channel: Channel,
        recipient: RecipientProfile,
        payload: NotificationPayload,
    ) -> ChannelOutcome:
        if channel not in self._registry:
            return ChannelOutcome(Outcome.SKIPPED, "", "no provider registered")

        provider = self._registry.get(channel)
        skip_reason = provider.unavailable_reason(recipient)
        if skip_reason is not None:
            return ChannelOutcome(Outcome.SKIPPED, "", skip_reason)

        try:
            return await provider.deliver(recipient, payload)
        except Exception as exc:
            logger.exception("Provider error", extra={"channel": str(channel)})
            return ChannelOutcome(
                Outcome.FAILED,
                provider.target(recipient),
                str(exc) or type(exc).__name__,
            )

    def _report(self, delivery_id: UUID, attempt: DeliveryAttempt) -> None:
        try:
            self._reporter.report(delivery_id, attempt)
        except Exception:
            logger.exception(
                "Outcome reporter failed",
                extra={"delivery_id": str(delivery_id), "channel": str(attempt.channel)},
            )
