"""Web Push delivery provider."""

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone

from pywebpush import WebPushException, webpush

from shared.config import PushConfig
from shared.enums import Channel, Outcome
from shared.models import NotificationPayload, PushSubscription, RecipientProfile

from fallback_delivery.providers.base import ChannelOutcome, DeliveryProvider

logger = logging.getLogger(__name__)

NOTIFICATION_ICON = "/icon-192x192.png"

# Push service answers for a subscription the browser has dropped.
_GONE_STATUSES = frozenset({404, 410})


class PushNotConfiguredError(RuntimeError):
    """Raised when VAPID keys are missing."""


class PushSender(ABC):
    """Hands a payload to the push service behind a device subscription."""

    @abstractmethod
    async def push(self, subscription: PushSubscription, data: str) -> None:
        """Raise on any refusal; returning means the push service took it."""


class WebPushSender(PushSender):
    """VAPID-signed Web Push via pywebpush."""

    def __init__(self, config: PushConfig) -> None:
        self._config = config

    async def push(self, subscription: PushSubscription, data: str) -> None:
        if not self._config.is_configured:
            raise PushNotConfiguredError("VAPID keys not configured")
        # pywebpush is blocking (requests); keep it off the event loop.
        await asyncio.to_thread(
            webpush,
            subscription_info=subscription.as_subscription_info(),
            data=data,
            vapid_private_key=self._config.private_key.get_secret_value(),
            # webpush fills in aud/exp on this dict, so build a fresh one.
            vapid_claims={"sub": self._config.subject},
            ttl=self._config.ttl_seconds,
        )


def build_push_data(payload: NotificationPayload, now: datetime | None = None) -> str:
    """JSON document the service worker turns into a notification."""
    if now is None:
        now = datetime.now(timezone.utc)
    return json.dumps({
        "title": payload.title,
        "body": payload.body,
        "icon": NOTIFICATION_ICON,
        "badge": NOTIFICATION_ICON,
        "tag": str(payload.category),
        "data": payload.data,
        "timestamp": int(now.timestamp() * 1000),
    })


class PushProvider(DeliveryProvider):
    """Fire-and-forget push: a send that does not raise counts as delivered.

    The device never acknowledges, so there is nothing to wait for.
    """

    channel = Channel.PUSH

    def __init__(self, sender: PushSender) -> None:
        self._sender = sender

    def unavailable_reason(self, recipient: RecipientProfile) -> str | None:
        if recipient.push_endpoint is None:
            return "no push endpoint registered"
        return None

    def target(self, recipient: RecipientProfile) -> str:
        return recipient.push_endpoint.endpoint if recipient.push_endpoint else ""

    async def deliver(
        self, recipient: RecipientProfile, payload: NotificationPayload
    ) -> ChannelOutcome:
        if recipient.push_endpoint is None:
            return ChannelOutcome(
                Outcome.SKIPPED, "", "no push endpoint registered"
            )
        return await self.send(recipient.push_endpoint, payload)

    async def send(
        self, subscription: PushSubscription, payload: NotificationPayload
    ) -> ChannelOutcome:
        endpoint = subscription.endpoint
        try:
            await self._sender.push(subscription, build_push_data(payload))
        except WebPushException as exc:
            status = exc.response.status_code if exc.response is not None else None
            reason = "subscription expired" if status in _GONE_STATUSES else str(exc)
            logger.warning(
                "Push rejected",
                extra={"endpoint": endpoint, "status": status, "reason": reason},
            )
            return ChannelOutcome(Outcome.FAILED, endpoint, reason)
        except Exception as exc:
            logger.warning(
                "Push failed", extra={"endpoint": endpoint, "reason": str(exc)}
            )
            return ChannelOutcome(
                Outcome.FAILED, endpoint, str(exc) or type(exc).__name__
            )

        logger.info(
            "Push sent",
            extra={"endpoint": endpoint, "category": str(payload.category)},
        )
        return ChannelOutcome(Outcome.DELIVERED, endpoint, "accepted by push service")
