"""Abstract channel provider interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar

from shared.enums import Channel, Outcome
from shared.models import GatewayRelay, NotificationPayload, RecipientProfile


@dataclass(frozen=True, slots=True)
class ChannelOutcome:
    """What one provider call achieved."""

    outcome: Outcome
    target: str
    reason: str
    relays: tuple[GatewayRelay, ...] = ()

    @property
    def delivered(self) -> bool:
        return self.outcome == Outcome.DELIVERED


class DeliveryProvider(ABC):
    """Base class for all channel delivery providers."""

    channel: ClassVar[Channel]

    @abstractmethod
    def unavailable_reason(self, recipient: RecipientProfile) -> str | None:
        """Why this channel cannot reach *recipient* at all, or None."""

    @abstractmethod
    def target(self, recipient: RecipientProfile) -> str:
        """The raw endpoint/address this channel would use for *recipient*."""

    @abstractmethod
    async def deliver(
        self, recipient: RecipientProfile, payload: NotificationPayload
    ) -> ChannelOutcome:
        """Attempt to deliver *payload* to *recipient* on this channel.

        Implementations must not raise; return a failed ChannelOutcome
        instead.
        """
