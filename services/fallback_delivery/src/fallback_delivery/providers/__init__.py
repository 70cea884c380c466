"""Provider registry for channel-based delivery dispatch."""

from shared.config import PushConfig
from shared.enums import Channel

from fallback_delivery.providers.base import ChannelOutcome, DeliveryProvider
from fallback_delivery.providers.email import EmailProvider
from fallback_delivery.providers.push import PushProvider, PushSender, WebPushSender
from fallback_delivery.providers.sms import SMSProvider
from fallback_delivery.transport import MailTransport

__all__ = [
    "ChannelOutcome",
    "DeliveryProvider",
    "ProviderRegistry",
    "create_default_registry",
]


class ProviderRegistry:
    """Maps channel names to delivery provider instances."""

    def __init__(self) -> None:
        self._providers: dict[str, DeliveryProvider] = {}

    def register(self, provider: DeliveryProvider) -> None:
        self._providers[provider.channel] = provider

    def get(self, channel: str) -> DeliveryProvider:
        """Return the provider for a channel.

        Raises KeyError if no provider is registered for the channel.
        """
        return self._providers[channel]

    def __contains__(self, channel: object) -> bool:
        return channel in self._providers


def create_default_registry(
    transport: MailTransport,
    push_sender: PushSender | None = None,
    *,
    app_name: str = "Site Notifications",
    timezone_name: str = "Australia/Melbourne",
) -> ProviderRegistry:
    """Create a registry with all built-in providers.

    The email and SMS providers share *transport*.
    """
    if push_sender is None:
        push_sender = WebPushSender(PushConfig())

    registry = ProviderRegistry()
    registry.register(PushProvider(push_sender))
    registry.register(
        EmailProvider(transport, app_name=app_name, timezone_name=timezone_name)
    )
    registry.register(SMSProvider(transport))
    return registry
