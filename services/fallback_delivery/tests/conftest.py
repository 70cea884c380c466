"""Test fixtures for fallback_delivery tests."""

from email.message import EmailMessage
from unittest.mock import MagicMock

import pytest

from shared.enums import Category
from shared.models import (
    NotificationPayload,
    PushKeys,
    PushSubscription,
    RecipientProfile,
)

from fallback_delivery.orchestrator import DeliveryOrchestrator
from fallback_delivery.providers import ProviderRegistry, create_default_registry
from fallback_delivery.providers.push import PushSender
from fallback_delivery.reporters import OutcomeReporter
from fallback_delivery.transport import MailTransport


class FakeTransport(MailTransport):
    """In-memory mail relay.

    ``reject_domains`` makes sends to those recipient domains raise;
    ``fail_verify`` / ``fail_all`` break the whole relay.
    """

    def __init__(
        self,
        *,
        configured: bool = True,
        reject_domains: set[str] | None = None,
        fail_verify: bool = False,
        fail_all: bool = False,
    ) -> None:
        self.configured = configured
        self.reject_domains = reject_domains or set()
        self.fail_verify = fail_verify
        self.fail_all = fail_all
        self.verify_calls = 0
        self.tried: list[str] = []
        self.sent: list[EmailMessage] = []

    @property
    def is_configured(self) -> bool:
        return self.configured

    @property
    def sender(self) -> str:
        return "noreply@example.com"

    async def verify(self) -> None:
        self.verify_calls += 1
        if self.fail_verify:
            raise ConnectionRefusedError("Connection refused")

    async def send(self, message: EmailMessage) -> None:
        to = str(message["To"])
        self.tried.append(to)
        if self.fail_all or to.split("@", 1)[1] in self.reject_domains:
            raise ConnectionError(f"550 relay denied for {to}")
        self.sent.append(message)


class FakePushSender(PushSender):
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.pushed: list[tuple[PushSubscription, str]] = []

    async def push(self, subscription: PushSubscription, data: str) -> None:
        if self.error is not None:
            raise self.error
        self.pushed.append((subscription, data))


@pytest.fixture()
def make_transport() -> type[FakeTransport]:
    return FakeTransport


@pytest.fixture()
def make_push_sender() -> type[FakePushSender]:
    return FakePushSender


@pytest.fixture()
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture()
def push_sender() -> FakePushSender:
    return FakePushSender()


@pytest.fixture()
def reporter() -> MagicMock:
    return MagicMock(spec=OutcomeReporter)


@pytest.fixture()
def registry(transport: FakeTransport, push_sender: FakePushSender) -> ProviderRegistry:
    return create_default_registry(transport, push_sender)


@pytest.fixture()
def orchestrator(registry: ProviderRegistry, reporter: MagicMock) -> DeliveryOrchestrator:
    return DeliveryOrchestrator(registry, reporter)


@pytest.fixture()
def subscription() -> PushSubscription:
    return PushSubscription(
        endpoint="https://fcm.googleapis.com/fcm/send/abc123",
        keys=PushKeys(p256dh="BNcRdreALRFX", auth="tBHItJI5svbpez7KI4CCXg"),
    )


@pytest.fixture()
def payload() -> NotificationPayload:
    return NotificationPayload(
        title="Weekly Job Update Reminder",
        body="Time to submit your weekly job updates!",
        category=Category.REMINDER,
    )


@pytest.fixture()
def email_only_recipient() -> RecipientProfile:
    return RecipientProfile(email="will@example.com")


@pytest.fixture()
def full_recipient(subscription: PushSubscription) -> RecipientProfile:
    return RecipientProfile(
        email="mark@example.com",
        push_endpoint=subscription,
        phone="0412 345-678",
    )
