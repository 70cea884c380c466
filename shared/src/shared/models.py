from datetime import datetime, timezone
from typing import Any
from uuid import UUID, uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    computed_field,
    field_validator,
)

from shared.enums import Carrier, Category, Channel, Outcome


class PushKeys(BaseModel):
    model_config = ConfigDict(frozen=True)

    p256dh: str
    auth: str


class PushSubscription(BaseModel):
    """Web Push registration handed out by the browser."""

    model_config = ConfigDict(frozen=True)

    endpoint: str = Field(min_length=1)
    keys: PushKeys

    def as_subscription_info(self) -> dict[str, Any]:
        return self.model_dump()


class RecipientProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    email: EmailStr
    push_endpoint: PushSubscription | None = None
    phone: str | None = None
    carrier_hint: Carrier | None = None

    @field_validator("phone")
    @classmethod
    def _phone_without_digits_is_absent(cls, value: str | None) -> str | None:
        if value is not None and not any(ch.isdigit() for ch in value):
            return None
        return value


class NotificationPayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str = Field(min_length=1)
    body: str
    category: Category = Category.INFO
    data: dict[str, Any] = Field(default_factory=dict)


class GatewayRelay(BaseModel):
    """One email-to-SMS relay try against a single carrier gateway."""

    model_config = ConfigDict(frozen=True)

    gateway: str
    address: str
    accepted: bool
    reason: str = ""


class DeliveryAttempt(BaseModel):
    model_config = ConfigDict(frozen=True)

    channel: Channel
    target: str
    outcome: Outcome
    reason: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    relays: tuple[GatewayRelay, ...] = ()

    def describe(self) -> str:
        return f"{self.channel}: {self.outcome} - {self.reason}"


class DeliveryResult(BaseModel):
    delivery_id: UUID = Field(default_factory=uuid4)
    attempts: list[DeliveryAttempt] = Field(min_length=1)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def succeeded(self) -> bool:
        return any(a.outcome == Outcome.DELIVERED for a in self.attempts)

    def summary(self) -> str:
        """Human-readable attempt trail, one clause per channel tried."""
        return "; ".join(a.describe() for a in self.attempts)
