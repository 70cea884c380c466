from uuid import UUID

import pytest
from pydantic import ValidationError

from shared.enums import Carrier, Category, Channel, Outcome
from shared.models import (
    DeliveryAttempt,
    DeliveryResult,
    GatewayRelay,
    NotificationPayload,
    PushKeys,
    PushSubscription,
    RecipientProfile,
)


def _attempt(channel, outcome, reason="r"):
    return DeliveryAttempt(channel=channel, target="t", outcome=outcome, reason=reason)


class TestRecipientProfile:
    def test_minimal(self):
        recipient = RecipientProfile(email="will@example.com")
        assert recipient.push_endpoint is None
        assert recipient.phone is None
        assert recipient.carrier_hint is None

    def test_email_required(self):
        with pytest.raises(ValidationError):
            RecipientProfile(phone="0412345678")

    def test_email_validated(self):
        with pytest.raises(ValidationError):
            RecipientProfile(email="not-an-email")

    def test_blank_phone_is_absent(self):
        assert RecipientProfile(email="will@example.com", phone="   ").phone is None

    @pytest.mark.parametrize("phone", ["( - )", "-", "()", " - - "])
    def test_phone_of_separators_only_is_absent(self, phone):
        assert RecipientProfile(email="will@example.com", phone=phone).phone is None

    def test_phone_with_digits_kept_as_typed(self):
        recipient = RecipientProfile(email="will@example.com", phone="(04) 1234-5678")
        assert recipient.phone == "(04) 1234-5678"

    def test_carrier_hint_from_string(self):
        recipient = RecipientProfile(email="will@example.com", carrier_hint="optus")
        assert recipient.carrier_hint == Carrier.OPTUS

    def test_unknown_carrier_rejected(self):
        with pytest.raises(ValidationError):
            RecipientProfile(email="will@example.com", carrier_hint="acme")

    def test_immutable(self):
        recipient = RecipientProfile(email="will@example.com")
        with pytest.raises(ValidationError):
            recipient.phone = "0412345678"

    def test_push_subscription_info(self):
        subscription = PushSubscription(
            endpoint="https://push.example.com/1",
            keys=PushKeys(p256dh="k", auth="a"),
        )
        assert subscription.as_subscription_info() == {
            "endpoint": "https://push.example.com/1",
            "keys": {"p256dh": "k", "auth": "a"},
        }


class TestNotificationPayload:
    def test_defaults(self):
        payload = NotificationPayload(title="Hi", body="There")
        assert payload.category == Category.INFO
        assert payload.data == {}

    def test_empty_title_rejected(self):
        with pytest.raises(ValidationError):
            NotificationPayload(title="", body="x")

    def test_body_required(self):
        with pytest.raises(ValidationError):
            NotificationPayload(title="Hi")


class TestDeliveryAttempt:
    def test_timestamp_is_utc(self):
        attempt = _attempt(Channel.PUSH, Outcome.SKIPPED)
        assert attempt.timestamp.tzinfo is not None
        assert attempt.relays == ()

    def test_describe(self):
        attempt = _attempt(Channel.SMS, Outcome.FAILED, "all gateways failed")
        assert attempt.describe() == "sms: failed - all gateways failed"

    def test_relays_serialized(self):
        relay = GatewayRelay(gateway="tmomail.net", address="61@tmomail.net", accepted=True)
        attempt = DeliveryAttempt(
            channel=Channel.SMS,
            target="61@tmomail.net",
            outcome=Outcome.DELIVERED,
            reason="ok",
            relays=(relay,),
        )
        dumped = attempt.model_dump(mode="json")
        assert dumped["relays"] == [
            {"gateway": "tmomail.net", "address": "61@tmomail.net", "accepted": True, "reason": ""}
        ]


class TestDeliveryResult:
    def test_succeeded_when_any_delivered(self):
        result = DeliveryResult(
            attempts=[
                _attempt(Channel.PUSH, Outcome.FAILED),
                _attempt(Channel.EMAIL, Outcome.DELIVERED),
            ]
        )
        assert result.succeeded is True
        assert isinstance(result.delivery_id, UUID)

    def test_not_succeeded_without_delivery(self):
        result = DeliveryResult(
            attempts=[
                _attempt(Channel.PUSH, Outcome.SKIPPED),
                _attempt(Channel.EMAIL, Outcome.FAILED),
                _attempt(Channel.SMS, Outcome.SKIPPED),
            ]
        )
        assert result.succeeded is False

    def test_attempts_never_empty(self):
        with pytest.raises(ValidationError):
            DeliveryResult(attempts=[])

    def test_succeeded_in_dump(self):
        result = DeliveryResult(attempts=[_attempt(Channel.PUSH, Outcome.DELIVERED)])
        assert result.model_dump(mode="json")["succeeded"] is True
