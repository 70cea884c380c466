from enum import StrEnum


class Channel(StrEnum):
    PUSH = "push"
    EMAIL = "email"
    SMS = "sms"


# Fallback chain: cheaper/quieter channels first.
CHANNEL_PRIORITY: tuple[Channel, ...] = (Channel.PUSH, Channel.EMAIL, Channel.SMS)


class Outcome(StrEnum):
    DELIVERED = "delivered"
    FAILED = "failed"
    SKIPPED = "skipped"


class Category(StrEnum):
    REMINDER = "reminder"
    ALERT = "alert"
    INFO = "info"
    SUCCESS = "success"
    TEST = "test"


class Carrier(StrEnum):
    TELSTRA = "telstra"
    OPTUS = "optus"
    VODAFONE = "vodafone"
    TPG = "tpg"
    BOOST = "boost"
    AUTO = "auto"


class EmailProtocol(StrEnum):
    UNENCRYPTED = "UNENCRYPTED"
    TLS = "TLS"
    STARTTLS = "STARTTLS"
