"""Logging setup for fallback_delivery (delegates to shared)."""

from shared.log import JsonFormatter, setup_logging as _setup

__all__ = ["JsonFormatter", "setup_logging"]


def setup_logging(level: str = "INFO") -> None:
    _setup(
        level,
        suppress=["celery", "kombu", "aiosmtplib", "confluent_kafka"],
        service="fallback_delivery",
    )
