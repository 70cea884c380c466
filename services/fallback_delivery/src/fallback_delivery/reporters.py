"""Delivery outcome sinks. The core reports; it never persists."""

import json
import logging
from abc import ABC, abstractmethod
from uuid import UUID

from confluent_kafka import Producer

from shared.config import KafkaConfig
from shared.models import DeliveryAttempt

logger = logging.getLogger(__name__)


class OutcomeReporter(ABC):
    @abstractmethod
    def report(self, delivery_id: UUID, attempt: DeliveryAttempt) -> None:
        """Record one channel attempt of delivery *delivery_id*."""

    def close(self) -> None:
        """Release resources. Default is a no-op."""


class LoggingOutcomeReporter(OutcomeReporter):
    def report(self, delivery_id: UUID, attempt: DeliveryAttempt) -> None:
        logger.info(
            "Delivery attempt",
            extra={
                "delivery_id": str(delivery_id),
                "channel": str(attempt.channel),
                "target": attempt.target,
                "outcome": str(attempt.outcome),
                "reason": attempt.reason,
            },
        )


class KafkaOutcomeReporter(OutcomeReporter):
    """Publishes each attempt to the notification.delivery topic."""

    def __init__(self, config: KafkaConfig) -> None:
        self._topic = config.delivery_events_topic
        self._producer = Producer({
            "bootstrap.servers": config.bootstrap_servers,
            "acks": "all",
            "enable.idempotence": True,
            "linger.ms": 5,
            "compression.type": "lz4",
        })

    def report(self, delivery_id: UUID, attempt: DeliveryAttempt) -> None:
        value = json.dumps({
            "delivery_id": str(delivery_id),
            **attempt.model_dump(mode="json"),
        }).encode("utf-8")

        self._producer.produce(
            topic=self._topic,
            key=str(delivery_id).encode("utf-8"),
            value=value,
            on_delivery=self._on_delivery,
        )
        self._producer.poll(0)

    def flush(self, timeout: float = 10.0) -> int:
        """Flush remaining messages. Returns number of unflushed messages."""
        return self._producer.flush(timeout=timeout)

    def close(self) -> None:
        remaining = self.flush()
        if remaining > 0:
            logger.warning(
                "Reporter closed with unflushed messages",
                extra={"remaining": remaining},
            )

    @staticmethod
    def _on_delivery(err: object, msg: object) -> None:
        if err is not None:
            logger.error("Kafka delivery failed: %s", err)
