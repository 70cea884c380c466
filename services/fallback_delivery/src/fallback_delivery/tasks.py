"""Celery task for fallback notification delivery."""

import asyncio
import logging
from typing import Any

from shared.enums import Category
from shared.models import NotificationPayload, RecipientProfile

from fallback_delivery.celery import app
from fallback_delivery.messages import build_test_notification
from fallback_delivery.orchestrator import DeliveryOrchestrator

logger = logging.getLogger(__name__)

TASK_NAME = "fallback_delivery.tasks.deliver_notification"


@app.task(name=TASK_NAME)
def deliver_notification(
    recipient: dict[str, Any], payload: dict[str, Any]
) -> dict[str, Any]:
    """Deliver one payload to one recipient through the fallback chain.

    Both arguments are plain dicts (JSON-serialized by Celery). Invalid
    input raises ``pydantic.ValidationError`` before any channel is tried.
    Returns the ``DeliveryResult`` as JSON-ready data.
    """
    orchestrator: DeliveryOrchestrator = app.conf._orchestrator

    profile = RecipientProfile.model_validate(recipient)
    notification = NotificationPayload.model_validate(payload)

    result = asyncio.run(orchestrator.deliver(profile, notification))

    log_ctx = {
        "delivery_id": str(result.delivery_id),
        "category": str(notification.category),
        "attempts": len(result.attempts),
    }
    if result.succeeded:
        logger.info("Notification delivered", extra=log_ctx)
    else:
        logger.error(
            "Notification undeliverable",
            extra={**log_ctx, "trail": result.summary()},
        )
    return result.model_dump(mode="json")


def queue_for(category: Category) -> str:
    """Alerts jump the queue; the channel chain is the same for all."""
    return "high" if category == Category.ALERT else "normal"


def enqueue_delivery(
    recipient: RecipientProfile, payload: NotificationPayload
) -> None:
    app.send_task(
        TASK_NAME,
        kwargs={
            "recipient": recipient.model_dump(mode="json"),
            "payload": payload.model_dump(mode="json"),
        },
        queue=queue_for(payload.category),
    )


def enqueue_test_notification(recipient: RecipientProfile) -> None:
    enqueue_delivery(recipient, build_test_notification())
