"""Celery application setup and worker initialization."""

import logging

from celery import Celery, signals
from kombu import Queue

from shared.config import KafkaConfig, PushConfig, SMTPConfig

from fallback_delivery.config import CeleryConfig, DeliveryConfig
from fallback_delivery.log import setup_logging
from fallback_delivery.orchestrator import DeliveryOrchestrator
from fallback_delivery.providers import create_default_registry
from fallback_delivery.providers.push import WebPushSender
from fallback_delivery.reporters import (
    KafkaOutcomeReporter,
    LoggingOutcomeReporter,
    OutcomeReporter,
)
from fallback_delivery.transport import SMTPTransport

logger = logging.getLogger(__name__)

celery_config = CeleryConfig()

app = Celery("fallback_delivery", broker=celery_config.broker_url)

app.conf.update(
    task_acks_late=True,
    worker_prefetch_multiplier=1,
    task_queues=[
        Queue("high"),
        Queue("normal"),
    ],
    task_default_queue="normal",
)

app.autodiscover_tasks(["fallback_delivery"])


def build_orchestrator(
    delivery_config: DeliveryConfig,
    smtp_config: SMTPConfig,
    push_config: PushConfig,
    reporter: OutcomeReporter,
) -> DeliveryOrchestrator:
    """Wire transport, providers and reporter into an orchestrator."""
    transport = SMTPTransport(smtp_config)
    if not smtp_config.is_configured:
        logger.warning("SMTP credentials not set, email and SMS will fail")
    if not push_config.is_configured:
        logger.warning("VAPID keys not set, push will fail")

    registry = create_default_registry(
        transport,
        WebPushSender(push_config),
        app_name=delivery_config.app_name,
        timezone_name=delivery_config.timezone,
    )
    return DeliveryOrchestrator(registry, reporter)


@signals.worker_init.connect
def _init_worker(**_kwargs: object) -> None:
    """Initialize shared resources once per worker process."""
    delivery_config = DeliveryConfig()
    setup_logging(delivery_config.log_level)

    reporter: OutcomeReporter
    if delivery_config.reporter == "kafka":
        reporter = KafkaOutcomeReporter(KafkaConfig())
    else:
        reporter = LoggingOutcomeReporter()

    orchestrator = build_orchestrator(
        delivery_config, SMTPConfig(), PushConfig(), reporter
    )

    app.conf.update(
        _orchestrator=orchestrator,
        _reporter=reporter,
    )
    logger.info("Worker initialized", extra={"reporter": delivery_config.reporter})


@signals.worker_shutdown.connect
def _shutdown_worker(**_kwargs: object) -> None:
    """Clean up resources on worker shutdown."""
    reporter: OutcomeReporter | None = getattr(app.conf, "_reporter", None)
    if reporter is not None:
        reporter.close()
    logger.info("Worker shut down")
