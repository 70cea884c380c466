"""Mail transport shared by the email and email-to-SMS providers."""

import logging
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from email.message import EmailMessage

from aiosmtplib import SMTP

from shared.config import SMTPConfig
from shared.enums import EmailProtocol

logger = logging.getLogger(__name__)


class TransportNotConfiguredError(RuntimeError):
    """Raised when a transport without credentials is asked to send."""


def compose_email(
    sender: str,
    to: str,
    subject: str,
    content_text: str,
    content_html: str | None = None,
) -> EmailMessage:
    msg = EmailMessage()
    msg["From"] = sender
    msg["To"] = to
    msg["Subject"] = subject

    msg.set_content(content_text)
    if content_html:
        msg.add_alternative(content_html, subtype="html")
    return msg


class MailTransport(ABC):
    """Outbound mail relay.

    Implementations are shared across concurrent deliveries and must not
    keep per-message state between calls.
    """

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """Whether credentials are present to attempt sending at all."""

    @property
    @abstractmethod
    def sender(self) -> str:
        """Address used in the From header."""

    @abstractmethod
    async def verify(self) -> None:
        """Check the relay accepts a connection. Raises on failure."""

    @abstractmethod
    async def send(self, message: EmailMessage) -> None:
        """Submit a message to the relay. Raises on rejection."""


class SMTPTransport(MailTransport):
    """SMTP relay via aiosmtplib.

    Every operation opens its own connection, so one instance can be used
    by any number of concurrent deliveries.
    """

    def __init__(self, config: SMTPConfig) -> None:
        self._config = config

    @property
    def is_configured(self) -> bool:
        return self._config.is_configured

    @property
    def sender(self) -> str:
        return self._config.sender

    async def verify(self) -> None:
        async with self._session() as smtp:
            await smtp.noop()
        logger.debug("SMTP connection verified", extra={"host": self._config.host})

    async def send(self, message: EmailMessage) -> None:
        async with self._session() as smtp:
            await smtp.send_message(message)

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[SMTP]:
        if not self.is_configured:
            raise TransportNotConfiguredError("transport not configured")

        protocol = self._config.protocol
        # aiosmtplib upgrades to STARTTLS on its own when offered; TLS and
        # STARTTLS are mutually exclusive.
        async with SMTP(
            hostname=self._config.host,
            port=self._config.port,
            use_tls=protocol == EmailProtocol.TLS,
            start_tls=protocol == EmailProtocol.STARTTLS,
            timeout=self._config.timeout_seconds,
        ) as smtp:
            await smtp.login(
                self._config.user,
                self._config.password.get_secret_value(),
            )
            yield smtp
