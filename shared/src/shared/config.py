from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from shared.enums import EmailProtocol


class KafkaConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="KAFKA_")

    bootstrap_servers: str = "localhost:9092"
    delivery_events_topic: str = "notification.delivery"


class SMTPConfig(BaseSettings):
    """Mail relay used for both email delivery and email-to-SMS gateways."""

    model_config = SettingsConfigDict(env_prefix="SMTP_")

    host: str = ""
    port: int = 587
    protocol: EmailProtocol = EmailProtocol.STARTTLS
    user: str = ""
    password: SecretStr = SecretStr("")
    from_email: str = ""
    timeout_seconds: float = 30.0

    @property
    def is_configured(self) -> bool:
        return bool(self.host and self.user and self.password.get_secret_value())

    @property
    def sender(self) -> str:
        return self.from_email or self.user


class PushConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="VAPID_")

    public_key: str = ""
    private_key: SecretStr = SecretStr("")
    subject: str = "mailto:admin@example.com"
    ttl_seconds: int = 86400

    @property
    def is_configured(self) -> bool:
        return bool(self.private_key.get_secret_value())
