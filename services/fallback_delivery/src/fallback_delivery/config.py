from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class CeleryConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="CELERY_")

    broker_url: str = "redis://localhost:6379/0"


class DeliveryConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="DELIVERY_")

    log_level: str = "INFO"
    reporter: Literal["log", "kafka"] = "log"
    app_name: str = "Site Notifications"
    timezone: str = "Australia/Melbourne"
