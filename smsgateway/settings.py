"""Process settings, read from ``SMSGATEWAY_*`` environment variables or ``.env``."""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings for the gateway process.

    Examples
    --------
    Override via environment::

        export SMSGATEWAY_CONFIG_PATH=/etc/smsgateway/sms-provider.yaml
        export SMSGATEWAY_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="SMSGATEWAY_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    config_path: Path = Path("sms-provider.yaml")
    log_level: str = "INFO"
    http_timeout_seconds: float = 10.0
    default_region: str | None = None  # For destinations without a leading "+"
