"""Process bootstrap: settings → validated config → registry → gateway."""

from __future__ import annotations

import logging

from .config import load_config
from .gateway import SMSGateway
from .registry import ProviderRegistry
from .settings import Settings

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def build_gateway(settings: Settings | None = None) -> SMSGateway:
    """Build a ready-to-use gateway.

    Raises ``ConfigError`` when the provider configuration is invalid; the
    process must not start with a partially valid routing table.
    """
    settings = settings or Settings()
    config = load_config(settings.config_path)
    registry = ProviderRegistry.from_config(config, timeout=settings.http_timeout_seconds)
    logger.info("SMS gateway ready with providers: %s", ", ".join(registry.names))
    return SMSGateway(config, registry, default_region=settings.default_region)
