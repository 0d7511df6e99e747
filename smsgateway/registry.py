"""Provider registry: configured provider name → live vendor client."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

from .clients import AccessYouClient, NexmoClient, SendCloudClient, SMSClient, TwilioClient
from .config import ProviderType, RoutingConfig
from .errors import UnknownProviderError

logger = logging.getLogger(__name__)

ClientFactory = Callable[[Any, float], SMSClient]

DEFAULT_TIMEOUT_SECONDS = 10.0

# Each factory receives the provider definition and the HTTP timeout.
DEFAULT_FACTORIES: Mapping[ProviderType, ClientFactory] = MappingProxyType(
    {
        ProviderType.TWILIO: lambda p, timeout: TwilioClient(p.twilio, timeout=timeout),
        ProviderType.NEXMO: lambda p, timeout: NexmoClient(p.nexmo, timeout=timeout),
        ProviderType.ACCESSYOU: lambda p, timeout: AccessYouClient(p.accessyou, timeout=timeout),
        ProviderType.SENDCLOUD: lambda p, timeout: SendCloudClient(p.sendcloud, timeout=timeout),
    }
)


class ProviderRegistry:
    """Read-only lookup of vendor clients by provider name."""

    def __init__(self, clients: Mapping[str, SMSClient]) -> None:
        self._clients = MappingProxyType(dict(clients))

    @classmethod
    def from_config(
        cls,
        config: RoutingConfig,
        *,
        factories: Mapping[ProviderType, ClientFactory] = DEFAULT_FACTORIES,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> ProviderRegistry:
        """Instantiate one client per configured provider."""
        clients: dict[str, SMSClient] = {}
        for provider in config.providers:
            factory = factories[ProviderType(provider.type)]
            clients[provider.name] = factory(provider, timeout)
            logger.debug("Registered SMS provider %s (%s)", provider.name, provider.type)
        return cls(clients)

    def get(self, name: str) -> SMSClient:
        try:
            return self._clients[name]
        except KeyError:
            raise UnknownProviderError(name) from None

    def __contains__(self, name: object) -> bool:
        return name in self._clients

    def __len__(self) -> int:
        return len(self._clients)

    @property
    def names(self) -> list[str]:
        return list(self._clients)

    def close(self) -> None:
        """Close clients that hold network resources."""
        for client in self._clients.values():
            close = getattr(client, "close", None)
            if callable(close):
                close()
