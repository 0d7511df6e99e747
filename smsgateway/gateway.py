"""SMS gateway: the main entry point for sending messages.

The gateway picks a provider for each message from the routing rules,
then hands the message to that provider's client. It makes one routing
decision and one vendor call per message; it never retries.
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .errors import IntegrityViolation, InvalidDestinationError, SMSClientError, VendorSendError
from .phone import mask_phone_number, parse_phone_number
from .selector import select_provider
from .types import MatchContext, SendResult

if TYPE_CHECKING:
    from .config import RoutingConfig
    from .registry import ProviderRegistry
    from .types import SMSMessage

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class _RoutingState:
    config: RoutingConfig
    registry: ProviderRegistry


class SMSGateway:
    """Routes messages to the configured SMS provider.

    Usage::

        from smsgateway import ProviderRegistry, SMSGateway, SMSMessage, load_config

        config = load_config("sms-provider.yaml")
        gateway = SMSGateway(config, ProviderRegistry.from_config(config))
        result = gateway.send("my-app", SMSMessage(to="+85251234567", body="Your code is 123456"))
        if result.success:
            print(f"Sent via {result.provider_name}")
    """

    def __init__(
        self,
        config: RoutingConfig,
        registry: ProviderRegistry,
        *,
        default_region: str | None = None,
    ) -> None:
        self._state = _RoutingState(config, registry)
        self.default_region = default_region

    @property
    def config(self) -> RoutingConfig:
        return self._state.config

    @property
    def registry(self) -> ProviderRegistry:
        return self._state.registry

    def replace(self, config: RoutingConfig, registry: ProviderRegistry) -> None:
        """Swap in a new configuration and registry as one unit.

        Dispatches already running keep the pair they started with.
        """
        self._state = _RoutingState(config, registry)

    def select(self, app_id: str, to: str) -> str:
        """Return the provider name that would handle a message to ``to``."""
        parsed = parse_phone_number(to, self.default_region)
        return select_provider(self.config.rules, MatchContext(app_id=app_id, country_code=parsed.alpha2))

    def send(self, app_id: str, message: SMSMessage) -> SendResult:
        """Send a message through the provider chosen for it.

        Args:
            app_id: Identifier of the calling application.
            message: The message; ``to`` may be in any format libphonenumber
                accepts and is normalized to E.164 before sending.

        Returns:
            The vendor's answer, tagged with the provider name. A vendor
            rejection is returned with ``success=False``.

        Raises:
            InvalidDestinationError: ``message.to`` is not a valid number.
            IntegrityViolation: routing could not resolve a registered provider.
            VendorSendError: the vendor could not be reached or its reply
                could not be understood.
        """
        state = self._state
        masked_to = mask_phone_number(message.to)
        try:
            parsed = parse_phone_number(message.to, self.default_region)
        except InvalidDestinationError as exc:
            logger.warning(
                "SMS rejected: to=%s error=%s",
                masked_to,
                exc.reason,
                extra=_log_fields(app_id, masked_to, "", "invalid_destination"),
            )
            raise
        ctx = MatchContext(app_id=app_id, country_code=parsed.alpha2)

        try:
            provider_name = select_provider(state.config.rules, ctx)
            client = state.registry.get(provider_name)
        except IntegrityViolation:
            logger.exception(
                "SMS routing integrity violation: to=%s app_id=%s",
                masked_to,
                app_id,
                extra=_log_fields(app_id, masked_to, "", "integrity_violation"),
            )
            raise

        outgoing = dataclasses.replace(message, to=parsed.e164)
        try:
            result = client.send(outgoing)
        except SMSClientError as exc:
            logger.error(
                "SMS send failed: to=%s provider=%s error=%s",
                masked_to,
                provider_name,
                exc,
                extra=_log_fields(app_id, masked_to, provider_name, "error"),
            )
            raise VendorSendError(provider_name, str(exc), raw_response=exc.raw_response) from exc

        result = dataclasses.replace(result, provider_name=provider_name)
        outcome = "success" if result.success else "rejected"
        logger.info(
            "SMS dispatched: to=%s provider=%s outcome=%s",
            masked_to,
            provider_name,
            outcome,
            extra=_log_fields(app_id, masked_to, provider_name, outcome),
        )
        return result

    dispatch = send

    async def send_async(self, app_id: str, message: SMSMessage) -> SendResult:
        """Send a message asynchronously (runs sync send in a thread)."""
        return await asyncio.to_thread(self.send, app_id, message)

    dispatch_async = send_async


def _log_fields(app_id: str, masked_to: str, provider_name: str, outcome: str) -> dict[str, str]:
    return {
        "app_id": app_id,
        "to": masked_to,
        "provider_name": provider_name,
        "outcome": outcome,
    }
