"""Nexmo (Vonage) SMS API client."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from smsgateway.config import NexmoConfig
from smsgateway.errors import SMSClientError
from smsgateway.types import SMSMessage, SendResult

logger = logging.getLogger(__name__)

NEXMO_SMS_URL = "https://rest.nexmo.com/sms/json"
DEFAULT_TIMEOUT_SECONDS = 10.0


class NexmoClient:
    """Sends SMS messages via the Nexmo SMS API."""

    def __init__(self, config: NexmoConfig, *, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> None:
        self._config = config
        self._client = httpx.Client(timeout=timeout)

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def __enter__(self) -> NexmoClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def send(self, message: SMSMessage) -> SendResult:
        if not message.body:
            raise SMSClientError("No message body provided")

        payload = {
            "api_key": self._config.api_key,
            "api_secret": self._config.api_secret,
            "from": self._config.sender,
            "to": message.to.lstrip("+"),  # Nexmo wants digits only
            "text": message.body,
            "type": "unicode",
        }
        try:
            response = self._client.post(NEXMO_SMS_URL, data=payload)
        except httpx.HTTPError as exc:
            logger.exception("Unexpected error calling Nexmo SMS API")
            raise SMSClientError(str(exc)) from exc

        try:
            data = response.json()
        except ValueError as exc:
            logger.error("Nexmo returned non-JSON body. Status: %s, Body: %s", response.status_code, response.text)
            raise SMSClientError(
                f"Nexmo returned status {response.status_code}",
                raw_response=response.text,
            ) from exc

        messages = (data.get("messages") or []) if isinstance(data, dict) else None
        if not isinstance(messages, list) or not all(isinstance(m, dict) for m in messages):
            logger.error("Nexmo returned an unexpected reply. Status: %s, Body: %s", response.status_code, response.text)
            raise SMSClientError(
                f"Nexmo returned an unexpected reply (status {response.status_code})",
                raw_response=response.text,
            )

        success = bool(messages) and all(str(m.get("status")) == "0" for m in messages)
        if not success:
            errors = [m.get("error-text") for m in messages if str(m.get("status")) != "0"]
            logger.error("Nexmo rejected message: %s", errors or response.text)

        return SendResult(
            success=success,
            raw_response=response.text,
            segment_count=_message_count(data),
        )


def _message_count(data: dict[str, Any]) -> int | None:
    try:
        return int(data["message-count"])
    except (KeyError, TypeError, ValueError):
        return None
