"""AccessYou SMS client (Hong Kong)."""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from typing import Any

import httpx

from smsgateway.config import AccessYouConfig
from smsgateway.errors import SMSClientError
from smsgateway.types import SMSMessage, SendResult

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0
SUCCESS_STATUS = "100"

_PLUS_HYPHENS = re.compile(r"[+\-]+")


def fix_phone_number(phone_number: str) -> str:
    """AccessYou expects phone numbers without ``+`` or ``-``."""
    return _PLUS_HYPHENS.sub("", phone_number)


class AccessYouClient:
    """Sends SMS messages via the AccessYou HTTP API."""

    def __init__(self, config: AccessYouConfig, *, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> None:
        self._config = config
        self._url = config.base_url.rstrip("/") + "/sendsms.php"
        self._client = httpx.Client(timeout=timeout)

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def __enter__(self) -> AccessYouClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def send(self, message: SMSMessage) -> SendResult:
        if not message.body:
            raise SMSClientError("No message body provided")

        params = {
            "accountno": self._config.accountno,
            "user": self._config.user,
            "pwd": self._config.pwd,
            "tid": "1",
            "a": message.body,
            "phone": fix_phone_number(message.to),
            "from": self._config.sender,
            "size": "l",
        }
        try:
            response = self._client.get(self._url, params=params)
        except httpx.HTTPError as exc:
            logger.exception("Unexpected error calling AccessYou API")
            raise SMSClientError(str(exc)) from exc

        status = _parse_status(response.text)
        if status is None:
            logger.error("AccessYou returned unexpected body. Status: %s, Body: %s", response.status_code, response.text)
            raise SMSClientError(
                f"AccessYou returned status {response.status_code}",
                raw_response=response.text,
            )
        if status != SUCCESS_STATUS:
            logger.error("AccessYou rejected message: msg_status=%s", status)

        return SendResult(success=status == SUCCESS_STATUS, raw_response=response.text)


def _parse_status(body: str) -> str | None:
    """Extract ``msg_status`` from an AccessYou XML reply."""
    try:
        root = ET.fromstring(body)
    except ET.ParseError:
        return None
    node = root if root.tag == "msg_status" else root.find(".//msg_status")
    if node is None or node.text is None:
        return None
    return node.text.strip()
