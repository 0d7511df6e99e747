"""Twilio SMS client."""

from __future__ import annotations

import json
import logging
from typing import Any

from twilio.base.exceptions import TwilioRestException  # type: ignore[import-untyped]
from twilio.http.http_client import TwilioHttpClient  # type: ignore[import-untyped]
from twilio.rest import Client  # type: ignore[import-untyped]

from smsgateway.config import TwilioConfig
from smsgateway.errors import SMSClientError
from smsgateway.types import SMSMessage, SendResult

logger = logging.getLogger(__name__)

MAX_SMS_CHARS = 1600
DEFAULT_TIMEOUT_SECONDS = 10.0

_FAILED_STATUSES = {"failed", "undelivered", "canceled"}


class TwilioClient:
    """Sends SMS messages via the Twilio REST API."""

    def __init__(self, config: TwilioConfig, *, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> None:
        self._config = config
        http_client = TwilioHttpClient(timeout=timeout)
        self._client = Client(config.account_sid, config.auth_token, http_client=http_client)

    def send(self, message: SMSMessage) -> SendResult:
        body = (message.body or "").strip()
        if not body:
            raise SMSClientError("No message body provided")

        if len(body) > MAX_SMS_CHARS:
            body = body[:MAX_SMS_CHARS]

        params: dict[str, Any] = {"to": message.to, "body": body}
        if self._config.message_service_sid:
            params["messaging_service_sid"] = self._config.message_service_sid
        else:
            params["from_"] = self._config.sender

        try:
            msg = self._client.messages.create(**params)
        except TwilioRestException as exc:
            logger.error("Twilio SMS API error: code=%s msg=%s", exc.code, exc.msg)
            raw = json.dumps({"status": exc.status, "code": exc.code, "message": exc.msg})
            raise SMSClientError(str(exc.msg), raw_response=raw) from exc
        except Exception as exc:
            logger.exception("Twilio SMS send failed: %s", exc)
            raise SMSClientError(str(exc)) from exc

        status = getattr(msg, "status", None)
        raw_response = json.dumps(
            {
                "sid": getattr(msg, "sid", None),
                "status": status,
                "error_code": getattr(msg, "error_code", None),
                "error_message": getattr(msg, "error_message", None),
                "num_segments": getattr(msg, "num_segments", None),
            }
        )
        return SendResult(
            success=status not in _FAILED_STATUSES,
            raw_response=raw_response,
            segment_count=_to_int(getattr(msg, "num_segments", None)),
        )


def _to_int(value: Any) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
