"""SendCloud template SMS client.

SendCloud only delivers pre-approved templates. The gateway's
``template_name`` and ``language_tag`` are mapped to a SendCloud template
id through the provider's ``template_assignments``.
"""

from __future__ import annotations

import hashlib
import json
import logging
from typing import Any

import httpx

from smsgateway.config import SendCloudConfig
from smsgateway.errors import SMSClientError
from smsgateway.types import SMSMessage, SendResult

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0
SEND_PATH = "/smsapi/send"


def sign_params(params: dict[str, str], sms_key: str) -> str:
    """MD5 signature over the sorted parameters, wrapped in the key."""
    joined = "&".join(f"{key}={params[key]}" for key in sorted(params))
    return hashlib.md5(f"{sms_key}&{joined}&{sms_key}".encode("utf-8")).hexdigest()  # noqa: S324


def sendcloud_phone(e164: str) -> str:
    # Mainland China numbers are sent without the country code.
    if e164.startswith("+86"):
        return e164[3:]
    return e164


class SendCloudClient:
    """Sends template SMS messages via the SendCloud API."""

    def __init__(self, config: SendCloudConfig, *, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> None:
        self._config = config
        self._url = config.base_url.rstrip("/") + SEND_PATH
        self._client = httpx.Client(timeout=timeout)

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def __enter__(self) -> SendCloudClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def send(self, message: SMSMessage) -> SendResult:
        if not message.template_name:
            raise SMSClientError("SendCloud requires a template_name")

        template = self._config.resolve_template(message.template_name, message.language_tag)
        if template is None:
            raise SMSClientError(
                f"no SendCloud template assigned to {message.template_name!r} "
                f"(language {message.language_tag!r})"
            )

        params = {
            "smsUser": self._config.sms_user,
            "templateId": template.template_id,
            "msgType": template.template_msg_type,
            "phone": sendcloud_phone(message.to),
            "vars": json.dumps(
                {f"%{key}%": str(value) for key, value in message.template_variables.items()},
                ensure_ascii=False,
                sort_keys=True,
            ),
        }
        params["signature"] = sign_params(params, self._config.sms_key)

        try:
            response = self._client.post(self._url, data=params)
        except httpx.HTTPError as exc:
            logger.exception("Unexpected error calling SendCloud API")
            raise SMSClientError(str(exc)) from exc

        try:
            data = response.json()
        except ValueError as exc:
            logger.error("SendCloud returned non-JSON body. Status: %s, Body: %s", response.status_code, response.text)
            raise SMSClientError(
                f"SendCloud returned status {response.status_code}",
                raw_response=response.text,
            ) from exc

        if not isinstance(data, dict):
            logger.error("SendCloud returned an unexpected reply. Status: %s, Body: %s", response.status_code, response.text)
            raise SMSClientError(
                f"SendCloud returned an unexpected reply (status {response.status_code})",
                raw_response=response.text,
            )

        success = data.get("result") is True
        if not success:
            logger.error(
                "SendCloud rejected message: statusCode=%s message=%s",
                data.get("statusCode"),
                data.get("message"),
            )
        return SendResult(success=success, raw_response=response.text)
