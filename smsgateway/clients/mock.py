"""Mock SMS client for testing.

Records all sent messages and returns configurable results.
Useful for unit testing routing and dispatch without hitting real vendors.
"""

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass

from smsgateway.errors import SMSClientError
from smsgateway.types import SMSMessage, SendResult


@dataclass
class SentMessage:
    """Record of a message sent through the MockSMSClient."""

    message: SMSMessage
    result: SendResult


class MockSMSClient:
    """Test client that records messages and returns configurable results.

    Usage::

        client = MockSMSClient()
        result = client.send(SMSMessage(to="+85251234567", body="hi"))
        assert result.success
        assert client.sent[0].message.body == "hi"

    Or provide a fixed result, or an error to raise::

        client = MockSMSClient(fixed_result=SendResult(success=False, raw_response="quota"))
        client = MockSMSClient(error=SMSClientError("timeout"))
    """

    def __init__(
        self,
        *,
        fixed_result: SendResult | None = None,
        error: SMSClientError | None = None,
    ) -> None:
        self.fixed_result = fixed_result
        self.error = error
        self.sent: list[SentMessage] = []

    def send(self, message: SMSMessage) -> SendResult:
        if self.error is not None:
            raise self.error

        if self.fixed_result is not None:
            result = self.fixed_result
        else:
            result = SendResult(
                success=True,
                raw_response=json.dumps({"id": f"mock_{uuid.uuid4().hex[:12]}"}),
            )

        self.sent.append(SentMessage(message=message, result=result))
        return result

    def reset(self) -> None:
        """Clear all recorded messages."""
        self.sent.clear()
