"""Base protocol for SMS vendor clients."""

from __future__ import annotations

from typing import Protocol

from smsgateway.types import SMSMessage, SendResult


class SMSClient(Protocol):
    """Interface that every vendor client must implement."""

    def send(self, message: SMSMessage) -> SendResult:
        """Send an SMS and return the vendor's answer.

        ``message.to`` is already in E.164 form. Raise ``SMSClientError``
        when the vendor cannot be reached or its reply cannot be understood;
        return ``SendResult(success=False, ...)`` when the vendor answered
        and rejected the message.
        """
        ...
