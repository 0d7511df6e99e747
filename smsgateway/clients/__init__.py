"""SMS vendor clients."""

from .accessyou import AccessYouClient
from .base import SMSClient
from .mock import MockSMSClient
from .nexmo import NexmoClient
from .sendcloud import SendCloudClient
from .twilio import TwilioClient

__all__ = [
    "AccessYouClient",
    "MockSMSClient",
    "NexmoClient",
    "SMSClient",
    "SendCloudClient",
    "TwilioClient",
]
