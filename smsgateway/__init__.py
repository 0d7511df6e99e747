"""
smsgateway: rule-based SMS provider routing.

Internal gateway that accepts "send this text to this phone number",
chooses one of several SMS vendors from a declarative rule set and
returns a normalized result. Callers never need to know which vendor
handles which country or application.

Quick start::

    from smsgateway import ProviderRegistry, SMSGateway, SMSMessage, load_config

    config = load_config("sms-provider.yaml")
    gateway = SMSGateway(config, ProviderRegistry.from_config(config))
    result = gateway.send("my-app", SMSMessage(to="+85251234567", body="Your code is 123456"))
    if result.success:
        print(f"Sent via {result.provider_name}")

Template vendors (SendCloud)::

    result = gateway.send("my-app", SMSMessage(
        to="+8613800138000",
        template_name="verification_code",
        language_tag="zh-CN",
        template_variables={"code": "123456"},
    ))

From environment settings::

    from smsgateway import build_gateway, configure_logging

    configure_logging("INFO")
    gateway = build_gateway()  # reads SMSGATEWAY_CONFIG_PATH etc.

For testing::

    from smsgateway import MockSMSClient, ProviderRegistry

    registry = ProviderRegistry({"twilio-global": MockSMSClient()})

Module overview
---------------
- ``config``    : Provider/rule models, validation, YAML loading
- ``selector``  : First-match-wins provider selection
- ``registry``  : Provider name → vendor client
- ``gateway``   : SMSGateway: normalize, select, send, log
- ``clients/``  : Twilio, Nexmo, AccessYou, SendCloud, Mock
- ``phone/``    : Phone number parsing (libphonenumber) and masking
- ``errors``    : Error taxonomy
- ``response``  : Response envelope for a transport layer
- ``settings``  : Environment-driven process settings
- ``app``       : Bootstrap helpers

What this library does NOT own:
- The HTTP server in front of it
- Delivery retries, rate limiting, queuing, persistence
"""

from .app import build_gateway, configure_logging
from .clients import AccessYouClient, MockSMSClient, NexmoClient, SendCloudClient, SMSClient, TwilioClient
from .config import (
    AccessYouConfig,
    AccessYouProvider,
    DefaultRule,
    MatchAppAndCountryRule,
    MatchCountryRule,
    NexmoConfig,
    NexmoProvider,
    ProviderType,
    RoutingConfig,
    SendCloudConfig,
    SendCloudProvider,
    TwilioConfig,
    TwilioProvider,
    load_config,
    parse_config_yaml,
    validate_config,
)
from .errors import (
    ConfigError,
    ConfigIssue,
    GatewayError,
    IntegrityViolation,
    InvalidDestinationError,
    SchemaError,
    SMSClientError,
    UnknownProviderError,
    ValidationError,
    VendorSendError,
)
from .gateway import SMSGateway
from .phone import mask_phone_number, parse_phone_number
from .registry import ProviderRegistry
from .response import ErrorCode, ResponseBody
from .selector import select_provider
from .settings import Settings
from .types import MatchContext, SendResult, SMSMessage

__all__ = [
    # Gateway
    "SMSGateway",
    "ProviderRegistry",
    "select_provider",
    "build_gateway",
    "configure_logging",
    "Settings",
    # Clients
    "SMSClient",
    "TwilioClient",
    "NexmoClient",
    "AccessYouClient",
    "SendCloudClient",
    "MockSMSClient",
    # Config
    "RoutingConfig",
    "ProviderType",
    "TwilioProvider",
    "TwilioConfig",
    "NexmoProvider",
    "NexmoConfig",
    "AccessYouProvider",
    "AccessYouConfig",
    "SendCloudProvider",
    "SendCloudConfig",
    "MatchCountryRule",
    "MatchAppAndCountryRule",
    "DefaultRule",
    "validate_config",
    "parse_config_yaml",
    "load_config",
    # Types
    "SMSMessage",
    "MatchContext",
    "SendResult",
    # Errors
    "GatewayError",
    "ConfigError",
    "ConfigIssue",
    "SchemaError",
    "ValidationError",
    "InvalidDestinationError",
    "IntegrityViolation",
    "UnknownProviderError",
    "SMSClientError",
    "VendorSendError",
    # Response
    "ErrorCode",
    "ResponseBody",
    # Phone
    "parse_phone_number",
    "mask_phone_number",
]
