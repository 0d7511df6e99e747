"""Shared test fixtures for the SMS gateway."""

from typing import Any

import pytest

from smsgateway import (
    AccessYouConfig,
    MockSMSClient,
    NexmoConfig,
    ProviderRegistry,
    RoutingConfig,
    SendCloudConfig,
    TwilioConfig,
    validate_config,
)


@pytest.fixture
def raw_config() -> dict[str, Any]:
    return {
        "providers": [
            {
                "name": "twilio-global",
                "type": "twilio",
                "twilio": {
                    "sender": "+14155238886",
                    "account_sid": "ACtest123",
                    "auth_token": "test_token_456",
                },
            },
            {
                "name": "accessyou-hk",
                "type": "accessyou",
                "accessyou": {
                    "sender": "MyApp",
                    "accountno": "11012345",
                    "user": "11012345",
                    "pwd": "secret",
                },
            },
            {
                "name": "nexmo-sg",
                "type": "nexmo",
                "nexmo": {"sender": "MyApp", "api_key": "key", "api_secret": "secret"},
            },
        ],
        "rules": [
            {"kind": "match_country", "country_code": "HK", "use_provider": "accessyou-hk"},
            {
                "kind": "match_app_and_country",
                "app_id": "appZ",
                "country_code": "SG",
                "use_provider": "nexmo-sg",
            },
            {"kind": "default", "use_provider": "twilio-global"},
        ],
    }


@pytest.fixture
def routing_config(raw_config: dict[str, Any]) -> RoutingConfig:
    return validate_config(raw_config)


@pytest.fixture
def mock_clients() -> dict[str, MockSMSClient]:
    return {
        "twilio-global": MockSMSClient(),
        "accessyou-hk": MockSMSClient(),
        "nexmo-sg": MockSMSClient(),
    }


@pytest.fixture
def mock_registry(mock_clients: dict[str, MockSMSClient]) -> ProviderRegistry:
    return ProviderRegistry(mock_clients)


@pytest.fixture
def twilio_config() -> TwilioConfig:
    return TwilioConfig(sender="+14155238886", account_sid="ACtest123", auth_token="test_token_456")


@pytest.fixture
def nexmo_config() -> NexmoConfig:
    return NexmoConfig(sender="MyApp", api_key="nexmo_key", api_secret="nexmo_secret")


@pytest.fixture
def accessyou_config() -> AccessYouConfig:
    return AccessYouConfig(sender="MyApp", accountno="11012345", user="11012345", pwd="secret")


@pytest.fixture
def sendcloud_config() -> SendCloudConfig:
    return SendCloudConfig.model_validate(
        {
            "sms_user": "sc_user",
            "sms_key": "sc_key",
            "templates": [
                {"template_id": "100", "template_msg_type": "2"},
                {"template_id": "101", "template_msg_type": "0"},
            ],
            "template_assignments": [
                {
                    "template_name": "verification_code",
                    "default_template_id": "100",
                    "by_languages": [{"language_tag": "zh-CN", "template_id": "101"}],
                },
            ],
        }
    )
