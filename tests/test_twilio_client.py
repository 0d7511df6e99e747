"""Tests for the Twilio SMS client."""

import json
from unittest.mock import MagicMock, patch

import pytest
from twilio.base.exceptions import TwilioRestException  # type: ignore[import-untyped]

from smsgateway import SMSClientError, SMSMessage, TwilioConfig
from smsgateway.clients.twilio import TwilioClient


def _make_client(config: TwilioConfig) -> TwilioClient:
    """Create a TwilioClient with a mocked SDK Client."""
    with patch("smsgateway.clients.twilio.Client"), \
         patch("smsgateway.clients.twilio.TwilioHttpClient"):
        return TwilioClient(config)


def _twilio_message(status: str = "queued", num_segments: str = "1") -> MagicMock:
    return MagicMock(sid="SM123", status=status, error_code=None, error_message=None, num_segments=num_segments)


class TestTwilioSend:
    def test_send_success(self, twilio_config: TwilioConfig):
        client = _make_client(twilio_config)
        client._client.messages.create = MagicMock(return_value=_twilio_message(num_segments="2"))

        result = client.send(SMSMessage(to="+85251234567", body="Hello via SMS"))

        assert result.success
        assert result.segment_count == 2
        assert json.loads(result.raw_response)["sid"] == "SM123"
        call_kwargs = client._client.messages.create.call_args.kwargs
        assert call_kwargs["body"] == "Hello via SMS"
        assert call_kwargs["to"] == "+85251234567"
        assert call_kwargs["from_"] == "+14155238886"
        assert "messaging_service_sid" not in call_kwargs

    def test_messaging_service_sid_replaces_sender(self, twilio_config: TwilioConfig):
        config = twilio_config.model_copy(update={"message_service_sid": "MG123"})
        client = _make_client(config)
        client._client.messages.create = MagicMock(return_value=_twilio_message())

        client.send(SMSMessage(to="+85251234567", body="Hello"))

        call_kwargs = client._client.messages.create.call_args.kwargs
        assert call_kwargs["messaging_service_sid"] == "MG123"
        assert "from_" not in call_kwargs

    def test_failed_status_is_not_success(self, twilio_config: TwilioConfig):
        client = _make_client(twilio_config)
        client._client.messages.create = MagicMock(return_value=_twilio_message(status="failed"))

        result = client.send(SMSMessage(to="+85251234567", body="Hello"))

        assert not result.success

    def test_truncates_long_body(self, twilio_config: TwilioConfig):
        client = _make_client(twilio_config)
        client._client.messages.create = MagicMock(return_value=_twilio_message())

        client.send(SMSMessage(to="+85251234567", body="x" * 2000))

        assert len(client._client.messages.create.call_args.kwargs["body"]) == 1600

    def test_empty_body(self, twilio_config: TwilioConfig):
        client = _make_client(twilio_config)
        with pytest.raises(SMSClientError, match="No message body"):
            client.send(SMSMessage(to="+85251234567", body="  "))


class TestTwilioErrorHandling:
    def test_rest_exception(self, twilio_config: TwilioConfig):
        client = _make_client(twilio_config)
        client._client.messages.create = MagicMock(
            side_effect=TwilioRestException(400, "https://api.twilio.com", msg="Invalid 'To' Phone Number", code=21211)
        )

        with pytest.raises(SMSClientError) as exc_info:
            client.send(SMSMessage(to="+85251234567", body="Hi"))

        assert "Invalid" in str(exc_info.value)
        assert json.loads(exc_info.value.raw_response)["code"] == 21211

    def test_transport_error(self, twilio_config: TwilioConfig):
        client = _make_client(twilio_config)
        client._client.messages.create = MagicMock(side_effect=ConnectionError("connection reset"))

        with pytest.raises(SMSClientError, match="connection reset") as exc_info:
            client.send(SMSMessage(to="+85251234567", body="Hi"))

        assert isinstance(exc_info.value.__cause__, ConnectionError)
        assert exc_info.value.raw_response is None
