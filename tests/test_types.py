"""Tests for the core message types."""

import dataclasses

import pytest

from smsgateway import SMSMessage


class TestSMSMessage:
    def test_template_variables_are_read_only(self):
        msg = SMSMessage(to="+8613800138000", template_name="verification_code", template_variables={"code": "1"})
        with pytest.raises(TypeError):
            msg.template_variables["code"] = "2"  # type: ignore[index]

    def test_template_variables_are_copied(self):
        variables = {"code": "123456"}
        msg = SMSMessage(to="+8613800138000", template_name="verification_code", template_variables=variables)
        variables["code"] = "654321"
        assert msg.template_variables["code"] == "123456"

    def test_hashable(self):
        a = SMSMessage(to="+85251234567", body="Hello", template_variables={"x": 1})
        b = SMSMessage(to="+85251234567", body="Hello", template_variables={"x": 1})
        assert a == b
        assert hash(a) == hash(b)

    def test_replace_keeps_variables(self):
        msg = SMSMessage(to="5123 4567", template_name="welcome", template_variables={"name": "Ada"})
        moved = dataclasses.replace(msg, to="+85251234567")
        assert moved.to == "+85251234567"
        assert moved.template_variables == {"name": "Ada"}
