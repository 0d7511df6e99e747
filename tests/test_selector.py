"""Tests for provider selection."""

import pytest

from smsgateway import (
    DefaultRule,
    IntegrityViolation,
    MatchAppAndCountryRule,
    MatchContext,
    MatchCountryRule,
    RoutingConfig,
    select_provider,
)


def _country(country_code: str, use: str) -> MatchCountryRule:
    return MatchCountryRule(kind="match_country", country_code=country_code, use_provider=use)


def _app_country(app_id: str, country_code: str, use: str) -> MatchAppAndCountryRule:
    return MatchAppAndCountryRule(
        kind="match_app_and_country", app_id=app_id, country_code=country_code, use_provider=use
    )


def _default(use: str) -> DefaultRule:
    return DefaultRule(kind="default", use_provider=use)


class TestMatchCountry:
    rules = [_country("HK", "ProviderA"), _default("ProviderB")]

    def test_country_match_wins(self):
        assert select_provider(self.rules, MatchContext(app_id="X", country_code="HK")) == "ProviderA"

    def test_falls_back_to_default(self):
        assert select_provider(self.rules, MatchContext(app_id="X", country_code="US")) == "ProviderB"

    def test_match_is_case_sensitive(self):
        assert select_provider(self.rules, MatchContext(app_id="X", country_code="hk")) == "ProviderB"


class TestMatchAppAndCountry:
    rules = [_app_country("appZ", "SG", "ProviderC"), _default("ProviderB")]

    def test_app_and_country_match(self):
        assert select_provider(self.rules, MatchContext(app_id="appZ", country_code="SG")) == "ProviderC"

    def test_app_mismatch_falls_through(self):
        assert select_provider(self.rules, MatchContext(app_id="appW", country_code="SG")) == "ProviderB"

    def test_country_mismatch_falls_through(self):
        assert select_provider(self.rules, MatchContext(app_id="appZ", country_code="MY")) == "ProviderB"


class TestOrdering:
    def test_first_match_wins(self):
        rules = [
            _country("HK", "First"),
            _app_country("app", "HK", "Second"),
            _default("Fallback"),
        ]
        assert select_provider(rules, MatchContext(app_id="app", country_code="HK")) == "First"

    def test_default_does_not_stop_scan(self):
        rules = [_default("Fallback"), _country("HK", "Hong Kong")]
        assert select_provider(rules, MatchContext(app_id="X", country_code="HK")) == "Hong Kong"

    def test_last_default_wins(self):
        rules = [_default("Early"), _country("HK", "Hong Kong"), _default("Late")]
        assert select_provider(rules, MatchContext(app_id="X", country_code="US")) == "Late"

    def test_default_only(self):
        assert select_provider([_default("Only")], MatchContext(app_id="X", country_code="JP")) == "Only"

    def test_idempotent(self):
        rules = [_country("HK", "A"), _default("B")]
        ctx = MatchContext(app_id="X", country_code="HK")
        assert select_provider(rules, ctx) == select_provider(rules, ctx)


class TestIntegrity:
    def test_no_default_and_no_match_is_fatal(self):
        with pytest.raises(IntegrityViolation, match="no default rule"):
            select_provider([_country("HK", "A")], MatchContext(app_id="X", country_code="US"))

    def test_empty_rules_is_fatal(self):
        with pytest.raises(IntegrityViolation):
            select_provider([], MatchContext(app_id="X", country_code="US"))


class TestWithValidatedConfig:
    @pytest.mark.parametrize(
        ("app_id", "country_code", "expected"),
        [
            ("any", "HK", "accessyou-hk"),
            ("appZ", "SG", "nexmo-sg"),
            ("appW", "SG", "twilio-global"),
            ("any", "US", "twilio-global"),
        ],
    )
    def test_selects_configured_provider(self, routing_config: RoutingConfig, app_id, country_code, expected):
        name = select_provider(routing_config.rules, MatchContext(app_id=app_id, country_code=country_code))
        assert name == expected
        assert name in routing_config.provider_names
