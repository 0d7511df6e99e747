"""Provider and routing configuration.

The configuration is parsed once at startup and then shared read-only by
every request. A configuration looks like::

    providers:
      - name: twilio-global
        type: twilio
        twilio:
          sender: "+14155238886"
          account_sid: AC...
          auth_token: ...
      - name: accessyou-hk
        type: accessyou
        accessyou:
          sender: MyApp
          accountno: "11012345"
          user: "11012345"
          pwd: ...
    rules:
      - kind: match_country
        country_code: HK
        use_provider: accessyou-hk
      - kind: default
        use_provider: twilio-global

Validation runs in two passes. The schema pass (pydantic) reports every
structural problem at once as a ``SchemaError``. The cross-reference pass
reports every dangling reference at once as a ``ValidationError``.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Annotated, Any, Literal, Union

import pydantic
import yaml
from pydantic import BaseModel, ConfigDict, Field

from .errors import ConfigIssue, SchemaError, ValidationError
from .types import MatchContext

logger = logging.getLogger(__name__)

_STRICT = ConfigDict(frozen=True, extra="forbid")

DEFAULT_ACCESSYOU_BASE_URL = "http://sms.accessyou-anyip.com"
DEFAULT_SENDCLOUD_BASE_URL = "https://api.sendcloud.net"


class ProviderType(str, Enum):
    TWILIO = "twilio"
    NEXMO = "nexmo"
    ACCESSYOU = "accessyou"
    SENDCLOUD = "sendcloud"


# ── Vendor blocks ─────────────────────────────────────────────────────


class TwilioConfig(BaseModel):
    model_config = _STRICT

    sender: str
    account_sid: str
    auth_token: str
    message_service_sid: str | None = None  # Takes precedence over sender when set


class NexmoConfig(BaseModel):
    model_config = _STRICT

    sender: str
    api_key: str
    api_secret: str


class AccessYouConfig(BaseModel):
    model_config = _STRICT

    sender: str
    accountno: str
    user: str
    pwd: str
    base_url: str = DEFAULT_ACCESSYOU_BASE_URL


class SendCloudTemplate(BaseModel):
    model_config = _STRICT

    template_id: str
    template_msg_type: str


class SendCloudLanguageTemplate(BaseModel):
    model_config = _STRICT

    language_tag: str
    template_id: str


class SendCloudTemplateAssignment(BaseModel):
    """Maps one message template name to SendCloud template ids."""

    model_config = _STRICT

    template_name: str
    default_template_id: str
    by_languages: tuple[SendCloudLanguageTemplate, ...] = ()

    def template_id_for(self, language_tag: str | None) -> str:
        if language_tag:
            for entry in self.by_languages:
                if entry.language_tag == language_tag:
                    return entry.template_id
        return self.default_template_id


class SendCloudConfig(BaseModel):
    model_config = _STRICT

    sms_user: str
    sms_key: str
    base_url: str = DEFAULT_SENDCLOUD_BASE_URL
    templates: tuple[SendCloudTemplate, ...] = Field(min_length=1)
    template_assignments: tuple[SendCloudTemplateAssignment, ...] = ()

    def find_template(self, template_id: str) -> SendCloudTemplate | None:
        for template in self.templates:
            if template.template_id == template_id:
                return template
        return None

    def resolve_template(self, template_name: str, language_tag: str | None) -> SendCloudTemplate | None:
        """Return the catalog template for a message template and language.

        A per-language override wins over the assignment's default.
        Returns None when no assignment exists for ``template_name``.
        """
        for assignment in self.template_assignments:
            if assignment.template_name == template_name:
                return self.find_template(assignment.template_id_for(language_tag))
        return None


# ── Provider definitions (tagged on ``type``) ─────────────────────────


class TwilioProvider(BaseModel):
    model_config = _STRICT

    name: str = Field(min_length=1)
    type: Literal["twilio"]
    twilio: TwilioConfig


class NexmoProvider(BaseModel):
    model_config = _STRICT

    name: str = Field(min_length=1)
    type: Literal["nexmo"]
    nexmo: NexmoConfig


class AccessYouProvider(BaseModel):
    model_config = _STRICT

    name: str = Field(min_length=1)
    type: Literal["accessyou"]
    accessyou: AccessYouConfig


class SendCloudProvider(BaseModel):
    model_config = _STRICT

    name: str = Field(min_length=1)
    type: Literal["sendcloud"]
    sendcloud: SendCloudConfig


ProviderDefinition = Annotated[
    Union[TwilioProvider, NexmoProvider, AccessYouProvider, SendCloudProvider],
    Field(discriminator="type"),
]


# ── Routing rules (tagged on ``kind``) ────────────────────────────────


class MatchCountryRule(BaseModel):
    model_config = _STRICT

    kind: Literal["match_country"]
    use_provider: str
    country_code: str

    def matches(self, ctx: MatchContext) -> bool:
        return ctx.country_code == self.country_code


class MatchAppAndCountryRule(BaseModel):
    model_config = _STRICT

    kind: Literal["match_app_and_country"]
    use_provider: str
    app_id: str
    country_code: str

    def matches(self, ctx: MatchContext) -> bool:
        return ctx.app_id == self.app_id and ctx.country_code == self.country_code


class DefaultRule(BaseModel):
    """Fallback rule. Never matches on its own."""

    model_config = _STRICT

    kind: Literal["default"]
    use_provider: str


RoutingRule = Annotated[
    Union[MatchCountryRule, MatchAppAndCountryRule, DefaultRule],
    Field(discriminator="kind"),
]


class RoutingConfig(BaseModel):
    model_config = _STRICT

    providers: tuple[ProviderDefinition, ...] = Field(min_length=1)
    rules: tuple[RoutingRule, ...] = Field(min_length=1)

    @property
    def provider_names(self) -> list[str]:
        return [provider.name for provider in self.providers]


# ── Validation ────────────────────────────────────────────────────────


def validate_config(raw: Any) -> RoutingConfig:
    """Validate a decoded configuration document.

    Raises:
        SchemaError: the document does not have the RoutingConfig shape.
        ValidationError: the document references things it does not define.
    """
    try:
        config = RoutingConfig.model_validate(raw)
    except pydantic.ValidationError as exc:
        issues = [
            ConfigIssue(path=_pointer(err["loc"], raw), message=err["msg"])
            for err in exc.errors(include_url=False)
        ]
        raise SchemaError(issues) from exc

    issues = [
        *_check_unique_provider_names(config),
        *_check_use_provider(config),
        *_check_default_rule(config),
        *_check_sendcloud_templates(config),
    ]
    if issues:
        raise ValidationError(issues)
    return config


def parse_config_yaml(data: str | bytes) -> RoutingConfig:
    try:
        raw = yaml.safe_load(data)
    except yaml.YAMLError as exc:
        raise SchemaError([ConfigIssue(path="/", message=f"malformed YAML: {exc}")]) from exc
    return validate_config(raw)


def load_config(path: str | Path) -> RoutingConfig:
    """Read, parse and validate a provider configuration file."""
    path = Path(path)
    config = parse_config_yaml(path.read_text(encoding="utf-8"))
    logger.info(
        "Loaded SMS provider config from %s: %d providers, %d rules",
        path,
        len(config.providers),
        len(config.rules),
    )
    return config


def _check_unique_provider_names(config: RoutingConfig) -> list[ConfigIssue]:
    issues = []
    seen: set[str] = set()
    for i, provider in enumerate(config.providers):
        if provider.name in seen:
            issues.append(ConfigIssue(f"/providers/{i}/name", f"duplicate provider name {provider.name}"))
        seen.add(provider.name)
    return issues


def _check_use_provider(config: RoutingConfig) -> list[ConfigIssue]:
    names = set(config.provider_names)
    return [
        ConfigIssue(f"/rules/{i}/use_provider", f"provider {rule.use_provider} not found")
        for i, rule in enumerate(config.rules)
        if rule.use_provider not in names
    ]


def _check_default_rule(config: RoutingConfig) -> list[ConfigIssue]:
    if any(isinstance(rule, DefaultRule) for rule in config.rules):
        return []
    return [ConfigIssue("/rules", "default rule not found")]


def _check_sendcloud_templates(config: RoutingConfig) -> list[ConfigIssue]:
    issues = []
    for i, provider in enumerate(config.providers):
        if not isinstance(provider, SendCloudProvider):
            continue
        sendcloud = provider.sendcloud
        known = {template.template_id for template in sendcloud.templates}
        base = f"/providers/{i}/sendcloud/template_assignments"
        for j, assignment in enumerate(sendcloud.template_assignments):
            if assignment.default_template_id not in known:
                issues.append(
                    ConfigIssue(
                        f"{base}/{j}/default_template_id",
                        f"template_id {assignment.default_template_id} not found",
                    )
                )
            for k, by_language in enumerate(assignment.by_languages):
                if by_language.template_id not in known:
                    issues.append(
                        ConfigIssue(
                            f"{base}/{j}/by_languages/{k}/template_id",
                            f"template_id {by_language.template_id} not found",
                        )
                    )
    return issues


def _pointer(loc: tuple[int | str, ...], raw: Any) -> str:
    """Turn a pydantic error location into a JSON pointer into ``raw``.

    Tagged unions insert the tag value right after the list index, e.g.
    ``("providers", 0, "twilio", "twilio", "sender")``. Tag segments and
    other segments that do not exist in the document are dropped, except
    the last one, which names the missing or offending field.
    """
    parts: list[str] = []
    node = raw
    last = len(loc) - 1
    after_index = False
    for i, segment in enumerate(loc):
        if after_index and i != last and isinstance(node, dict) and segment in (node.get("type"), node.get("kind")):
            after_index = False
            continue
        after_index = False
        if isinstance(segment, int) and isinstance(node, (list, tuple)) and 0 <= segment < len(node):
            node = node[segment]
            after_index = True
        elif isinstance(node, dict) and segment in node:
            node = node[segment]
        elif i != last:
            continue
        parts.append(str(segment))
    return "/" + "/".join(parts)
