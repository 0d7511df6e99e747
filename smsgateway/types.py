"""Core types for the SMS gateway."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True, slots=True)
class SMSMessage:
    """An SMS to deliver.

    Text vendors send ``body``. Template vendors (SendCloud) resolve
    ``template_name`` and ``language_tag`` against their own catalog and
    fill the template with ``template_variables``.
    """

    to: str
    body: str | None = None
    template_name: str | None = None
    language_tag: str | None = None
    template_variables: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        # Read-only copy; the caller's dict stays independent of the message.
        object.__setattr__(self, "template_variables", MappingProxyType(dict(self.template_variables)))


@dataclass(frozen=True, slots=True)
class MatchContext:
    """Per-request facts evaluated against routing rules."""

    app_id: str
    country_code: str  # ISO 3166-1 alpha-2, e.g. "HK"


@dataclass(frozen=True, slots=True)
class SendResult:
    """Normalized outcome of one vendor send."""

    success: bool
    raw_response: str
    provider_name: str = ""
    segment_count: int | None = None
