"""Provider selection: turn a match context into a provider name."""

from __future__ import annotations

from collections.abc import Iterable

from .config import DefaultRule, RoutingRule
from .errors import IntegrityViolation
from .types import MatchContext


def select_provider(rules: Iterable[RoutingRule], ctx: MatchContext) -> str:
    """Return the provider name chosen by ``rules`` for ``ctx``.

    Rules are scanned in order and the first matching non-default rule
    wins. A default rule does not stop the scan; it is remembered and
    used only when nothing else matches. With several default rules the
    last one in the list is the fallback.

    Matching is exact and case-sensitive.

    Raises:
        IntegrityViolation: no rule matched and there is no default rule.
            Validated configurations always have one.
    """
    fallback: str | None = None
    for rule in rules:
        if isinstance(rule, DefaultRule):
            fallback = rule.use_provider
            continue
        if rule.matches(ctx):
            return rule.use_provider

    if fallback is None:
        raise IntegrityViolation(
            f"cannot select provider for app_id={ctx.app_id!r} country_code={ctx.country_code!r}: "
            "no rule matched and no default rule is configured"
        )
    return fallback
