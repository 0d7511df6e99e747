"""Error taxonomy for the SMS gateway."""

from __future__ import annotations

from dataclasses import dataclass

from .response import ErrorCode


class GatewayError(Exception):
    """Base class for every error raised by the gateway."""

    code: ErrorCode = ErrorCode.UNKNOWN_ERROR

    @property
    def description(self) -> str:
        return str(self)


# ── Configuration ─────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class ConfigIssue:
    """One problem found in a configuration document."""

    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


class ConfigError(GatewayError):
    """The routing configuration is malformed. Raised only at load time."""

    def __init__(self, issues: list[ConfigIssue], message: str = "invalid configuration") -> None:
        self.issues = list(issues)
        self.message = message
        super().__init__(self._render())

    def _render(self) -> str:
        lines = [self.message + ":"]
        lines.extend(str(issue) for issue in self.issues)
        return "\n".join(lines)

    @property
    def paths(self) -> list[str]:
        return [issue.path for issue in self.issues]


class SchemaError(ConfigError):
    """Structural problem: missing or unknown field, wrong type, bad enum value."""


class ValidationError(ConfigError):
    """Cross-reference problem in an otherwise well-formed configuration."""


# ── Runtime ───────────────────────────────────────────────────────────


class InvalidDestinationError(GatewayError):
    """The destination phone number cannot be parsed or normalized."""

    code = ErrorCode.INVALID_REQUEST

    def __init__(self, phone_number: str, reason: str) -> None:
        self.phone_number = phone_number
        self.reason = reason
        super().__init__(f"invalid destination phone number: {reason}")


class IntegrityViolation(GatewayError):
    """A routing invariant broke at runtime even though the config validated.

    This is a defect, not a request condition.
    """


class UnknownProviderError(IntegrityViolation):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"provider {name!r} is not registered")


class SMSClientError(GatewayError):
    """Raised by a vendor client when the send could not be completed."""

    def __init__(self, message: str, *, raw_response: str | None = None) -> None:
        self.raw_response = raw_response
        super().__init__(message)


class VendorSendError(GatewayError):
    """The selected provider failed to accept the message."""

    def __init__(self, provider_name: str, message: str, *, raw_response: str | None = None) -> None:
        self.provider_name = provider_name
        self.raw_response = raw_response
        super().__init__(f"send via {provider_name} failed: {message}")
