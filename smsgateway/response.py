"""Response envelope for a transport layer sitting in front of the gateway."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .types import SendResult


class ErrorCode(str, Enum):
    """Outcome classification returned to callers."""

    OK = "ok"
    INVALID_REQUEST = "invalid_request"
    UNKNOWN_ERROR = "unknown_error"

    @property
    def http_status(self) -> int:
        return _HTTP_STATUS[self]


_HTTP_STATUS: dict[ErrorCode, int] = {
    ErrorCode.OK: 200,
    ErrorCode.INVALID_REQUEST: 400,
    ErrorCode.UNKNOWN_ERROR: 500,
}


@dataclass(frozen=True, slots=True)
class ResponseBody:
    code: ErrorCode
    error_description: str | None = None
    underlying_http_response_body: str | None = None
    segment_count: int | None = None

    @classmethod
    def from_result(cls, result: SendResult) -> ResponseBody:
        """Build the envelope for a send the vendor answered.

        A vendor rejection (``success=False``) is still reported as
        ``unknown_error`` so the caller sees a non-2xx status.
        """
        if result.success:
            return cls(
                code=ErrorCode.OK,
                underlying_http_response_body=result.raw_response,
                segment_count=result.segment_count,
            )
        return cls(
            code=ErrorCode.UNKNOWN_ERROR,
            error_description=f"{result.provider_name} rejected the message",
            underlying_http_response_body=result.raw_response,
        )

    @classmethod
    def from_error(cls, exc: Exception) -> ResponseBody:
        code = getattr(exc, "code", ErrorCode.UNKNOWN_ERROR)
        return cls(
            code=code,
            error_description=str(exc),
            underlying_http_response_body=getattr(exc, "raw_response", None),
        )

    @property
    def http_status(self) -> int:
        return self.code.http_status

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"code": self.code.value}
        if self.error_description:
            data["error_description"] = self.error_description
        if self.underlying_http_response_body:
            data["underlying_http_response_body"] = self.underlying_http_response_body
        if self.segment_count is not None:
            data["segment_count"] = self.segment_count
        return data
