"""Phone number normalization backed by libphonenumber.

Routing only needs the destination's ISO 3166-1 alpha-2 region. Vendors
receive the E.164 form so that every client sees the same input
regardless of how the caller formatted the number.
"""

from __future__ import annotations

from dataclasses import dataclass

import phonenumbers

from smsgateway.errors import InvalidDestinationError


@dataclass(frozen=True, slots=True)
class ParsedPhoneNumber:
    e164: str
    alpha2: str


def parse_phone_number(raw: str | None, default_region: str | None = None) -> ParsedPhoneNumber:
    """Parse a destination number and derive its country.

    Args:
        raw: Phone number as supplied by the caller, ideally ``+E.164``.
        default_region: Region used for numbers without a leading ``+``.
            When None, such numbers are rejected.

    Raises:
        InvalidDestinationError: the number cannot be parsed, is not a valid
            number, or has no single owning region.
    """
    if not raw or not raw.strip():
        raise InvalidDestinationError(raw or "", "phone number is empty")

    try:
        number = phonenumbers.parse(raw.strip(), default_region)
    except phonenumbers.NumberParseException as exc:
        raise InvalidDestinationError(raw, str(exc)) from exc

    if not phonenumbers.is_valid_number(number):
        raise InvalidDestinationError(raw, "phone number is not valid")

    alpha2 = phonenumbers.region_code_for_number(number)
    # "001" is returned for non-geographic numbers (e.g. +800)
    if not alpha2 or alpha2 == "001":
        raise InvalidDestinationError(raw, "phone number has no country")

    return ParsedPhoneNumber(
        e164=phonenumbers.format_number(number, phonenumbers.PhoneNumberFormat.E164),
        alpha2=alpha2,
    )


def mask_phone_number(phone: str | None) -> str:
    """Hide the middle digits of a phone number for log output.

    >>> mask_phone_number("+85251234567")
    '+852******67'
    """
    if not phone:
        return ""
    if len(phone) <= 6:
        return "*" * len(phone)
    return phone[:4] + "*" * (len(phone) - 6) + phone[-2:]
