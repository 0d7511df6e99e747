"""Phone number parsing and masking."""

from .normalize import ParsedPhoneNumber, mask_phone_number, parse_phone_number

__all__ = [
    "ParsedPhoneNumber",
    "mask_phone_number",
    "parse_phone_number",
]
