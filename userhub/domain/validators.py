"""Pure validators/normalizers for raw user fields."""
from __future__ import annotations

import re
from typing import Any, Iterable, Mapping, Optional

UUID_V4_PATTERN = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}",
    re.IGNORECASE,
)
PAN_PATTERN = re.compile(r"[A-Z]{5}[0-9]{4}[A-Z]")
MOBILE_PATTERN = re.compile(r"[6-9][0-9]{9}")
_NON_DIGITS = re.compile(r"[^0-9]")

COUNTRY_PREFIX = "91"


def ensure_present_keys(obj: Optional[Mapping[str, Any]], keys: Iterable[str]) -> list[str]:
    """Return the keys from ``keys`` that are missing in ``obj`` (empty list when all present)."""
    present = obj if obj is not None else {}
    return [key for key in keys if key not in present]


def normalize_mobile(raw: Any) -> Optional[str]:
    """
    Normalize an Indian mobile number to its 10 digit form.

    Separators, spaces and the ``+91`` / ``0`` prefixes are accepted; the result
    must start with 6, 7, 8 or 9. Returns None when the value cannot be a mobile.
    """
    if raw is None:
        return None
    digits = _NON_DIGITS.sub("", str(raw))
    if digits.startswith(COUNTRY_PREFIX) and len(digits) > 10:
        digits = digits[-10:]
    if len(digits) == 11 and digits.startswith("0"):
        digits = digits[1:]
    if not MOBILE_PATTERN.fullmatch(digits):
        return None
    return digits


def validate_pan(raw: Any) -> Optional[str]:
    """Return the upper-cased PAN (ABCDE1234F) or None."""
    if not isinstance(raw, str):
        return None
    value = raw.upper().strip()
    return value if PAN_PATTERN.fullmatch(value) else None


def is_uuid_v4(raw: Any) -> bool:
    if not isinstance(raw, str):
        return False
    return bool(UUID_V4_PATTERN.fullmatch(raw))


def validate_full_name(raw: Any) -> Optional[str]:
    if not isinstance(raw, str):
        return None
    value = raw.strip()
    return value or None
