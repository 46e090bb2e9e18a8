"""Argentine phone canonicalization.

The canonical form is digits only with the 549 country/mobile prefix,
e.g. "011 2345-6789" -> "5491123456789". It is the input to the phone
hash, so it must be stable across calls.
"""

from __future__ import annotations

import re
from typing import Any

COUNTRY_CODE = "54"
MOBILE_PREFIX = "549"
TRUNK_PREFIX = "0"

_NON_DIGITS = re.compile(r"\D")


def normalize_argentine_phone(raw: Any) -> str:
    """
    Convert a raw phone value to canonical Argentine mobile form.

    Best effort: inputs that match none of the known shapes come back as
    their digits, which may not be a valid number. Never raises.

    Args:
        raw: Phone as typed by a person or exported by a spreadsheet.

    Returns:
        Canonical digits-only phone string.
    """
    if raw is None:
        return ""

    digits = _NON_DIGITS.sub("", str(raw))

    if digits.startswith(MOBILE_PREFIX):
        return digits

    # Country code without the mobile 9
    if digits.startswith(COUNTRY_CODE) and len(digits) >= 12:
        return MOBILE_PREFIX + digits[len(COUNTRY_CODE):]

    if digits.startswith(TRUNK_PREFIX):
        digits = digits[len(TRUNK_PREFIX):]

    # Area code + subscriber number
    if len(digits) == 10:
        return MOBILE_PREFIX + digits

    return digits
