"""SHA-256 identity hashing per the Meta customer-information rules."""

from __future__ import annotations

import hashlib
from typing import Any

from pixelrelay.conversions.phone import normalize_argentine_phone
from pixelrelay.conversions.schema import NormalizedIdentity


def sha256_hex(value: str) -> str:
    """Return the lowercase hex SHA-256 digest of a UTF-8 string."""
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


def normalize_name(value: Any) -> str:
    """Trim and lowercase a name. Missing names normalize to ""."""
    if value is None:
        return ""
    return str(value).strip().lower()


def hash_identity(phone: Any, first_name: Any, last_name: Any = None) -> NormalizedIdentity:
    """
    Normalize and hash the identity fields of a lead.

    Missing names hash the empty string rather than being dropped, so the
    ph/fn/ln slots are always populated.

    Args:
        phone: Raw phone value.
        first_name: Raw first name ("nombre").
        last_name: Raw last name ("apellido"), optional.

    Returns:
        NormalizedIdentity with the canonical phone and three digests.
    """
    canonical_phone = normalize_argentine_phone(phone)
    return NormalizedIdentity(
        canonical_phone=canonical_phone,
        hashed_phone=sha256_hex(canonical_phone),
        hashed_first_name=sha256_hex(normalize_name(first_name)),
        hashed_last_name=sha256_hex(normalize_name(last_name)),
    )
