"""Sentinel-aware cleaning of optional attribution fields."""

from __future__ import annotations

from typing import Any

from pixelrelay.conversions.schema import ATTRIBUTION_FIELDS, RawLead

# Placeholder written by spreadsheet tooling for "no value"
SENTINEL = "n/a"


def clean_optional_field(value: Any) -> str | None:
    """
    Normalize an optional attribution value.

    Args:
        value: Raw value from the payload (any type, possibly absent).

    Returns:
        The trimmed string, or None when the value is absent, blank,
        or the "N/A" sentinel (case-insensitive).

    Examples:
        >>> clean_optional_field("  fb.1.123.abc ")
        'fb.1.123.abc'
        >>> clean_optional_field("n/a") is None
        True
    """
    if value is None:
        return None
    cleaned = str(value).strip()
    if not cleaned or cleaned.lower() == SENTINEL:
        return None
    return cleaned


def sanitize_attribution_fields(lead: RawLead) -> dict[str, str | None]:
    """Apply clean_optional_field to every optional attribution field."""
    return {name: clean_optional_field(getattr(lead, name)) for name in ATTRIBUTION_FIELDS}
