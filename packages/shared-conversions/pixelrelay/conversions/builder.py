"""
Request builder - assembles the outbound ConversionEvent.

Combines the outputs of the earlier stages (identity, attribution, event
time) with the parsed purchase amount.
"""

from __future__ import annotations

import math
from typing import Any

from pixelrelay.conversions.schema import (
    AttributionContext,
    ConversionEvent,
    NormalizedIdentity,
)


class InvalidAmountError(ValueError):
    """Raised when the purchase amount is not a finite number."""

    pass


def parse_amount(value: Any) -> float:
    """Parse a purchase amount.

    Args:
        value: Number or numeric string.

    Returns:
        The amount as float.

    Raises:
        InvalidAmountError: If the amount is not numeric, NaN or infinite.
    """
    if isinstance(value, bool):
        raise InvalidAmountError(f"Invalid amount: {value!r}")

    try:
        amount = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError) as e:
        raise InvalidAmountError(f"Invalid amount: {value!r}") from e

    if not math.isfinite(amount):
        raise InvalidAmountError(f"Invalid amount: {value!r}")
    return amount


def build_conversion_event(
    identity: NormalizedIdentity,
    attribution: AttributionContext,
    event_time: int,
    amount: Any,
    test_event_code: str | None = None,
) -> ConversionEvent:
    """
    Build the Purchase event for Meta.

    fbp/fbc are added to user_data only when set; Meta's schema expects
    the keys to be absent rather than null.

    Args:
        identity: Hashed identity.
        attribution: Attribution mode and dedup key.
        event_time: Unix seconds.
        amount: Raw amount, parsed with parse_amount.
        test_event_code: Sanitized test code, attached when present.

    Returns:
        ConversionEvent ready for submission.

    Raises:
        InvalidAmountError: If the amount cannot be parsed.
    """
    user_data: dict[str, Any] = identity.to_user_data()
    if attribution.fbp:
        user_data["fbp"] = attribution.fbp
    if attribution.fbc:
        user_data["fbc"] = attribution.fbc

    return ConversionEvent(
        event_time=event_time,
        event_id=attribution.dedup_key,
        user_data=user_data,
        value=parse_amount(amount),
        test_event_code=test_event_code or None,
        mode=attribution.mode,
    )
