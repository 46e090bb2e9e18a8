"""Event time resolution.

Callers send event_time in whatever shape their tool produces: ISO strings
from Apps Script, epoch numbers from automation platforms, RFC 2822 dates
from mail-driven flows. Anything unusable falls back to "now".
"""

from __future__ import annotations

import math
import time
from collections.abc import Callable
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime
from typing import Any

# Epoch values at or above this are milliseconds
MILLIS_THRESHOLD = 10**12


def resolve_event_time(value: Any, clock: Callable[[], float] = time.time) -> int:
    """
    Resolve an optional event_time input to Unix seconds.

    Args:
        value: datetime, epoch seconds/milliseconds (number or numeric
            string), ISO 8601 string or RFC 2822 string. May be absent.
        clock: Source of the current time, in seconds.

    Returns:
        Unix timestamp in whole seconds. Parse failures are silent and
        return the current time.
    """
    parsed = _parse_timestamp(value)
    if parsed is None:
        return math.floor(clock())
    return parsed


def _parse_timestamp(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        return _datetime_to_seconds(value)

    if isinstance(value, (int, float)):
        return _epoch_to_seconds(value)

    text = str(value).strip()
    if not text:
        return None

    try:
        return _epoch_to_seconds(float(text))
    except ValueError:
        pass

    try:
        return _datetime_to_seconds(datetime.fromisoformat(text.replace("Z", "+00:00")))
    except ValueError:
        pass

    try:
        return _datetime_to_seconds(parsedate_to_datetime(text))
    except (TypeError, ValueError, IndexError):
        return None


def _epoch_to_seconds(number: float) -> int | None:
    try:
        if not math.isfinite(number):
            return None
        if abs(number) >= MILLIS_THRESHOLD:
            number = number / 1000
        # Out-of-range epochs are not dates
        datetime.fromtimestamp(number, UTC)
    except (OverflowError, OSError, ValueError):
        return None
    return math.floor(number)


def _datetime_to_seconds(dt: datetime) -> int | None:
    # Naive values are taken as UTC
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    try:
        return math.floor(dt.timestamp())
    except (OverflowError, OSError, ValueError):
        return None
