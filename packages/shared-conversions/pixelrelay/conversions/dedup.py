"""
Event identity resolution - attribution mode and deduplication key.

Ad-click purchases reuse an externally supplied identifier so Meta can
merge the click-time and purchase-time signals for the same occurrence.
Offline purchases have no such signal and always get a fresh key, even
when the caller sent an event_id.
"""

from __future__ import annotations

import random
import time
from collections.abc import Callable, Mapping

from pixelrelay.conversions.schema import AttributionContext, AttributionMode

CLICK_SIGNAL_FIELDS = ("fbp", "fbc", "click_id")

OFFLINE_SUFFIX_MAX = 9999


def resolve_attribution(
    fields: Mapping[str, str | None],
    hashed_phone: str,
    clock: Callable[[], float] = time.time,
    rng: random.Random | None = None,
) -> AttributionContext:
    """
    Decide the attribution mode and dedup key for an event.

    Args:
        fields: Sanitized attribution fields (event_id, fbp, fbc, click_id).
        hashed_phone: Hex digest of the canonical phone.
        clock: Source of the current time, in seconds.
        rng: Random source for offline key suffixes.

    Returns:
        AttributionContext. In AD_CLICK mode the key is the first of
        event_id, click_id, or a generated purchase_<ms>_<hash5> key.
        In OFFLINE mode it is purchase_offline_<ms>_<0..9999>.
    """
    now_ms = int(clock() * 1000)

    if any(fields.get(name) for name in CLICK_SIGNAL_FIELDS):
        dedup_key = (
            fields.get("event_id")
            or fields.get("click_id")
            or f"purchase_{now_ms}_{hashed_phone[:5]}"
        )
        return AttributionContext(
            mode=AttributionMode.AD_CLICK,
            dedup_key=dedup_key,
            fbp=fields.get("fbp"),
            fbc=fields.get("fbc"),
            click_id=fields.get("click_id"),
        )

    suffix = (rng or random).randint(0, OFFLINE_SUFFIX_MAX)
    return AttributionContext(
        mode=AttributionMode.OFFLINE,
        dedup_key=f"purchase_offline_{now_ms}_{suffix}",
    )
