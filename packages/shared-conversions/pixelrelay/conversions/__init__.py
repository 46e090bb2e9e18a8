"""
PixelRelay Conversions - purchase event normalization and deduplication.

Provides:
- Purchase event schema (raw lead, hashed identity, outbound event)
- Sentinel-aware field sanitizer
- Argentine phone canonicalization and SHA-256 identity hashing
- Event time and event identity (dedup key) resolution
- Request builder for the Meta Conversions API

Every stage is pure; submission lives in pixelrelay.connectors.

Usage:
    from pixelrelay.conversions import (
        RawLead,
        build_conversion_event,
        hash_identity,
        resolve_attribution,
        resolve_event_time,
        sanitize_attribution_fields,
    )

    lead = RawLead.from_dict(payload)
    fields = sanitize_attribution_fields(lead)
    identity = hash_identity(lead.phone, lead.nombre, lead.apellido)
    attribution = resolve_attribution(fields, identity.hashed_phone)
    event = build_conversion_event(
        identity,
        attribution,
        resolve_event_time(lead.event_time),
        lead.amount,
        fields["test_event_code"],
    )
"""

from pixelrelay.conversions.builder import (
    InvalidAmountError,
    build_conversion_event,
    parse_amount,
)
from pixelrelay.conversions.dedup import resolve_attribution
from pixelrelay.conversions.hashing import hash_identity, normalize_name, sha256_hex
from pixelrelay.conversions.phone import normalize_argentine_phone
from pixelrelay.conversions.sanitizer import (
    clean_optional_field,
    sanitize_attribution_fields,
)
from pixelrelay.conversions.schema import (
    AttributionContext,
    AttributionMode,
    ConversionEvent,
    NormalizedIdentity,
    RawLead,
)
from pixelrelay.conversions.timing import resolve_event_time

__all__ = [
    # Schema
    "RawLead",
    "NormalizedIdentity",
    "AttributionMode",
    "AttributionContext",
    "ConversionEvent",
    # Stages
    "clean_optional_field",
    "sanitize_attribution_fields",
    "normalize_argentine_phone",
    "sha256_hex",
    "normalize_name",
    "hash_identity",
    "resolve_event_time",
    "resolve_attribution",
    "parse_amount",
    "build_conversion_event",
    "InvalidAmountError",
]
