"""
Purchase event schema - the data model flowing through the relay pipeline.

Records move through three shapes:
- RawLead: the untyped payload as received from spreadsheet automation,
  marketing-automation tools or ad-click redirects
- NormalizedIdentity / AttributionContext: derived values, immutable
- ConversionEvent: the outbound Meta Conversions API event

Nothing here performs I/O; ConversionEvent objects are built once per
request and discarded after submission.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

EVENT_NAME = "Purchase"
CURRENCY = "ARS"
ACTION_SOURCE = "system_generated"

# Optional attribution fields that go through the sentinel sanitizer
ATTRIBUTION_FIELDS = ("event_id", "fbp", "fbc", "click_id", "test_event_code")

# Fields that must be present before any hashing or network call
REQUIRED_FIELDS = ("nombre", "phone", "amount")


class AttributionMode(str, Enum):
    """How a purchase is attributed to advertising."""

    AD_CLICK = "ad_click"  # Browser/click identifiers available
    OFFLINE = "offline"  # No click signal to merge against


@dataclass
class RawLead:
    """
    Untyped lead/purchase record.

    Field names follow the payloads sent by the spreadsheet and automation
    callers (Spanish names for the person, English for the rest). No field
    is trusted to be well-formed.

    Example:
        lead = RawLead.from_dict({
            "nombre": "Ana",
            "phone": "011 2345-6789",
            "amount": "500",
            "fbc": "fb.1.1700000000.abc",
        })
    """

    nombre: Any = None
    apellido: Any = None
    phone: Any = None
    amount: Any = None

    event_time: Any = None
    event_id: Any = None
    fbp: Any = None
    fbc: Any = None
    click_id: Any = None
    test_event_code: Any = None

    # Anything else the caller sent
    raw_data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RawLead:
        """Create a RawLead from an inbound payload.

        Args:
            data: Decoded request body.

        Returns:
            RawLead instance. Unknown keys are preserved in raw_data.
        """
        known = {
            "nombre",
            "apellido",
            "phone",
            "amount",
            "event_time",
            *ATTRIBUTION_FIELDS,
        }
        return cls(
            nombre=data.get("nombre"),
            apellido=data.get("apellido"),
            phone=data.get("phone"),
            amount=data.get("amount"),
            event_time=data.get("event_time"),
            event_id=data.get("event_id"),
            fbp=data.get("fbp"),
            fbc=data.get("fbc"),
            click_id=data.get("click_id"),
            test_event_code=data.get("test_event_code"),
            raw_data={k: v for k, v in data.items() if k not in known},
        )

    def missing_required_fields(self) -> list[str]:
        """Return required fields that are absent or blank."""
        missing = []
        for name in REQUIRED_FIELDS:
            value = getattr(self, name)
            if value is None:
                missing.append(name)
            elif isinstance(value, str) and not value.strip():
                missing.append(name)
        return missing


@dataclass(frozen=True)
class NormalizedIdentity:
    """Hashed identity sent as Meta user_data.

    Every digest is lowercase hex SHA-256 computed after normalization;
    Meta compares hashes, so the inputs must be normalized identically
    on every call.
    """

    canonical_phone: str
    hashed_phone: str
    hashed_first_name: str
    hashed_last_name: str

    def to_user_data(self) -> dict[str, list[str]]:
        """Return the ph/fn/ln arrays in Meta's user_data layout."""
        return {
            "ph": [self.hashed_phone],
            "fn": [self.hashed_first_name],
            "ln": [self.hashed_last_name],
        }


@dataclass(frozen=True)
class AttributionContext:
    """Attribution mode and deduplication key for one event.

    fbp/fbc are passed through verbatim (never hashed) and are only set
    in AD_CLICK mode.
    """

    mode: AttributionMode
    dedup_key: str
    fbp: str | None = None
    fbc: str | None = None
    click_id: str | None = None


@dataclass
class ConversionEvent:
    """Outbound Purchase event for the Meta Conversions API."""

    event_time: int
    event_id: str
    user_data: dict[str, Any]
    value: float
    event_name: str = EVENT_NAME
    currency: str = CURRENCY
    action_source: str = ACTION_SOURCE
    test_event_code: str | None = None
    mode: AttributionMode = AttributionMode.OFFLINE

    @property
    def custom_data(self) -> dict[str, Any]:
        return {"currency": self.currency, "value": self.value}

    def to_dict(self) -> dict[str, Any]:
        """Convert to the single event object inside the envelope's data array."""
        return {
            "event_name": self.event_name,
            "event_time": self.event_time,
            "event_id": self.event_id,
            "user_data": dict(self.user_data),
            "custom_data": self.custom_data,
            "action_source": self.action_source,
        }

    def to_payload(self) -> dict[str, Any]:
        """Convert to the full request body posted to /events."""
        payload: dict[str, Any] = {"data": [self.to_dict()]}
        if self.test_event_code:
            payload["test_event_code"] = self.test_event_code
        return payload
