"""Configuration for the Meta Conversions API relay."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

GRAPH_API_BASE_URL = "https://graph.facebook.com"
DEFAULT_GRAPH_API_VERSION = "v19.0"
DEFAULT_REQUEST_TIMEOUT = 10.0  # seconds
DEFAULT_WHATSAPP_GREETING = "Hola! Quiero mi usuario"


@dataclass(frozen=True)
class RelayConfig:
    """Process-wide relay configuration.

    Built once at startup and injected into the pipeline and the HTTP app.
    Read-only afterwards.

    Attributes:
        pixel_id: Meta pixel (dataset) identifier.
        access_token: Conversions API access token.
        admin_token: Bearer token callers must present.
        graph_api_version: Graph API version segment of the events URL.
        request_timeout: Read timeout for the outbound POST, in seconds.
        whatsapp_fallback_phone: Destination when the redirect gets no phone.
        whatsapp_greeting: Prefilled WhatsApp message.
    """

    # Secrets (repr=False to prevent credential exposure in logs)
    pixel_id: str | None = None
    access_token: str | None = field(default=None, repr=False)
    admin_token: str | None = field(default=None, repr=False)

    graph_api_version: str = DEFAULT_GRAPH_API_VERSION
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    whatsapp_fallback_phone: str | None = None
    whatsapp_greeting: str = DEFAULT_WHATSAPP_GREETING

    @classmethod
    def from_env(cls) -> RelayConfig:
        """Create configuration from environment variables.

        Environment variables:
            META_PIXEL_ID: Meta pixel identifier
            META_ACCESS_TOKEN: Conversions API access token
            ADMIN_TOKEN: Bearer token for inbound requests
            META_GRAPH_API_VERSION: Graph API version (default: v19.0)
            META_REQUEST_TIMEOUT: Outbound timeout in seconds (default: 10)
            WHATSAPP_FALLBACK_PHONE: Redirect fallback destination
            WHATSAPP_GREETING: Redirect message

        Missing credentials are not an error here; they are reported per
        request so the process can still serve health checks.

        Raises:
            ValueError: If META_REQUEST_TIMEOUT is not a positive number.
        """
        timeout_raw = os.environ.get("META_REQUEST_TIMEOUT")
        if timeout_raw:
            try:
                request_timeout = float(timeout_raw)
            except ValueError as e:
                raise ValueError(
                    f"META_REQUEST_TIMEOUT must be a number, got {timeout_raw!r}"
                ) from e
            if request_timeout <= 0:
                raise ValueError("META_REQUEST_TIMEOUT must be positive")
        else:
            request_timeout = DEFAULT_REQUEST_TIMEOUT

        return cls(
            pixel_id=os.environ.get("META_PIXEL_ID") or None,
            access_token=os.environ.get("META_ACCESS_TOKEN") or None,
            admin_token=os.environ.get("ADMIN_TOKEN") or None,
            graph_api_version=os.environ.get("META_GRAPH_API_VERSION") or DEFAULT_GRAPH_API_VERSION,
            request_timeout=request_timeout,
            whatsapp_fallback_phone=os.environ.get("WHATSAPP_FALLBACK_PHONE") or None,
            whatsapp_greeting=os.environ.get("WHATSAPP_GREETING") or DEFAULT_WHATSAPP_GREETING,
        )

    @property
    def is_submission_configured(self) -> bool:
        """Return True when pixel id and access token are both set."""
        return bool(self.pixel_id and self.access_token)

    @property
    def events_url(self) -> str:
        """Return the Graph API events endpoint for the configured pixel."""
        return f"{GRAPH_API_BASE_URL}/{self.graph_api_version}/{self.pixel_id}/events"
