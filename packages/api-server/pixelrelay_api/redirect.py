"""WhatsApp click-to-chat redirect helper.

Ads link to /api/ir with the destination phone and UTM tags; the UTM
values are appended to the prefilled message so the chat (and the sheet
fed from it) carries the campaign reference.
"""

from __future__ import annotations

from urllib.parse import quote

WHATSAPP_BASE_URL = "https://wa.me"
MISSING_REFERENCE = "N/A"

# Characters encodeURIComponent leaves as-is, beyond quote's defaults
URI_COMPONENT_SAFE = "!'()*~"


def build_whatsapp_message(
    greeting: str,
    utm_campaign: str | None = None,
    utm_content: str | None = None,
) -> str:
    """Return the prefilled message, with a campaign reference when tagged.

    Examples:
        >>> build_whatsapp_message("Hola!", "PROSPECTING", "VideoKun")
        'Hola! (Ref: PROSPECTING | VideoKun)'
    """
    if not (utm_campaign or utm_content):
        return greeting
    campaign = utm_campaign or MISSING_REFERENCE
    content = utm_content or MISSING_REFERENCE
    return f"{greeting} (Ref: {campaign} | {content})"


def build_whatsapp_url(phone: str, message: str | None = None) -> str:
    """Return the wa.me URL for a phone, with the message URL-encoded."""
    if not message:
        return f"{WHATSAPP_BASE_URL}/{phone}"
    return f"{WHATSAPP_BASE_URL}/{phone}?text={quote(message, safe=URI_COMPONENT_SAFE)}"
