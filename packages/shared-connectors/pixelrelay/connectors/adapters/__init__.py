"""Ad platform submission adapters.

Example:
    from pixelrelay.connectors.adapters import MetaConversionsClient
"""

from __future__ import annotations

from pixelrelay.connectors.adapters.meta import (
    MetaConversionsClient as MetaConversionsClient,
)

__all__ = ["MetaConversionsClient"]
