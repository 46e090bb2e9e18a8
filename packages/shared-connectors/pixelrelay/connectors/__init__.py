"""
PixelRelay Connectors - delivery of purchase events to ad platforms.

Provides:
- RelayConfig: process-wide configuration (pixel, tokens, timeouts)
- MetaConversionsClient: single-attempt Meta Conversions API submission
- PurchasePipeline: intake-to-submission orchestration with typed results

Usage:
    from pixelrelay.connectors import PurchasePipeline, RelayConfig

    pipeline = PurchasePipeline(RelayConfig.from_env())
    result = await pipeline.process(payload)
"""

from pixelrelay.connectors.adapters.meta import MetaConversionsClient
from pixelrelay.connectors.config import RelayConfig
from pixelrelay.connectors.exceptions import (
    ConfigurationError,
    RelayError,
    SubmissionError,
    UpstreamRejectionError,
)
from pixelrelay.connectors.pipeline import (
    PipelineOutcome,
    PipelineResult,
    PurchasePipeline,
)

__all__ = [
    # Config
    "RelayConfig",
    # Adapters
    "MetaConversionsClient",
    # Pipeline
    "PurchasePipeline",
    "PipelineOutcome",
    "PipelineResult",
    # Exceptions
    "RelayError",
    "ConfigurationError",
    "SubmissionError",
    "UpstreamRejectionError",
]
