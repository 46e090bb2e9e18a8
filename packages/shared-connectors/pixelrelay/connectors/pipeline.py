"""
Purchase pipeline - intake through submission with a typed result.

Stages, in order:
1. Intake: payload -> RawLead, required-field validation
2. Sanitize optional attribution fields
3-4. Normalize and hash identity
5. Resolve event time
6. Resolve attribution mode and dedup key
7. Build the ConversionEvent
8. Submit to Meta

process() never raises. Every failure becomes a PipelineResult whose
outcome the transport layer maps to a status code.
"""

from __future__ import annotations

import logging
import random
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pixelrelay.connectors.adapters.meta import MetaConversionsClient
from pixelrelay.connectors.config import RelayConfig
from pixelrelay.connectors.exceptions import ConfigurationError, UpstreamRejectionError
from pixelrelay.conversions import (
    InvalidAmountError,
    RawLead,
    build_conversion_event,
    hash_identity,
    resolve_attribution,
    resolve_event_time,
    sanitize_attribution_fields,
)

logger = logging.getLogger(__name__)


class PipelineOutcome(str, Enum):
    """Result kinds of one pipeline run."""

    SUCCESS = "success"
    VALIDATION_ERROR = "validation_error"
    CONFIGURATION_ERROR = "configuration_error"
    UPSTREAM_REJECTION = "upstream_rejection"
    UNEXPECTED_ERROR = "unexpected_error"


@dataclass
class PipelineResult:
    """Outcome of processing one purchase payload."""

    outcome: PipelineOutcome
    event_id: str | None = None
    response: dict[str, Any] | None = None
    upstream_error: Any = None
    message: str | None = None

    @property
    def success(self) -> bool:
        return self.outcome == PipelineOutcome.SUCCESS

    def to_dict(self) -> dict[str, Any]:
        """Caller-facing body. Keys match what existing callers parse."""
        if self.outcome == PipelineOutcome.SUCCESS:
            return {
                "success": True,
                "metaResponse": self.response,
                "event_id": self.event_id,
            }
        if self.outcome == PipelineOutcome.UPSTREAM_REJECTION:
            return {
                "success": False,
                "message": self.message,
                "metaError": self.upstream_error,
            }
        return {"success": False, "error": self.message}


class PurchasePipeline:
    """Normalizes, deduplicates and submits Purchase events.

    Example:
        pipeline = PurchasePipeline(RelayConfig.from_env())
        result = await pipeline.process({
            "nombre": "Ana",
            "phone": "1123456789",
            "amount": "500",
        })
        if result.success:
            print(result.event_id)
    """

    def __init__(
        self,
        config: RelayConfig,
        client: MetaConversionsClient | None = None,
        clock: Callable[[], float] = time.time,
        rng: random.Random | None = None,
    ):
        """Initialize the pipeline.

        Args:
            config: Relay configuration.
            client: Submission adapter. Defaults to MetaConversionsClient(config).
            clock: Source of the current time, in seconds.
            rng: Random source for offline dedup keys.
        """
        self.config = config
        self.client = client or MetaConversionsClient(config)
        self.clock = clock
        self.rng = rng

    async def process(self, payload: Any) -> PipelineResult:
        """Run one payload through every stage.

        Args:
            payload: Decoded request body.

        Returns:
            PipelineResult describing the outcome.
        """
        try:
            return await self._process(payload)
        except Exception as e:
            logger.exception("Unexpected error processing purchase event")
            return PipelineResult(
                outcome=PipelineOutcome.UNEXPECTED_ERROR,
                message=str(e) or "Unknown internal error",
            )

    async def _process(self, payload: Any) -> PipelineResult:
        if not isinstance(payload, Mapping):
            payload = {}
        lead = RawLead.from_dict(dict(payload))

        missing = lead.missing_required_fields()
        if missing:
            logger.warning(f"Rejected purchase event, missing fields: {', '.join(missing)}")
            return PipelineResult(
                outcome=PipelineOutcome.VALIDATION_ERROR,
                message="Missing required fields (nombre, phone, amount)",
            )

        if not self.config.is_submission_configured:
            logger.error("META_PIXEL_ID or META_ACCESS_TOKEN is not configured")
            return PipelineResult(
                outcome=PipelineOutcome.CONFIGURATION_ERROR,
                message="Server configuration error: Meta credentials are not set",
            )

        fields = sanitize_attribution_fields(lead)
        identity = hash_identity(lead.phone, lead.nombre, lead.apellido)
        event_time = resolve_event_time(lead.event_time, clock=self.clock)
        attribution = resolve_attribution(
            fields,
            identity.hashed_phone,
            clock=self.clock,
            rng=self.rng,
        )

        try:
            event = build_conversion_event(
                identity,
                attribution,
                event_time,
                lead.amount,
                test_event_code=fields["test_event_code"],
            )
        except InvalidAmountError as e:
            logger.warning(f"Rejected purchase event: {e}")
            return PipelineResult(
                outcome=PipelineOutcome.VALIDATION_ERROR,
                message=str(e),
            )

        try:
            response = await self.client.send(event)
        except ConfigurationError as e:
            logger.error(f"Submission not configured: {e}")
            return PipelineResult(
                outcome=PipelineOutcome.CONFIGURATION_ERROR,
                message=str(e),
            )
        except UpstreamRejectionError as e:
            logger.warning(
                f"Meta rejected event {event.event_id}",
                extra={"meta_error": e.payload},
            )
            return PipelineResult(
                outcome=PipelineOutcome.UPSTREAM_REJECTION,
                event_id=event.event_id,
                upstream_error=e.payload,
                message="Meta rejected the event",
            )

        return PipelineResult(
            outcome=PipelineOutcome.SUCCESS,
            event_id=event.event_id,
            response=response,
        )
