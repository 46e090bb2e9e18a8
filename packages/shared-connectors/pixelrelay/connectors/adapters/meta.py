"""Meta Conversions API submission adapter."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from pixelrelay.connectors.config import RelayConfig
from pixelrelay.connectors.exceptions import (
    ConfigurationError,
    SubmissionError,
    UpstreamRejectionError,
)
from pixelrelay.conversions import ConversionEvent

logger = logging.getLogger(__name__)

CONNECT_TIMEOUT = 5.0  # seconds


class MetaConversionsClient:
    """Posts a single event envelope to the Meta Conversions API.

    One attempt per event; there is no retry. The access token travels in
    the query string, the envelope as the JSON body.

    Example:
        client = MetaConversionsClient(RelayConfig.from_env())
        response = await client.send(event)
        response["events_received"]  # 1
    """

    def __init__(
        self,
        config: RelayConfig,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize the client.

        Args:
            config: Relay configuration with pixel id and access token.
            http_client: Optional shared AsyncClient. When omitted a client
                is opened and closed around each send.
        """
        self.config = config
        self._http_client = http_client

    @property
    def timeout(self) -> httpx.Timeout:
        return httpx.Timeout(self.config.request_timeout, connect=CONNECT_TIMEOUT)

    async def send(self, event: ConversionEvent) -> dict[str, Any]:
        """Submit one event.

        Args:
            event: Event to submit.

        Returns:
            The decoded Meta response body.

        Raises:
            ConfigurationError: If pixel id or access token is missing.
            UpstreamRejectionError: If the response carries an error object.
            SubmissionError: On transport faults or an unreadable response.
        """
        if not self.config.is_submission_configured:
            raise ConfigurationError("META_PIXEL_ID and META_ACCESS_TOKEN must be configured")

        try:
            if self._http_client is not None:
                response = await self._post(self._http_client, event)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await self._post(client, event)
        except httpx.HTTPError as e:
            raise SubmissionError(f"Failed to reach Meta Conversions API: {e}") from e

        body = self._decode(response)
        has_fbp = "fbp" in event.user_data

        logger.info(
            f"[CAPI] Pixel: {self.config.pixel_id} | Amount: {event.value} | "
            f"FBP: {'YES' if has_fbp else 'NO'} | "
            f"Meta Status: {'OK' if body.get('events_received') else 'FAIL'}",
            extra={
                "event_id": event.event_id,
                "mode": event.mode.value,
                "http_status": response.status_code,
            },
        )

        if "error" in body:
            raise UpstreamRejectionError(body["error"])

        return body

    async def _post(self, client: httpx.AsyncClient, event: ConversionEvent) -> httpx.Response:
        return await client.post(
            self.config.events_url,
            params={"access_token": self.config.access_token},
            json=event.to_payload(),
            headers={"Content-Type": "application/json"},
            timeout=self.timeout,
        )

    @staticmethod
    def _decode(response: httpx.Response) -> dict[str, Any]:
        try:
            body = response.json()
        except ValueError as e:
            raise SubmissionError(
                f"Unreadable response from Meta (HTTP {response.status_code})"
            ) from e

        if not isinstance(body, dict):
            raise SubmissionError(
                f"Unexpected response from Meta (HTTP {response.status_code}): {body!r}"
            )
        return body
