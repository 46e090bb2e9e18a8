"""Pytest fixtures for shared-connectors tests."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest
from pixelrelay.connectors.config import RelayConfig


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, status_code: int = 200, body: Any = None, raw: bytes | None = None):
        self.requests: list[httpx.Request] = []
        self._status_code = status_code
        self._body = {"events_received": 1, "fbtrace_id": "trace-1"} if body is None else body
        self._raw = raw
        super().__init__(self._respond)

    def _respond(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._raw is not None:
            return httpx.Response(self._status_code, content=self._raw)
        return httpx.Response(self._status_code, json=self._body)

    @property
    def last_json(self) -> dict[str, Any]:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def relay_config() -> RelayConfig:
    """Create a fully configured relay configuration."""
    return RelayConfig(
        pixel_id="1234567890",
        access_token="EAAB-test-token",
        admin_token="admin-secret",
    )


@pytest.fixture
def make_transport() -> Callable[..., RecordingTransport]:
    """Factory for recording transports."""
    return RecordingTransport


@pytest.fixture
def fixed_clock() -> Callable[[], float]:
    """Clock pinned to 2025-06-15T15:06:40.5Z."""
    return lambda: 1_750_000_000.5
