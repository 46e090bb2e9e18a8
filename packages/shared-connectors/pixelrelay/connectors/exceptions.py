"""Custom exceptions for the relay connectors."""

from __future__ import annotations

from typing import Any


class RelayError(Exception):
    """Base exception for relay errors."""

    pass


class ConfigurationError(RelayError):
    """Raised when required process-wide configuration is missing."""

    pass


class SubmissionError(RelayError):
    """Raised when the event could not be delivered or the reply not read."""

    pass


class UpstreamRejectionError(SubmissionError):
    """Raised when Meta answers with an error object.

    Attributes:
        payload: The upstream error object, verbatim.
    """

    def __init__(self, payload: Any):
        self.payload = payload
        message = payload.get("message") if isinstance(payload, dict) else None
        super().__init__(f"Meta rejected the event: {message or payload}")
