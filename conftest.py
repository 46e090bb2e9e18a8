"""Shared pytest fixtures for PixelRelay packages."""

import pytest


@pytest.fixture
def sample_lead_payload():
    """Sample ad-click purchase as sent by the spreadsheet script."""
    return {
        "nombre": "Ana",
        "apellido": "Pérez",
        "phone": "011 2345-6789",
        "amount": "500",
        "event_time": "2025-01-15T10:30:00Z",
        "event_id": "contact-42",
        "fbp": "fb.1.1736937000000.1234567890",
        "fbc": "N/A",
        "click_id": "",
        "test_event_code": "TEST123",
    }


@pytest.fixture
def sample_offline_payload():
    """Sample offline purchase with no click signals."""
    return {
        "nombre": "Juan",
        "phone": "2235568815",
        "amount": 1250.5,
    }
