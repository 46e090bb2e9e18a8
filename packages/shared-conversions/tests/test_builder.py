"""Tests for the request builder."""

import pytest
from pixelrelay.conversions.builder import (
    InvalidAmountError,
    build_conversion_event,
    parse_amount,
)
from pixelrelay.conversions.hashing import hash_identity
from pixelrelay.conversions.schema import AttributionContext, AttributionMode


@pytest.fixture
def identity():
    return hash_identity("1123456789", "Ana", "Pérez")


class TestParseAmount:
    """Test parse_amount."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("500", 500.0), (" 1500.50 ", 1500.5), (250, 250.0), (99.9, 99.9), ("0", 0.0)],
    )
    def test_numeric_values(self, value, expected):
        assert parse_amount(value) == expected

    @pytest.mark.parametrize("value", ["abc", "", "1.500,50", None, "nan", "inf", True, [500]])
    def test_non_numeric_rejected(self, value):
        """Test values that are not finite numbers are rejected."""
        with pytest.raises(InvalidAmountError, match="Invalid amount"):
            parse_amount(value)

    def test_is_value_error(self):
        """Test InvalidAmountError can be caught as ValueError."""
        with pytest.raises(ValueError):
            parse_amount("abc")


class TestBuildConversionEvent:
    """Test build_conversion_event."""

    def test_ad_click_event(self, identity):
        """Test fbp/fbc are added to user_data in ad-click mode."""
        attribution = AttributionContext(
            mode=AttributionMode.AD_CLICK,
            dedup_key="contact-42",
            fbp="fb.1.1.111",
            fbc="fb.1.1.abc",
        )

        event = build_conversion_event(identity, attribution, 1_750_000_000, "500")

        assert event.to_dict() == {
            "event_name": "Purchase",
            "event_time": 1_750_000_000,
            "event_id": "contact-42",
            "user_data": {
                "ph": [identity.hashed_phone],
                "fn": [identity.hashed_first_name],
                "ln": [identity.hashed_last_name],
                "fbp": "fb.1.1.111",
                "fbc": "fb.1.1.abc",
            },
            "custom_data": {"currency": "ARS", "value": 500.0},
            "action_source": "system_generated",
        }

    def test_absent_click_ids_are_absent_keys(self, identity):
        """Test missing fbp/fbc are omitted rather than null."""
        attribution = AttributionContext(
            mode=AttributionMode.AD_CLICK,
            dedup_key="kt-1",
            fbc="abc",
        )

        event = build_conversion_event(identity, attribution, 1_750_000_000, 10)

        assert "fbp" not in event.user_data
        assert event.user_data["fbc"] == "abc"

    def test_offline_event_user_data(self, identity):
        """Test offline events only carry hashed identity."""
        attribution = AttributionContext(
            mode=AttributionMode.OFFLINE,
            dedup_key="purchase_offline_1_2",
        )

        event = build_conversion_event(identity, attribution, 1_750_000_000, 10)

        assert set(event.user_data) == {"ph", "fn", "ln"}
        assert event.mode == AttributionMode.OFFLINE

    def test_test_event_code_top_level(self, identity):
        """Test test_event_code sits on the envelope, not the event."""
        attribution = AttributionContext(mode=AttributionMode.OFFLINE, dedup_key="k")

        event = build_conversion_event(identity, attribution, 1, "1", test_event_code="TEST123")
        payload = event.to_payload()

        assert payload["test_event_code"] == "TEST123"
        assert "test_event_code" not in payload["data"][0]
        assert len(payload["data"]) == 1

    def test_no_test_event_code(self, identity):
        """Test the envelope has no test_event_code key when absent."""
        attribution = AttributionContext(mode=AttributionMode.OFFLINE, dedup_key="k")

        payload = build_conversion_event(identity, attribution, 1, "1").to_payload()

        assert payload == {"data": [payload["data"][0]]}

    def test_invalid_amount_raises(self, identity):
        """Test invalid amounts are not forwarded."""
        attribution = AttributionContext(mode=AttributionMode.OFFLINE, dedup_key="k")

        with pytest.raises(InvalidAmountError):
            build_conversion_event(identity, attribution, 1, "quinientos")
