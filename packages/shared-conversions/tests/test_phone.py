"""Tests for Argentine phone canonicalization."""

import pytest
from pixelrelay.conversions.phone import normalize_argentine_phone


class TestNormalizeArgentinePhone:
    """Test normalize_argentine_phone."""

    def test_already_canonical_unchanged(self):
        """Test a 549-prefixed number is returned as-is."""
        assert normalize_argentine_phone("5491123456789") == "5491123456789"

    def test_idempotent(self):
        """Test normalizing a normalized number is a no-op."""
        inputs = ["01123456789", "1123456789", "+54 11 2345-6789", "541123456789", "12345"]
        for raw in inputs:
            once = normalize_argentine_phone(raw)
            assert normalize_argentine_phone(once) == once

    def test_strips_formatting(self):
        """Test spaces, dashes and plus signs are removed."""
        assert normalize_argentine_phone("+54 9 11 2345-6789") == "5491123456789"

    def test_country_code_without_mobile_nine(self):
        """Test 54-prefixed numbers get the mobile 9 inserted."""
        assert normalize_argentine_phone("541123456789") == "5491123456789"
        assert normalize_argentine_phone("+54 223 556-8815") == "5492235568815"

    def test_short_54_prefix_not_treated_as_country_code(self):
        """Test a 54-prefixed number under 12 digits is a local number."""
        # 10 digits starting with 54 is an area code, not the country code
        assert normalize_argentine_phone("5412345678") == "5495412345678"

    def test_trunk_prefix_dropped(self):
        """Test the domestic leading zero is removed."""
        assert normalize_argentine_phone("01123456789") == "5491123456789"

    @pytest.mark.parametrize(
        "raw",
        ["1123456789", "2235568815", "(011) 2345-6789", "0351 123 4567"],
    )
    def test_domestic_ten_digits_become_thirteen(self, raw):
        """Test 10-digit domestic numbers yield 13 characters prefixed 549."""
        result = normalize_argentine_phone(raw)
        assert len(result) == 13
        assert result.startswith("549")

    def test_fallback_returns_digits(self):
        """Test unrecognized shapes fall back to the digit string."""
        assert normalize_argentine_phone("12-345") == "12345"
        assert normalize_argentine_phone("+1 (415) 555-01234") == "141555501234"

    def test_trunk_stripped_fallback(self):
        """Test the trunk prefix stays stripped in the fallback path."""
        assert normalize_argentine_phone("0123") == "123"

    def test_never_raises(self):
        """Test odd input types return strings."""
        assert normalize_argentine_phone(None) == ""
        assert normalize_argentine_phone("") == ""
        assert normalize_argentine_phone("no digits") == ""
        assert normalize_argentine_phone(1123456789) == "5491123456789"
