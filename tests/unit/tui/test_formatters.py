"""Unit tests for display formatters."""

import pytest

from src.tui.formatters import (
    format_fraction_as_percentage,
    format_leverage,
    format_number,
    format_percentage,
)


class TestFormatNumber:
    """Fixed-point formatting."""

    def test_two_decimals(self):
        assert format_number(1234.5) == "1234.50"

    def test_rounding(self):
        assert format_number(1.956) == "1.96"

    def test_negative(self):
        assert format_number(-49000) == "-49000.00"

    def test_custom_decimals(self):
        assert format_number(1.5, decimals=4) == "1.5000"

    @pytest.mark.parametrize("value", [None, float("nan"), float("inf"), float("-inf")])
    def test_placeholder_for_missing_or_non_finite(self, value):
        assert format_number(value) == "0.00"
        assert format_number(value, decimals=3) == "0.000"


class TestSuffixedFormats:
    """Percent and leverage formatting."""

    def test_percentage(self):
        assert format_percentage(50.0) == "50.00%"

    def test_fraction_as_percentage(self):
        assert format_fraction_as_percentage(0.0033) == "0.33%"

    def test_fraction_none(self):
        assert format_fraction_as_percentage(None) == "0.00%"

    def test_leverage(self):
        assert format_leverage(10.0) == "10.00x"

    def test_leverage_nan(self):
        assert format_leverage(float("nan")) == "0.00x"
