"""Unit tests for input parsing."""

import math

import pytest

from src.domain.exceptions import InputError, InvalidDirectionError, UnknownFieldError
from src.domain.services.sizing.input_parser import (
    normalize_field_name,
    parse_direction,
    parse_field,
    parse_inputs,
    parse_number,
)
from src.models.sizing import Direction, SizingInputs


class TestParseNumber:
    """Lenient numeric parsing."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("12.5", 12.5),
            ("12.5abc", 12.5),
            ("  7", 7.0),
            ("-3.5", -3.5),
            ("+2", 2.0),
            ("1e3", 1000.0),
            ("1e", 1.0),
            (".5", 0.5),
            ("5.", 5.0),
            ("50000usd", 50_000.0),
        ],
    )
    def test_numeric_prefix(self, text, expected):
        assert parse_number(text) == expected

    @pytest.mark.parametrize("text", ["", "abc", "usd50", "-", ".", "NaN", "0", "-0", "0.0"])
    def test_zero_results(self, text):
        assert parse_number(text) == 0.0

    def test_none(self):
        assert parse_number(None) == 0.0

    def test_infinity_text(self):
        assert parse_number("Infinity") == math.inf
        assert parse_number("-Infinity") == -math.inf

    def test_numbers_pass_through(self):
        assert parse_number(42) == 42.0
        assert isinstance(parse_number(42), float)
        assert parse_number(2.5) == 2.5

    def test_nan_number_becomes_zero(self):
        assert parse_number(float("nan")) == 0.0

    def test_never_raises_on_odd_types(self):
        assert parse_number(True) == 0.0  # "True" has no numeric prefix
        assert parse_number([1, 2]) == 0.0


class TestParseDirection:
    """Direction parsing."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Long", Direction.LONG),
            ("Short", Direction.SHORT),
            ("short", Direction.SHORT),
            (" LONG ", Direction.LONG),
        ],
    )
    def test_valid(self, text, expected):
        assert parse_direction(text) is expected

    def test_enum_passes_through(self):
        assert parse_direction(Direction.SHORT) is Direction.SHORT

    @pytest.mark.parametrize("value", ["up", "", "Longer", None, 1])
    def test_invalid(self, value):
        with pytest.raises(InvalidDirectionError) as exc_info:
            parse_direction(value)

        assert exc_info.value.value == value

    def test_error_hierarchy(self):
        with pytest.raises(ValueError):
            parse_direction("up")
        with pytest.raises(InputError):
            parse_direction("up")


class TestParseField:
    """Per-field parsing."""

    def test_alias(self):
        assert normalize_field_name("takeProfitPercent") == "take_profit_percent"
        assert normalize_field_name("price_high") == "price_high"

    def test_numeric_field(self):
        assert parse_field("positionSize", "0.5") == 0.5

    def test_direction_field(self):
        assert parse_field("direction", "Short") is Direction.SHORT

    def test_unknown_field(self):
        with pytest.raises(UnknownFieldError) as exc_info:
            parse_field("leverage", "10")

        assert exc_info.value.names == ["leverage"]


class TestParseInputs:
    """Whole-record parsing."""

    def test_mixed_spellings(self):
        inputs = parse_inputs({
            "actualPrice": "100",
            "leverage_price": 10,
            "priceHigh": "50000",
            "direction": "short",
        })

        assert inputs.actual_price == 100.0
        assert inputs.leverage_price == 10.0
        assert inputs.price_high == 50_000.0
        assert inputs.direction is Direction.SHORT

    def test_missing_fields_use_defaults(self, btc_long_inputs):
        inputs = parse_inputs({"positionSize": "2"}, btc_long_inputs)

        assert inputs.position_size == 2.0
        assert inputs.price_high == btc_long_inputs.price_high
        assert inputs.losses_factor == btc_long_inputs.losses_factor

    def test_empty_mapping(self):
        assert parse_inputs({}) == SizingInputs()

    def test_unknown_fields_reported_together(self):
        with pytest.raises(UnknownFieldError) as exc_info:
            parse_inputs({"foo": 1, "priceHigh": 1, "bar": 2})

        assert exc_info.value.names == ["foo", "bar"]
        assert "foo, bar" in str(exc_info.value)

    def test_non_text_unknown_field_reported(self):
        with pytest.raises(UnknownFieldError) as exc_info:
            parse_inputs({1: 2})

        assert exc_info.value.names == [1]
        assert "Unknown input field(s): 1" in str(exc_info.value)
