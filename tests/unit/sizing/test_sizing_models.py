"""Unit tests for sizing models."""

from dataclasses import FrozenInstanceError

import pytest

from src.domain.exceptions import UnknownFieldError
from src.domain.services.sizing.calculators import derive
from src.models.sizing import Direction, SizingInputs, SizingResult


class TestSizingInputs:
    """SizingInputs value semantics."""

    def test_defaults(self):
        inputs = SizingInputs()

        assert inputs.direction is Direction.LONG
        assert inputs.take_profit_percent == 0.33
        assert inputs.losses_factor == 1.0
        assert inputs.price_high == 0.0

    def test_frozen(self):
        with pytest.raises(FrozenInstanceError):
            SizingInputs().price_high = 1.0  # type: ignore

    def test_with_update_returns_copy(self):
        original = SizingInputs()
        updated = original.with_update(price_high=10.0)

        assert updated.price_high == 10.0
        assert original.price_high == 0.0

    def test_with_update_unknown_field(self):
        with pytest.raises(UnknownFieldError):
            SizingInputs().with_update(leverage=10.0)

    def test_field_names(self):
        assert SizingInputs.field_names() == (
            "actual_price",
            "leverage_price",
            "price_high",
            "price_low",
            "direction",
            "initial_capital",
            "take_profit_percent",
            "position_size",
            "losses_factor",
        )

    def test_to_dict(self, btc_long_inputs):
        data = btc_long_inputs.to_dict()

        assert data["direction"] == "Long"
        assert data["price_high"] == 50_000.0


class TestSizingResult:
    """SizingResult serialization."""

    def test_to_dict_has_all_metrics(self, btc_long_inputs):
        data = derive(btc_long_inputs).to_dict()

        assert len(data) == 15
        assert list(data)[:2] == ["profit_fraction", "leverage"]
        assert data["max_qty_98_percent"] == pytest.approx(1.96)

    def test_equality_by_value(self, btc_long_inputs):
        assert derive(btc_long_inputs) == SizingResult(**derive(btc_long_inputs).to_dict())
