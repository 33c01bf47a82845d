"""Unit tests for the position sizing calculator."""

import math
from dataclasses import fields

import pytest

from src.domain.services.sizing.calculators.position_sizing import derive
from src.models.sizing import Direction, SizingInputs, SizingResult


class TestDeriveReferenceScenario:
    """Long 1 unit at 50k with 10x leverage and 10k capital."""

    def test_tier_one_metrics(self, btc_long_inputs):
        result = derive(btc_long_inputs)

        assert result.profit_fraction == pytest.approx(0.0033)
        assert result.leverage == 10.0  # 100 / 10
        assert result.notional_value == 50_000.0  # 50000 * 1
        assert result.price_moved_against == 1_000.0  # 50000 - 49000

    def test_tier_two_metrics(self, btc_long_inputs):
        result = derive(btc_long_inputs)

        assert result.take_profit_target == pytest.approx(165.0)  # 0.0033 * 50000
        assert result.basic_capital == 5_000.0  # 50000 / 10
        assert result.loss_without_tax == pytest.approx(1_000.0)  # (1000 / 50000) * 50000

    def test_tier_three_metrics(self, btc_long_inputs):
        result = derive(btc_long_inputs)

        assert result.exit_long == pytest.approx(50_165.0)
        assert result.exit_short == pytest.approx(48_835.0)
        assert result.leveraged_notional == 500_000.0  # 10 * 50000
        assert result.wanted_profit == pytest.approx(165.0)  # 0.0033 * 50000
        assert result.total_losses == pytest.approx(2_000.0)  # 1000 * 2

    def test_tier_four_and_five_metrics(self, btc_long_inputs):
        result = derive(btc_long_inputs)

        # 2000 + 5000 + 1% of 50000
        assert result.min_capital_to_avoid_liquidation == pytest.approx(7_500.0)
        assert result.percent_capital_used == pytest.approx(50.0)
        assert result.max_qty_98_percent == pytest.approx(1.96)  # (98 / 50) * 1

    def test_result_is_frozen(self, btc_long_inputs):
        result = derive(btc_long_inputs)

        with pytest.raises(AttributeError):
            result.leverage = 5.0  # type: ignore


class TestDerivePurity:
    """derive() is deterministic and leaves its input untouched."""

    def test_same_input_same_output(self, btc_long_inputs):
        assert derive(btc_long_inputs) == derive(btc_long_inputs)

    def test_input_not_modified(self, btc_long_inputs):
        before = btc_long_inputs.to_dict()
        derive(btc_long_inputs)
        assert btc_long_inputs.to_dict() == before

    def test_no_memory_between_calls(self, btc_long_inputs):
        """A call with other inputs in between does not change the result."""
        first = derive(btc_long_inputs)
        derive(btc_long_inputs.with_update(price_high=1.0, leverage_price=0.0))
        assert derive(btc_long_inputs) == first


class TestDeriveZeroGuards:
    """Exact-zero denominators yield 0.0 instead of raising."""

    def test_zero_leverage_price(self, btc_long_inputs):
        result = derive(btc_long_inputs.with_update(leverage_price=0.0))

        assert result.leverage == 0.0
        assert result.basic_capital == 0.0
        assert result.leveraged_notional == 0.0

    def test_zero_leverage_price_regardless_of_other_inputs(self):
        result = derive(SizingInputs(actual_price=123.0, price_high=7.0, position_size=3.0))

        assert result.leverage == 0.0
        assert result.basic_capital == 0.0

    def test_zero_actual_price_gives_zero_leverage_and_zero_basic_capital(self, btc_long_inputs):
        result = derive(btc_long_inputs.with_update(actual_price=0.0))

        assert result.leverage == 0.0
        assert result.basic_capital == 0.0

    def test_zero_price_high(self, btc_long_inputs):
        result = derive(btc_long_inputs.with_update(price_high=0.0))

        assert result.loss_without_tax == 0.0
        assert result.notional_value == 0.0
        assert result.price_moved_against == -49_000.0

    def test_zero_initial_capital(self, btc_long_inputs):
        result = derive(btc_long_inputs.with_update(initial_capital=0.0))

        assert result.percent_capital_used == 0.0
        assert result.max_qty_98_percent == 0.0

    def test_zero_percent_capital_used(self, btc_long_inputs):
        """No basic capital means 0% used, which guards the max quantity."""
        result = derive(btc_long_inputs.with_update(leverage_price=0.0))

        assert result.percent_capital_used == 0.0
        assert result.max_qty_98_percent == 0.0

    def test_zero_losses_factor(self, btc_long_inputs):
        result = derive(btc_long_inputs.with_update(losses_factor=0.0))

        assert result.total_losses == 0.0
        assert result.min_capital_to_avoid_liquidation == 0.0
        # Unrelated metrics are still computed
        assert result.loss_without_tax == pytest.approx(1_000.0)
        assert result.basic_capital == 5_000.0

    def test_negative_losses_factor_used_as_is(self, btc_long_inputs):
        result = derive(btc_long_inputs.with_update(losses_factor=-1.0))

        assert result.total_losses == pytest.approx(-1_000.0)
        assert result.min_capital_to_avoid_liquidation == pytest.approx(4_500.0)

    def test_all_zero_inputs(self):
        """Only the profit fraction is non-zero; nothing raises, nothing is NaN."""
        inputs = SizingInputs(
            direction=Direction.LONG,
            take_profit_percent=0.33,
            losses_factor=0.0,
        )
        result = derive(inputs)

        for f in fields(SizingResult):
            value = getattr(result, f.name)
            assert math.isfinite(value), f.name
            if f.name != "profit_fraction":
                assert value == 0.0, f.name
        assert result.profit_fraction == pytest.approx(0.0033)

    def test_default_session_inputs(self):
        """Fresh defaults (losses factor 1) still produce all-zero money figures."""
        result = derive(SizingInputs())

        assert result.total_losses == 0.0
        assert result.min_capital_to_avoid_liquidation == 0.0
        assert result.percent_capital_used == 0.0


class TestDeriveDirection:
    """Direction only changes the take-profit source price."""

    def test_short_uses_low_price(self, btc_long_inputs):
        result = derive(btc_long_inputs.with_update(direction=Direction.SHORT))

        assert result.take_profit_target == pytest.approx(161.7)  # 0.0033 * 49000
        assert result.exit_long == pytest.approx(50_161.7)
        assert result.exit_short == pytest.approx(48_838.3)

    def test_direction_switch_touches_only_target_and_exits(self, btc_long_inputs):
        long_result = derive(btc_long_inputs).to_dict()
        short_result = derive(btc_long_inputs.with_update(direction=Direction.SHORT)).to_dict()

        changed = {name for name in long_result if long_result[name] != short_result[name]}
        assert changed == {"take_profit_target", "exit_long", "exit_short"}


class TestDeriveNonFinite:
    """NaN and infinity flow through without raising."""

    def test_nan_price_propagates(self, btc_long_inputs):
        result = derive(btc_long_inputs.with_update(price_high=float("nan")))

        assert math.isnan(result.notional_value)
        assert math.isnan(result.basic_capital)
        assert math.isnan(result.loss_without_tax)
        assert math.isnan(result.percent_capital_used)
        assert math.isnan(result.max_qty_98_percent)
        # Leverage does not depend on the high price
        assert result.leverage == 10.0

    def test_infinite_price_does_not_raise(self, btc_long_inputs):
        result = derive(btc_long_inputs.with_update(price_high=float("inf")))

        assert math.isinf(result.notional_value)
        assert math.isnan(result.loss_without_tax)  # (inf / inf) * inf

    def test_tiny_leverage_price_gives_huge_leverage(self, btc_long_inputs):
        """Only an exact zero is guarded."""
        result = derive(btc_long_inputs.with_update(leverage_price=1e-300))

        assert result.leverage > 1e300
