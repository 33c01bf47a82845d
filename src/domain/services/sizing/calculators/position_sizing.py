"""
Position Sizing Calculator - Pure derivation of sizing metrics.

Maps a SizingInputs record to a SizingResult. Every output is recomputed
from scratch on each call; nothing is cached or carried between calls.

Usage:
    result = derive(SizingInputs(
        actual_price=100.0,
        leverage_price=10.0,
        price_high=50_000.0,
        price_low=49_000.0,
        initial_capital=10_000.0,
        position_size=1.0,
        losses_factor=2.0,
    ))
    print(result.leverage)       # 10.0
    print(result.basic_capital)  # 5000.0
"""

from __future__ import annotations

from src.models.sizing import Direction, SizingInputs, SizingResult

# Buffer added on top of losses and basic capital (1% of notional)
LIQUIDATION_BUFFER_RATIO = 0.01

# Share of capital targeted by the max quantity figure
MAX_CAPITAL_USAGE_PCT = 98.0


def derive(inputs: SizingInputs) -> SizingResult:
    """
    Derive all sizing metrics from the input record.

    Pure function: no side effects, deterministic output, never raises.

    Divisions are guarded against an exact zero denominator only (the
    guarded value becomes 0.0). NaN or infinite inputs propagate as-is.

    Args:
        inputs: Current input record.

    Returns:
        SizingResult with all fifteen metrics.

    Example:
        >>> r = derive(SizingInputs(actual_price=100.0, leverage_price=10.0,
        ...                         price_high=50000.0, position_size=1.0))
        >>> r.notional_value
        50000.0
        >>> r.basic_capital
        5000.0
    """
    high = inputs.price_high
    low = inputs.price_low
    size = inputs.position_size

    # Tier 1
    profit_fraction = inputs.take_profit_percent / 100
    leverage = inputs.actual_price / inputs.leverage_price if inputs.leverage_price != 0 else 0.0
    notional_value = high * size
    price_moved_against = high - low

    # Tier 2
    if inputs.direction == Direction.LONG:
        take_profit_target = profit_fraction * high
    else:
        take_profit_target = profit_fraction * low
    basic_capital = notional_value / leverage if leverage != 0 else 0.0
    loss_without_tax = (price_moved_against / high) * notional_value if high != 0 else 0.0

    # Tier 3
    exit_long = high + take_profit_target
    exit_short = low - take_profit_target
    leveraged_notional = leverage * notional_value
    wanted_profit = profit_fraction * notional_value
    # A zero losses factor switches off the drawdown figures entirely
    total_losses = loss_without_tax * inputs.losses_factor if inputs.losses_factor else 0.0

    # Tier 4
    if inputs.losses_factor:
        min_capital = total_losses + basic_capital + LIQUIDATION_BUFFER_RATIO * notional_value
    else:
        min_capital = 0.0
    capital = inputs.initial_capital
    percent_capital_used = (1 - (capital - basic_capital) / capital) * 100 if capital != 0 else 0.0

    # Tier 5
    if percent_capital_used != 0:
        max_qty = (MAX_CAPITAL_USAGE_PCT / percent_capital_used) * size
    else:
        max_qty = 0.0

    return SizingResult(
        profit_fraction=profit_fraction,
        leverage=leverage,
        notional_value=notional_value,
        price_moved_against=price_moved_against,
        take_profit_target=take_profit_target,
        basic_capital=basic_capital,
        loss_without_tax=loss_without_tax,
        exit_long=exit_long,
        exit_short=exit_short,
        leveraged_notional=leveraged_notional,
        wanted_profit=wanted_profit,
        total_losses=total_losses,
        min_capital_to_avoid_liquidation=min_capital,
        percent_capital_used=percent_capital_used,
        max_qty_98_percent=max_qty,
    )
