"""
Position sizing models.

SizingInputs is the user-editable parameter set, SizingResult the fifteen
derived metrics. Both are frozen: an edit produces a new SizingInputs and a
full recomputation produces a new SizingResult.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from enum import Enum
from typing import Any, Dict, Tuple

from src.domain.exceptions import UnknownFieldError


class Direction(Enum):
    """Trade direction."""

    LONG = "Long"
    SHORT = "Short"


# Application defaults for a fresh session
DEFAULT_TAKE_PROFIT_PERCENT = 0.33
DEFAULT_LOSSES_FACTOR = 1.0


@dataclass(frozen=True, slots=True)
class SizingInputs:
    """
    User-supplied trading parameters.

    Attributes:
        actual_price: Actual price (numerator of the leverage ratio).
        leverage_price: Leverage price (denominator of the leverage ratio).
        price_high: Current price, high side.
        price_low: Current price, low side.
        direction: Long or Short; selects the take-profit source price.
        initial_capital: Capital available in the account.
        take_profit_percent: Take-profit distance in percent (0.33 = 0.33%).
        position_size: Quantity traded.
        losses_factor: Multiplier for repeated adverse moves (0 disables).
    """

    actual_price: float = 0.0
    leverage_price: float = 0.0
    price_high: float = 0.0
    price_low: float = 0.0
    direction: Direction = Direction.LONG
    initial_capital: float = 0.0
    take_profit_percent: float = DEFAULT_TAKE_PROFIT_PERCENT
    position_size: float = 0.0
    losses_factor: float = DEFAULT_LOSSES_FACTOR

    @classmethod
    def field_names(cls) -> Tuple[str, ...]:
        """Names of all input fields, in declaration order."""
        return tuple(f.name for f in fields(cls))

    def with_update(self, **changes: Any) -> "SizingInputs":
        """
        Return a copy with the given fields replaced.

        Raises:
            UnknownFieldError: If a key is not an input field.
        """
        unknown = set(changes) - set(self.field_names())
        if unknown:
            raise UnknownFieldError(sorted(unknown))
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict with the direction as its display value."""
        data = asdict(self)
        data["direction"] = self.direction.value
        return data


@dataclass(frozen=True, slots=True)
class SizingResult:
    """
    Derived position sizing metrics.

    Field order follows the dependency tiers of the derivation.

    Attributes:
        profit_fraction: Take-profit percent as a fraction.
        leverage: actual_price / leverage_price.
        notional_value: Gross exposure before leverage.
        price_moved_against: Distance between high and low price.
        take_profit_target: Take-profit distance in price terms.
        basic_capital: Capital needed to hold the notional at this leverage.
        loss_without_tax: Loss on the notional for one high-to-low move.
        exit_long: Exit price for a long position.
        exit_short: Exit price for a short position.
        leveraged_notional: Notional scaled by leverage.
        wanted_profit: Profit targeted on the notional.
        total_losses: Worst-case losses (max drawdown).
        min_capital_to_avoid_liquidation: Losses + basic capital + 1% buffer.
        percent_capital_used: Basic capital as percent of initial capital.
        max_qty_98_percent: Quantity that would use 98% of capital.
    """

    profit_fraction: float
    leverage: float
    notional_value: float
    price_moved_against: float
    take_profit_target: float
    basic_capital: float
    loss_without_tax: float
    exit_long: float
    exit_short: float
    leveraged_notional: float
    wanted_profit: float
    total_losses: float
    min_capital_to_avoid_liquidation: float
    percent_capital_used: float
    max_qty_98_percent: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)
