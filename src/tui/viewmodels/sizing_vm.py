"""
SizingViewModel - Framework-agnostic formatting of sizing results.

Turns a SizingResult into display strings keyed by field ID and tracks
which fields changed so widgets can update only those.
Shared by the Rich one-shot panel and the Textual calculator.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from src.models.sizing import Direction, SizingInputs, SizingResult
from ..formatters import (
    format_fraction_as_percentage,
    format_leverage,
    format_number,
    format_percentage,
)


@dataclass(frozen=True)
class MetricRow:
    """One displayed output metric."""

    field_id: str
    label: str
    attr: str  # SizingResult attribute
    kind: str = "number"  # number, percent, fraction, leverage


SECTIONS: Tuple[Tuple[str, Tuple[MetricRow, ...]], ...] = (
    ("Profit Targets", (
        MetricRow("profit-fraction", "% Profit", "profit_fraction", "fraction"),
        MetricRow("take-profit-target", "TP Target", "take_profit_target"),
        MetricRow("exit-long", "Exit Position Long", "exit_long"),
        MetricRow("exit-short", "Exit Position Short", "exit_short"),
    )),
    ("Position", (
        MetricRow("notional-value", "Notional Value", "notional_value"),
        MetricRow("leverage", "Leverage", "leverage"),
        MetricRow("basic-capital", "Basic Capital", "basic_capital"),
        MetricRow("leveraged-notional", "Leveraged Notional", "leveraged_notional"),
    )),
    ("Risk", (
        MetricRow("price-moved-against", "Price Moved Against", "price_moved_against"),
        MetricRow("loss-without-tax", "Loss Without Tax", "loss_without_tax"),
        MetricRow("wanted-profit", "Wanted Profit", "wanted_profit"),
        MetricRow("total-losses", "Total Losses (Max Drawdown)", "total_losses"),
    )),
    ("Capital", (
        MetricRow("min-capital", "Min Capital to Avoid Liquidation", "min_capital_to_avoid_liquidation"),
        MetricRow("percent-capital-used", "% Capital Used", "percent_capital_used", "percent"),
        MetricRow("max-qty-98", "Max Qty (98% Capital)", "max_qty_98_percent"),
    )),
)

KEY_METRICS: Tuple[MetricRow, ...] = (
    MetricRow("key-leverage", "Leverage", "leverage", "leverage"),
    MetricRow("key-capital-used", "Capital Used", "percent_capital_used", "percent"),
    MetricRow("key-notional", "Notional", "notional_value"),
)

ALL_ROWS: Tuple[MetricRow, ...] = tuple(
    row for _, rows in SECTIONS for row in rows
) + KEY_METRICS

# Input field -> label, in form order
INPUT_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("actual_price", "Actual Price"),
    ("leverage_price", "Leverage Price"),
    ("price_high", "Current Price (High)"),
    ("price_low", "Current Price (Low)"),
    ("direction", "Trade Direction"),
    ("position_size", "Position Sizing"),
    ("take_profit_percent", "Actual TP %"),
    ("losses_factor", "Losses Factor"),
    ("initial_capital", "Initial Capital"),
)


def format_input(inputs: SizingInputs, field: str) -> str:
    """Editable text for one input field (50000.0 -> "50000", 0.33 -> "0.33")."""
    value = getattr(inputs, field)
    if isinstance(value, Direction):
        return value.value
    if math.isinf(value):
        # Spelled the way parse_number reads it back
        return "Infinity" if value > 0 else "-Infinity"
    if math.isfinite(value) and value == int(value):
        return str(int(value))
    return repr(value)


class SizingViewModel:
    """
    ViewModel for sizing results.

    Responsibilities:
    - Format every output metric for display
    - Track which fields changed for targeted updates
    """

    FIELD_IDS = [row.field_id for row in ALL_ROWS]

    def __init__(self, decimals: int = 2) -> None:
        self.decimals = decimals
        self._field_cache: Dict[str, str] = {}

    def format_value(self, row: MetricRow, result: SizingResult) -> str:
        """Format one metric of the result."""
        value = getattr(result, row.attr)
        if row.kind == "fraction":
            return format_fraction_as_percentage(value, self.decimals)
        if row.kind == "percent":
            return format_percentage(value, self.decimals)
        if row.kind == "leverage":
            return format_leverage(value, self.decimals)
        return format_number(value, self.decimals)

    def compute_display_data(self, result: Optional[SizingResult]) -> Dict[str, str]:
        """Transform a result into field ID -> formatted value."""
        if result is None:
            return {}
        return {row.field_id: self.format_value(row, result) for row in ALL_ROWS}

    def compute_field_updates(self, result: Optional[SizingResult]) -> Dict[str, str]:
        """Return only fields that changed since the previous call."""
        new_data = self.compute_display_data(result)
        updates = {}

        for field_id, value in new_data.items():
            if self._field_cache.get(field_id) != value:
                updates[field_id] = value

        self._field_cache = new_data
        return updates

    def invalidate(self) -> None:
        """Clear cache, forcing full refresh on next update."""
        self._field_cache.clear()
