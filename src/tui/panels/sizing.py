"""
Position sizing panel rendering for one-shot (non-interactive) output.
"""

from __future__ import annotations
from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ...models.sizing import SizingInputs, SizingResult
from ..viewmodels.sizing_vm import (
    INPUT_FIELDS,
    KEY_METRICS,
    SECTIONS,
    SizingViewModel,
    format_input,
)


def render_key_metrics(result: SizingResult, decimals: int = 2) -> Table:
    """Leverage, capital used and notional side by side."""
    vm = SizingViewModel(decimals)
    table = Table(show_header=False, box=None, expand=True)
    for _ in KEY_METRICS:
        table.add_column(justify="center")

    table.add_row(*(Text(row.label, style="dim") for row in KEY_METRICS))
    table.add_row(*(Text(vm.format_value(row, result), style="bold") for row in KEY_METRICS))
    return table


def render_sizing_panel(
    inputs: SizingInputs,
    result: SizingResult,
    decimals: int = 2,
    title: str = "Position Sizing",
) -> Panel:
    """
    Render inputs and derived metrics.

    Args:
        inputs: Input record the result was derived from.
        result: Derived metrics.
        decimals: Decimal places for displayed numbers.
        title: Panel title.

    Returns:
        Panel containing key metrics, inputs and all outputs by section.
    """
    vm = SizingViewModel(decimals)

    table = Table(show_header=False, box=None)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row(Text("--- Inputs ---", style="bold"), "")
    for field, label in INPUT_FIELDS:
        table.add_row(label, format_input(inputs, field))

    for section, rows in SECTIONS:
        table.add_row(Text(f"--- {section} ---", style="bold"), "")
        for row in rows:
            table.add_row(row.label, vm.format_value(row, result))

    return Panel(
        Group(render_key_metrics(result, decimals), table),
        title=title,
        border_style="green",
    )
