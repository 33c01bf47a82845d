"""
Sizing results panel widget.

Displays the key metrics (leverage, capital used, notional) followed by
every derived metric grouped into sections:
- Profit Targets
- Position
- Risk
- Capital
"""

from __future__ import annotations

from typing import Dict, Optional

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.reactive import reactive
from textual.widget import Widget
from textual.widgets import Static

from ...models.sizing import SizingResult
from ..viewmodels.sizing_vm import ALL_ROWS, KEY_METRICS, SECTIONS, MetricRow, SizingViewModel

ROWS_BY_ID: Dict[str, MetricRow] = {row.field_id: row for row in ALL_ROWS}
KEY_METRIC_IDS = {row.field_id for row in KEY_METRICS}


class SizingResultsPanel(Widget):
    """Derived metrics display, refreshed field by field."""

    DEFAULT_CSS = """
    SizingResultsPanel {
        height: auto;
        padding: 0 1;
        border: round $success;
    }

    SizingResultsPanel .section-header {
        color: $text-muted;
        margin-top: 1;
    }

    SizingResultsPanel .key-metric {
        text-style: bold;
    }
    """

    result: reactive[Optional[SizingResult]] = reactive(None, init=False)

    def __init__(self, decimals: int = 2, **kwargs):
        super().__init__(**kwargs)
        self._vm = SizingViewModel(decimals)
        # Field ID -> value currently shown
        self.displayed: Dict[str, str] = {}

    def compose(self) -> ComposeResult:
        """Compose the results layout."""
        with Vertical(id="results-content"):
            yield Static("[bold]Calculated Results[/]", id="results-title")

            for row in KEY_METRICS:
                yield Static(self._line(row, "-"), id=row.field_id, classes="key-metric")

            for section, rows in SECTIONS:
                yield Static(f"─── {section} ───", classes="section-header")
                for row in rows:
                    yield Static(self._line(row, "-"), id=row.field_id)

    def watch_result(self, result: Optional[SizingResult]) -> None:
        """Update changed fields when a new result arrives."""
        if result is None:
            return

        for field_id, value in self._vm.compute_field_updates(result).items():
            row = ROWS_BY_ID[field_id]
            self.query_one(f"#{field_id}", Static).update(self._line(row, value))
            self.displayed[field_id] = value

    @staticmethod
    def _line(row: MetricRow, value: str) -> str:
        width = 18 if row.field_id in KEY_METRIC_IDS else 34
        return f"{row.label + ':':<{width}}{value:>16}"
