"""
Input form widget for the sizing calculator.

One text Input per numeric field and a Select for the trade direction.
The form only renders; the app forwards change events to the session.
"""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.widget import Widget
from textual.widgets import Input, Label, Select, Static

from ...models.sizing import Direction, SizingInputs
from ..viewmodels.sizing_vm import INPUT_FIELDS, format_input

ID_PREFIX = "input-"


def widget_id_for(field: str) -> str:
    return f"{ID_PREFIX}{field}"


def field_for(widget_id: str) -> str:
    """Input record field name for a form widget ID."""
    return widget_id[len(ID_PREFIX):] if widget_id.startswith(ID_PREFIX) else widget_id


class SizingInputForm(Widget):
    """Editable trading parameters."""

    DEFAULT_CSS = """
    SizingInputForm {
        height: auto;
        padding: 0 1;
        border: round $primary;
    }

    SizingInputForm Label {
        color: $text-muted;
    }
    """

    def __init__(self, inputs: SizingInputs, **kwargs):
        super().__init__(**kwargs)
        self._initial = inputs

    def compose(self) -> ComposeResult:
        """Compose one labelled control per input field."""
        with Vertical(id="form-content"):
            yield Static("[bold]Input Parameters[/]", id="form-title")
            for field, label in INPUT_FIELDS:
                yield Label(label)
                if field == "direction":
                    yield Select(
                        [(d.value, d.value) for d in Direction],
                        value=self._initial.direction.value,
                        allow_blank=False,
                        id=widget_id_for(field),
                    )
                else:
                    yield Input(
                        value=format_input(self._initial, field),
                        placeholder="0.00",
                        id=widget_id_for(field),
                    )

    def load_inputs(self, inputs: SizingInputs) -> None:
        """Show the given input record in the form controls."""
        for field, _ in INPUT_FIELDS:
            if field == "direction":
                self.query_one(f"#{widget_id_for(field)}", Select).value = inputs.direction.value
            else:
                self.query_one(f"#{widget_id_for(field)}", Input).value = format_input(inputs, field)
