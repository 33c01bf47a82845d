"""
Position Sizing Calculator - Textual terminal UI.

Input form on the left, derived metrics on the right. Every edit is
forwarded as raw text to the SizingSession, which recomputes the whole
result before the results panel is refreshed.
"""

from __future__ import annotations

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widgets import Footer, Header, Input, Select

from ..domain.services.sizing.state import SizingSession
from ..models.sizing import SizingResult
from ..utils.logging_setup import get_logger
from .widgets.input_form import SizingInputForm, field_for
from .widgets.sizing_panel import SizingResultsPanel

logger = get_logger(__name__)


class SizingCalculatorApp(App):
    """
    Real-time position sizing calculator.

    Recalculates leverage, capital requirements and risk thresholds on
    every keystroke.
    """

    TITLE = "Position Sizing Calculator"

    CSS = """
    #calculator {
        height: auto;
    }

    #input-form {
        width: 1fr;
    }

    #results {
        width: 1fr;
    }
    """

    BINDINGS = [
        Binding("ctrl+r", "reset", "Reset", show=True),
        Binding("ctrl+q", "quit", "Quit", show=True),
    ]

    def __init__(self, session: SizingSession, env: str = "dev", decimals: int = 2, **kwargs):
        """
        Initialize the calculator.

        Args:
            session: Session holding inputs and the current result.
            env: Environment name shown in the subtitle.
            decimals: Decimal places for displayed numbers.
        """
        super().__init__(**kwargs)
        self.session = session
        self.env = env
        self.decimals = decimals
        self.sub_title = env

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="calculator"):
            yield SizingInputForm(self.session.inputs, id="input-form")
            yield SizingResultsPanel(self.decimals, id="results")
        yield Footer()

    def on_mount(self) -> None:
        """Observe the session and show the current result."""
        self.session.subscribe(self._on_result)
        self._on_result(self.session.result)

    def on_unmount(self) -> None:
        self.session.unsubscribe(self._on_result)

    def on_input_changed(self, event: Input.Changed) -> None:
        """Forward raw numeric text to the session."""
        if event.input.id is None:
            return
        self.session.update_raw(field_for(event.input.id), event.value)

    def on_select_changed(self, event: Select.Changed) -> None:
        """Forward the direction choice to the session."""
        if event.value is Select.BLANK:
            return
        self.session.update("direction", event.value)

    def action_reset(self) -> None:
        """Restore default inputs."""
        logger.info("Resetting calculator inputs to defaults")
        self.session.reset()
        self.query_one(SizingInputForm).load_inputs(self.session.inputs)

    def _on_result(self, result: SizingResult) -> None:
        self.query_one(SizingResultsPanel).result = result
