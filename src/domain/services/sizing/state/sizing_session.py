"""
Sizing Session - Recompute-on-write state for interactive calculators.

Holds the current SizingInputs and the SizingResult derived from it.
Every write replaces the edited fields and recomputes the full result
before returning, so a caller never sees a result that lags the inputs.

Usage:
    session = SizingSession()
    session.subscribe(lambda result: print(result.leverage))

    session.update("actual_price", 100.0)
    session.update_raw("leverage_price", "10")   # prints 10.0

    session.result.leverage  # 10.0
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional

from src.domain.exceptions import UnknownFieldError
from src.domain.services.sizing.calculators.position_sizing import derive
from src.domain.services.sizing.input_parser import (
    normalize_field_name,
    parse_direction,
    parse_field,
)
from src.models.sizing import SizingInputs, SizingResult
from src.utils.logging_setup import get_logger
from src.utils.trace_context import new_recalc

logger = get_logger(__name__)

ResultListener = Callable[[SizingResult], None]


class SizingSession:
    """
    Recompute-on-write container around the derivation function.

    The result is replaced wholesale on each recomputation, never merged.
    Listeners are called synchronously with the new result after every
    write, in subscription order.
    """

    def __init__(self, defaults: Optional[SizingInputs] = None):
        """
        Initialize a session.

        Args:
            defaults: Starting inputs, also restored by reset().
                SizingInputs() when omitted.
        """
        self._defaults = defaults if defaults is not None else SizingInputs()
        self._inputs = self._defaults
        self._listeners: List[ResultListener] = []
        self._result = derive(self._inputs)

    @property
    def inputs(self) -> SizingInputs:
        return self._inputs

    @property
    def result(self) -> SizingResult:
        return self._result

    @property
    def defaults(self) -> SizingInputs:
        return self._defaults

    def update(self, field: str, value: Any) -> SizingResult:
        """
        Replace one input field and recompute.

        Numeric values are stored as floats without coercion, so NaN or
        infinite values reach the calculator unchanged.

        Args:
            field: Input field name (snake_case or camelCase).
            value: New value; a Direction or its text for "direction".

        Returns:
            The recomputed result.

        Raises:
            UnknownFieldError: If the field is not an input field.
            InvalidDirectionError: For an unrecognized direction.
        """
        return self.update_many(**{field: value})

    def update_many(self, **fields: Any) -> SizingResult:
        """Replace several input fields at once and recompute once."""
        changes = {}
        for field, value in fields.items():
            name = normalize_field_name(field)
            if name not in SizingInputs.field_names():
                raise UnknownFieldError([field])
            changes[name] = parse_direction(value) if name == "direction" else float(value)

        self._inputs = self._inputs.with_update(**changes)
        return self._recompute()

    def update_raw(self, field: str, text: str) -> SizingResult:
        """
        Replace one input field from raw user text and recompute.

        Unparsable numbers become 0.0.

        Raises:
            UnknownFieldError: If the field is not an input field.
            InvalidDirectionError: For an unrecognized direction.
        """
        name = normalize_field_name(field)
        value = parse_field(field, text)
        self._inputs = self._inputs.with_update(**{name: value})
        return self._recompute()

    def reset(self) -> SizingResult:
        """Restore the default inputs and recompute."""
        self._inputs = self._defaults
        return self._recompute()

    def subscribe(self, listener: ResultListener) -> None:
        """Register a listener called with each new result."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: ResultListener) -> None:
        """Remove a previously registered listener."""
        try:
            self._listeners.remove(listener)
        except ValueError:
            logger.warning("Listener not found in sizing session")

    def _recompute(self) -> SizingResult:
        with new_recalc():
            self._result = derive(self._inputs)
            logger.debug(
                "Recalculated sizing",
                extra={"data": {"inputs": self._inputs.to_dict()}},
            )

            for listener in list(self._listeners):
                try:
                    listener(self._result)
                except Exception as e:
                    logger.error(f"Error in sizing listener: {e}", exc_info=True)

        return self._result
