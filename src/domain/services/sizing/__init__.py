"""Position sizing services: calculator, input parsing and session state."""

from .calculators import derive
from .input_parser import parse_direction, parse_field, parse_inputs, parse_number
from .state import SizingSession

__all__ = [
    "derive",
    "parse_number",
    "parse_direction",
    "parse_field",
    "parse_inputs",
    "SizingSession",
]
