"""
Textual widgets for the sizing calculator.
"""

from .input_form import SizingInputForm
from .sizing_panel import SizingResultsPanel

__all__ = [
    "SizingInputForm",
    "SizingResultsPanel",
]
