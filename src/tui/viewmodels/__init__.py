"""
Framework-agnostic ViewModels.

ViewModels format domain results for display and compute which fields
changed. They never import Textual.
"""

from .sizing_vm import (
    ALL_ROWS,
    INPUT_FIELDS,
    KEY_METRICS,
    SECTIONS,
    MetricRow,
    SizingViewModel,
    format_input,
)

__all__ = [
    "SizingViewModel",
    "MetricRow",
    "SECTIONS",
    "KEY_METRICS",
    "ALL_ROWS",
    "INPUT_FIELDS",
    "format_input",
]
