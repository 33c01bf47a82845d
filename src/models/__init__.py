"""Data models for the position sizing calculator."""

from .sizing import (
    DEFAULT_LOSSES_FACTOR,
    DEFAULT_TAKE_PROFIT_PERCENT,
    Direction,
    SizingInputs,
    SizingResult,
)

__all__ = [
    "Direction",
    "SizingInputs",
    "SizingResult",
    "DEFAULT_TAKE_PROFIT_PERCENT",
    "DEFAULT_LOSSES_FACTOR",
]
