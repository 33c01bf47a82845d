"""
Formatting utilities for sizing output.

Formatting happens only at display time; stored results keep full float
precision. Non-finite values (NaN, Infinity) render as a zero placeholder
instead of raising.
"""

from __future__ import annotations

import math


def format_number(value: float | None, decimals: int = 2) -> str:
    """
    Format a number with fixed decimal places.

    Args:
        value: The number to format (or None).
        decimals: Number of decimal places.

    Returns:
        Fixed-point string; "0.00" (for 2 decimals) when value is None,
        NaN or infinite.
    """
    if value is None or not math.isfinite(value):
        return f"{0:.{decimals}f}"
    return f"{value:.{decimals}f}"


def format_percentage(value: float | None, decimals: int = 2) -> str:
    """Format a value that is already in percent, e.g. 50.0 -> "50.00%"."""
    return f"{format_number(value, decimals)}%"


def format_fraction_as_percentage(value: float | None, decimals: int = 2) -> str:
    """Format a fraction as percent, e.g. 0.0033 -> "0.33%"."""
    if value is None:
        return format_percentage(None, decimals)
    return format_percentage(value * 100, decimals)


def format_leverage(value: float | None, decimals: int = 2) -> str:
    """Format a leverage ratio, e.g. 10.0 -> "10.00x"."""
    return f"{format_number(value, decimals)}x"
