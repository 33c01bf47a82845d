"""Panel rendering modules for one-shot terminal output."""

from .sizing import render_key_metrics, render_sizing_panel

__all__ = [
    "render_sizing_panel",
    "render_key_metrics",
]
