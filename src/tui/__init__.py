"""Presentation layer - Terminal UI using Textual and Rich."""

from .app import SizingCalculatorApp

__all__ = ["SizingCalculatorApp"]
