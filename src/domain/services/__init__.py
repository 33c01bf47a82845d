"""Domain services - core business logic."""

from src.domain.services.sizing import SizingSession, derive, parse_inputs

__all__ = [
    "derive",
    "parse_inputs",
    "SizingSession",
]
