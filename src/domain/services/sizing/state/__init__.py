"""
State management for interactive sizing.

- SizingSession: holds the current inputs and recomputes the full result
  after every write (recompute-on-write).
"""

from .sizing_session import ResultListener, SizingSession

__all__ = ["SizingSession", "ResultListener"]
