"""
Pure calculation functions for position sizing.

The calculator is a stateless, pure function that takes an immutable input
record and returns an immutable result. Callers re-invoke it after every
input change.

Modules:
- position_sizing: leverage, notional, capital and drawdown metrics
"""

from .position_sizing import derive

__all__ = ["derive"]
