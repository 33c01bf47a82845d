"""
Trace context for correlating logs across a single recalculation.

Every input edit triggers one full recalculation; each gets a short
recalc ID so the parse, derive and listener log lines of that edit can be
grouped together.

Usage:
    with new_recalc() as recalc_id:
        result = derive(inputs)
        notify(result)

    # In any module
    from src.utils.trace_context import get_recalc_id
"""

from __future__ import annotations

import secrets
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Generator, Optional

_recalc_id: ContextVar[Optional[str]] = ContextVar("recalc_id", default=None)

# Recalculations started in this process
_recalc_counter: int = 0


def generate_recalc_id() -> str:
    """Generate a 6-character hex recalc ID (e.g., "a7f3b2")."""
    return secrets.token_hex(3)


def get_recalc_id() -> str:
    """
    Get the current recalc ID.

    Returns:
        Current recalc ID, or "------" outside a recalculation.
    """
    recalc_id = _recalc_id.get()
    return recalc_id if recalc_id else "------"


@contextmanager
def new_recalc() -> Generator[str, None, None]:
    """
    Run a block under a fresh recalc ID.

    The previous ID (if any) is restored on exit.

    Yields:
        The new recalc ID.
    """
    global _recalc_counter
    _recalc_counter += 1

    recalc_id = generate_recalc_id()
    token = _recalc_id.set(recalc_id)
    try:
        yield recalc_id
    finally:
        _recalc_id.reset(token)


def get_recalc_counter() -> int:
    """Total number of recalculations started in this process."""
    return _recalc_counter


def reset_recalc_counter() -> None:
    """Reset the recalc counter (for testing)."""
    global _recalc_counter
    _recalc_counter = 0
