"""Pytest configuration and fixtures."""

import logging

import pytest

from src.domain.services.sizing.state import SizingSession
from src.models.sizing import Direction, SizingInputs
from src.utils.logging_setup import CATEGORIES, LOGGER_PREFIX, shutdown_logging


@pytest.fixture
def btc_long_inputs() -> SizingInputs:
    """Reference long scenario: 10x leverage, 1 unit at 50k, 10k capital."""
    return SizingInputs(
        actual_price=100.0,
        leverage_price=10.0,
        price_high=50_000.0,
        price_low=49_000.0,
        direction=Direction.LONG,
        initial_capital=10_000.0,
        take_profit_percent=0.33,
        position_size=1.0,
        losses_factor=2.0,
    )


@pytest.fixture
def session() -> SizingSession:
    """Session started from application defaults."""
    return SizingSession()


@pytest.fixture(autouse=True)
def reset_sizer_loggers():
    """Undo category logging setup so handlers never leak between tests."""
    yield
    shutdown_logging()
    for category in CATEGORIES:
        logger = logging.getLogger(f"{LOGGER_PREFIX}.{category}")
        for handler in logger.handlers[:]:
            handler.close()
            logger.removeHandler(handler)
        logger.propagate = True
        logger.setLevel(logging.NOTSET)
