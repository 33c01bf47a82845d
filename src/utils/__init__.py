"""Utility modules."""

from .logging_setup import (
    setup_category_logging,
    flush_all_loggers,
    shutdown_logging,
    reset_session_run_number,
    set_log_timezone,
    get_log_timezone,
    get_current_timestamp,
    get_logger,
    set_verbose_mode,
    set_console_enabled,
    is_verbose_mode,
    is_console_enabled,
)
from .trace_context import (
    get_recalc_id,
    new_recalc,
    generate_recalc_id,
    get_recalc_counter,
    reset_recalc_counter,
)

__all__ = [
    # Logging setup
    "setup_category_logging",
    "flush_all_loggers",
    "shutdown_logging",
    "reset_session_run_number",
    "set_log_timezone",
    "get_log_timezone",
    "get_current_timestamp",
    "get_logger",
    "set_verbose_mode",
    "set_console_enabled",
    "is_verbose_mode",
    "is_console_enabled",
    # Trace context
    "get_recalc_id",
    "new_recalc",
    "generate_recalc_id",
    "get_recalc_counter",
    "reset_recalc_counter",
]
