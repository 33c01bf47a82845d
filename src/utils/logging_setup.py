"""
Logging setup with categories, recalc ID correlation and optional file output.

Provides:
- 3 log categories: system, calc, ui
- Automatic module -> category routing
- Recalc ID correlation in all logs
- Per-category JSON log files (written off-thread via QueueListener)
- Colored console output on stderr
- Configurable timezone for log timestamps

Categories:
- system: Startup, config loading, CLI, errors
- calc: Input parsing, recalculations, session listeners
- ui: Terminal calculator events
"""

from __future__ import annotations

import json
import logging
import logging.handlers
import os
import re
import sys
from datetime import datetime
from pathlib import Path
from queue import Queue
from typing import Dict, List, Optional
from zoneinfo import ZoneInfo

from .trace_context import get_recalc_id

# =============================================================================
# GLOBAL STATE
# =============================================================================

# Run number for this session (determined at first setup)
_session_run_number: Optional[int] = None

# Timezone for log timestamps (None = local time)
_log_timezone: Optional[ZoneInfo] = None

_verbose_mode: bool = False
_console_enabled: bool = False
_log_level_override: Optional[str] = None

_category_loggers: Dict[str, logging.Logger] = {}

# One listener per category when file logging is on
_queue_listeners: List[logging.handlers.QueueListener] = []

# =============================================================================
# LOG CATEGORIES AND ROUTING
# =============================================================================

LOGGER_PREFIX = "sizer"

CATEGORIES = ["system", "calc", "ui"]

CATEGORY_SUFFIXES = {
    "system": "sys",
    "calc": "clc",
    "ui": "ui",
}

# Module path -> category routing
# More specific paths should come first
MODULE_ROUTING: List[tuple[str, str]] = [
    ("src.domain.services.sizing", "calc"),
    ("src.models", "calc"),
    ("src.tui", "ui"),
    ("config", "system"),
    ("src", "system"),
]


def get_category_for_module(module_name: str) -> str:
    """
    Determine the log category for a given module name.

    Args:
        module_name: Full module path (e.g., "src.domain.services.sizing.state").

    Returns:
        Category name (system, calc or ui).
    """
    for prefix, category in MODULE_ROUTING:
        if module_name == prefix or module_name.startswith(prefix + "."):
            return category
    return "system"


# =============================================================================
# TIMEZONE SUPPORT
# =============================================================================

def set_log_timezone(tz: Optional[str] = None) -> None:
    """
    Set the timezone for log timestamps.

    Args:
        tz: Timezone name (e.g., "UTC", "Europe/London"). None or "local"
            uses local system time.
    """
    global _log_timezone
    if tz is None or tz == "local":
        _log_timezone = None
    else:
        _log_timezone = ZoneInfo(tz)


def get_log_timezone() -> Optional[ZoneInfo]:
    """Get the current log timezone setting."""
    return _log_timezone


def get_current_timestamp() -> str:
    """ISO timestamp in the configured log timezone."""
    if _log_timezone is not None:
        return datetime.now(_log_timezone).isoformat()
    return datetime.now().isoformat()


# =============================================================================
# GLOBAL CONFIGURATION
# =============================================================================

def set_verbose_mode(enabled: bool) -> None:
    """Enable or disable verbose mode (DEBUG level logging)."""
    global _verbose_mode
    _verbose_mode = enabled


def is_verbose_mode() -> bool:
    return _verbose_mode


def set_console_enabled(enabled: bool) -> None:
    """Enable or disable console output."""
    global _console_enabled
    _console_enabled = enabled


def is_console_enabled() -> bool:
    return _console_enabled


def set_log_level_override(level: Optional[str]) -> None:
    """Set a global log level override."""
    global _log_level_override
    _log_level_override = level.upper() if level else None


def get_effective_log_level() -> str:
    """Get the effective log level (verbose mode wins over overrides)."""
    if _verbose_mode:
        return "DEBUG"
    if _log_level_override:
        return _log_level_override
    return "INFO"


# =============================================================================
# FORMATTERS
# =============================================================================

class RecalcIdFilter(logging.Filter):
    """Stamp the recalc ID on the record in the thread that emits it."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "recalc_id"):
            record.recalc_id = get_recalc_id()
        return True


def _record_recalc_id(record: logging.LogRecord) -> str:
    return getattr(record, "recalc_id", None) or get_recalc_id()


class JSONFormatter(logging.Formatter):
    """
    Single-line JSON formatter with recalc ID.

    Fields: ts, level, cat, recalc, msg, plus data/exception when present.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "ts": get_current_timestamp(),
            "level": record.levelname,
            "cat": self._get_category(record.name),
            "recalc": _record_recalc_id(record),
            "msg": record.getMessage(),
        }

        if hasattr(record, "data") and record.data:
            log_entry["data"] = record.data

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)

    def _get_category(self, logger_name: str) -> str:
        """Extract category from logger name."""
        if logger_name.startswith(f"{LOGGER_PREFIX}."):
            parts = logger_name.split(".")
            if len(parts) >= 2 and parts[1] in CATEGORIES:
                return parts[1]
        return "system"


class ConsoleFormatter(logging.Formatter):
    """
    Console formatter with recalc ID and color support.

    Format: [LEVEL] [recalc] message
    """

    COLORS = {
        "DEBUG": "\033[36m",     # Cyan
        "INFO": "\033[32m",      # Green
        "WARNING": "\033[33m",   # Yellow
        "ERROR": "\033[31m",     # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        recalc_id = _record_recalc_id(record)
        level = record.levelname
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"

        if self.use_colors:
            color = self.COLORS.get(level, "")
            return f"{color}[{level:7}]{self.RESET} [{recalc_id}] {message}"
        return f"[{level:7}] [{recalc_id}] {message}"


# =============================================================================
# LOGGER FACTORY
# =============================================================================

def get_logger(module_name: str) -> logging.Logger:
    """
    Get a logger for the given module, routed to its category.

    Args:
        module_name: Module name (typically __name__).

    Returns:
        The category logger for the module.

    Example:
        from src.utils.logging_setup import get_logger
        logger = get_logger(__name__)
        logger.info("Recalculating...")
    """
    category = get_category_for_module(module_name)
    return logging.getLogger(f"{LOGGER_PREFIX}.{category}")


# =============================================================================
# RUN NUMBER MANAGEMENT
# =============================================================================

def _get_next_run_number(log_dir: str, env: str, date_str: str) -> int:
    """Find the next available run number for today's date."""
    log_path = Path(log_dir) / date_str
    if not log_path.exists():
        return 1

    # Pattern: sizer_{env}_{suffix}_{date}_{N}.log
    suffixes = "|".join(CATEGORY_SUFFIXES.values())
    pattern = re.compile(
        rf'^sizer_{re.escape(env)}_(?:{suffixes})_{re.escape(date_str)}_(\d+)\.log$'
    )

    max_num = 0
    for filename in os.listdir(log_path):
        match = pattern.match(filename)
        if match:
            max_num = max(max_num, int(match.group(1)))

    return max_num + 1


def _get_session_run_number(log_dir: str, env: str) -> int:
    """Get or initialize the session run number."""
    global _session_run_number

    if _session_run_number is None:
        date_str = datetime.now().strftime('%Y-%m-%d')
        _session_run_number = _get_next_run_number(log_dir, env, date_str)

    return _session_run_number


def reset_session_run_number() -> None:
    """Reset the session run number (for testing)."""
    global _session_run_number
    _session_run_number = None


# =============================================================================
# CATEGORY LOGGING SETUP
# =============================================================================

def setup_category_logging(
    env: str,
    log_dir: str = "./logs",
    level: str = "INFO",
    console: bool = True,
    verbose: bool = False,
    to_file: bool = False,
) -> Dict[str, logging.Logger]:
    """
    Configure one logger per category.

    With to_file, creates JSON log files in a date-specific subdirectory:
    - logs/{date}/sizer_{env}_sys_{date}_{run}.log - System events
    - logs/{date}/sizer_{env}_clc_{date}_{run}.log - Calculation events
    - logs/{date}/sizer_{env}_ui_{date}_{run}.log - Terminal UI events

    Args:
        env: Environment name (dev/prod).
        log_dir: Base directory for log files.
        level: Default logging level.
        console: Enable console output on stderr.
        verbose: Enable verbose (DEBUG) mode.
        to_file: Write per-category JSON log files.

    Returns:
        Dict mapping category name to logger.
    """
    shutdown_logging()

    for category in CATEGORIES:
        logger = logging.getLogger(f"{LOGGER_PREFIX}.{category}")
        for handler in logger.handlers[:]:
            handler.close()
            logger.removeHandler(handler)

    set_verbose_mode(verbose)
    set_console_enabled(console)
    if not verbose:
        set_log_level_override(level)

    effective_level = getattr(logging, get_effective_log_level(), logging.INFO)

    log_path: Optional[Path] = None
    run_number = 0
    date_str = datetime.now().strftime('%Y-%m-%d')
    if to_file:
        log_path = Path(log_dir) / date_str
        log_path.mkdir(parents=True, exist_ok=True)
        run_number = _get_session_run_number(log_dir, env)

    for category in CATEGORIES:
        logger = logging.getLogger(f"{LOGGER_PREFIX}.{category}")
        logger.setLevel(effective_level)
        logger.propagate = False

        if log_path is not None:
            suffix = CATEGORY_SUFFIXES[category]
            filename = f"sizer_{env}_{suffix}_{date_str}_{run_number}.log"
            file_handler = logging.FileHandler(
                filename=str(log_path / filename),
                mode='a',
                encoding='utf-8',
            )
            file_handler.setFormatter(JSONFormatter())
            file_handler.setLevel(effective_level)

            # File writes happen on the listener thread
            log_queue: Queue = Queue(-1)
            queue_handler = logging.handlers.QueueHandler(log_queue)
            queue_handler.addFilter(RecalcIdFilter())
            logger.addHandler(queue_handler)
            listener = logging.handlers.QueueListener(
                log_queue, file_handler, respect_handler_level=True
            )
            listener.start()
            _queue_listeners.append(listener)

        if console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setFormatter(ConsoleFormatter(use_colors=sys.stderr.isatty()))
            console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
            logger.addHandler(console_handler)

        _category_loggers[category] = logger

    return _category_loggers


def get_category_loggers() -> Dict[str, logging.Logger]:
    """Get all configured category loggers."""
    return _category_loggers


def flush_all_loggers() -> None:
    """Flush all handlers so pending log lines reach their destination."""
    for category in CATEGORIES:
        logger = logging.getLogger(f"{LOGGER_PREFIX}.{category}")
        for handler in logger.handlers:
            handler.flush()


def shutdown_logging() -> None:
    """Stop all queue listeners (call during application shutdown)."""
    for listener in _queue_listeners:
        listener.stop()
    _queue_listeners.clear()
