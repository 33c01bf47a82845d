"""Configuration data models."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Any


@dataclass
class SizingDefaultsConfig:
    """Starting values for a new calculator session."""
    take_profit_percent: float
    losses_factor: float
    direction: str


@dataclass
class DisplayConfig:
    """Output formatting configuration."""
    decimals: int


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str
    to_file: bool  # Per-category JSON files under log_dir
    log_dir: str
    timezone: str  # Timezone for log timestamps (e.g., "UTC" or "local")


@dataclass
class AppConfig:
    """Complete application configuration."""
    defaults: SizingDefaultsConfig
    display: DisplayConfig
    logging: LoggingConfig
    raw: Dict[str, Any]  # Merged raw config dict
