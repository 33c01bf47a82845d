"""
Configuration manager with environment-based loading.

Supports:
- Base configuration (base.yaml, shipped next to this module)
- Environment-specific overrides (dev.yaml, prod.yaml)
- An extra override file given on the command line
"""

from __future__ import annotations
from pathlib import Path
from typing import Dict, Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
import yaml

from src.domain.exceptions import ConfigurationError
from src.domain.services.sizing.input_parser import parse_direction
from src.models.sizing import SizingInputs
from src.utils.logging_setup import get_logger
from .models import (
    AppConfig,
    SizingDefaultsConfig,
    DisplayConfig,
    LoggingConfig,
)


logger = get_logger(__name__)

DEFAULT_CONFIG_DIR = Path(__file__).resolve().parent

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigManager:
    """
    Configuration manager with environment support.

    Loads configuration in this order:
    1. base.yaml (default config)
    2. {env}.yaml (environment-specific, e.g., dev.yaml)
    3. extra file passed to load() (e.g., --config custom.yaml)

    Later configs override earlier ones.
    """

    def __init__(self, config_dir: str | Path = DEFAULT_CONFIG_DIR, env: str = "dev"):
        """
        Initialize config manager.

        Args:
            config_dir: Directory containing config files.
            env: Environment name (dev, prod, etc).
        """
        self.config_dir = Path(config_dir)
        self.env = env
        self.config: Dict[str, Any] = {}

    def load(self, extra_path: Optional[str | Path] = None) -> AppConfig:
        """
        Load configuration from YAML files.

        Args:
            extra_path: Optional override file applied last.

        Returns:
            AppConfig object.

        Raises:
            ConfigurationError: If a config file is missing, unreadable or invalid.
        """
        base_path = self.config_dir / "base.yaml"
        if not base_path.exists():
            raise ConfigurationError(f"Base config not found: {base_path}")

        self.config = self._load_yaml(base_path)
        logger.info(f"Loaded base config from {base_path}")

        env_path = self.config_dir / f"{self.env}.yaml"
        if env_path.exists():
            self.config = self._merge_dicts(self.config, self._load_yaml(env_path))
            logger.info(f"Loaded {self.env} config from {env_path}")

        if extra_path is not None:
            extra = Path(extra_path)
            if not extra.exists():
                raise ConfigurationError(f"Config file not found: {extra}")
            self.config = self._merge_dicts(self.config, self._load_yaml(extra))
            logger.info(f"Loaded override config from {extra}")

        return self._parse_config()

    def _load_yaml(self, path: Path) -> Dict[str, Any]:
        """Load YAML file."""
        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping")
        return data

    def _merge_dicts(self, base: Dict, override: Dict) -> Dict:
        """Deep merge two dicts (override wins)."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_dicts(result[key], value)
            else:
                result[key] = value
        return result

    def _parse_config(self) -> AppConfig:
        """Parse raw dict into AppConfig."""
        try:
            defaults_raw = self.config.get("defaults", {})
            defaults = SizingDefaultsConfig(
                take_profit_percent=float(defaults_raw.get("take_profit_percent", 0.33)),
                losses_factor=float(defaults_raw.get("losses_factor", 1.0)),
                direction=parse_direction(defaults_raw.get("direction", "Long")).value,
            )

            display_raw = self.config.get("display", {})
            display = DisplayConfig(
                decimals=int(display_raw.get("decimals", 2)),
            )
            if display.decimals < 0:
                raise ValueError("display.decimals must be >= 0")

            logging_raw = self.config.get("logging", {})
            logging_config = LoggingConfig(
                level=str(logging_raw.get("level", "INFO")).upper(),
                to_file=bool(logging_raw.get("to_file", False)),
                log_dir=str(logging_raw.get("log_dir", "./logs")),
                timezone=str(logging_raw.get("timezone", "local")),
            )
            if logging_config.level not in VALID_LOG_LEVELS:
                raise ValueError(f"logging.level must be one of {', '.join(VALID_LOG_LEVELS)}")
            if logging_config.timezone != "local":
                try:
                    ZoneInfo(logging_config.timezone)
                except ZoneInfoNotFoundError:
                    raise ValueError(f"Unknown logging.timezone: {logging_config.timezone}")

            return AppConfig(
                defaults=defaults,
                display=display,
                logging=logging_config,
                raw=self.config,
            )

        except (TypeError, ValueError, AttributeError) as e:
            raise ConfigurationError(f"Failed to parse config: {e}") from e


def default_inputs(config: AppConfig) -> SizingInputs:
    """Starting input record for a session built from configured defaults."""
    return SizingInputs(
        take_profit_percent=config.defaults.take_profit_percent,
        losses_factor=config.defaults.losses_factor,
        direction=parse_direction(config.defaults.direction),
    )
