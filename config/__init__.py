"""Configuration management."""

from .config_manager import ConfigManager, default_inputs
from .models import AppConfig

__all__ = ["ConfigManager", "AppConfig", "default_inputs"]
