"""Infrastructure adapters for external input sources."""

from .scenario_loader import Scenario, ScenarioFileLoader

__all__ = ["Scenario", "ScenarioFileLoader"]
