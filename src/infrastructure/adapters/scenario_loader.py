"""
Scenario file loader for batch sizing runs.

Reads one or more input records from a YAML file so the CLI can derive
several what-if scenarios in one call.
"""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional

import yaml

from ...domain.exceptions import InputError, InputFileError
from ...domain.services.sizing.input_parser import parse_inputs
from ...models.sizing import SizingInputs
from ...utils.logging_setup import get_logger


logger = get_logger(__name__)


@dataclass(frozen=True)
class Scenario:
    """A named input record loaded from file."""

    name: str
    inputs: SizingInputs


class ScenarioFileLoader:
    """
    YAML scenario loader.

    Accepted layouts:
    ```yaml
    # A single mapping
    actualPrice: 100
    leveragePrice: 10
    priceHigh: 50000

    # A list of mappings
    - name: btc-long
      price_high: 50000
    - name: btc-short
      price_high: 50000
      direction: Short

    # A list under a "scenarios" key
    scenarios:
      - name: btc-long
        price_high: 50000
    ```

    Field names may be camelCase or snake_case. Values are parsed like
    form input (unparsable numbers become 0). Missing fields fall back
    to the defaults passed to load().
    """

    def __init__(self, file_path: str | Path):
        """
        Initialize scenario loader.

        Args:
            file_path: Path to YAML scenario file.
        """
        self.file_path = Path(file_path)

    def load(self, defaults: Optional[SizingInputs] = None) -> List[Scenario]:
        """
        Load all scenarios from the file.

        Args:
            defaults: Base input record for fields a scenario leaves out.

        Returns:
            Scenarios in file order. Unnamed ones are named "scenario-N".

        Raises:
            InputFileError: If the file is missing, not valid YAML or has
                the wrong shape.
            InputError: If a scenario has an unknown field or an invalid
                direction.
        """
        try:
            with open(self.file_path, "r") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError:
            raise InputFileError(f"Scenario file not found: {self.file_path}")
        except yaml.YAMLError as e:
            raise InputFileError(f"Invalid YAML in {self.file_path}: {e}")

        entries = self._entries(data)

        scenarios = []
        for index, entry in enumerate(entries, start=1):
            scenarios.append(self._parse_scenario(entry, index, defaults))

        logger.info(f"Loaded {len(scenarios)} scenario(s) from {self.file_path}")
        return scenarios

    def _entries(self, data: Any) -> List[Any]:
        """Normalize the file content to a list of raw scenario entries."""
        if isinstance(data, dict) and "scenarios" in data:
            data = data["scenarios"]
        if isinstance(data, dict):
            return [data]
        if isinstance(data, list) and data:
            return data
        raise InputFileError(
            f"Scenario file {self.file_path} must contain a mapping or a non-empty list of mappings"
        )

    def _parse_scenario(
        self,
        entry: Any,
        index: int,
        defaults: Optional[SizingInputs],
    ) -> Scenario:
        if not isinstance(entry, dict):
            raise InputFileError(f"Scenario #{index} in {self.file_path} is not a mapping")

        bad_keys = [key for key in entry if not isinstance(key, str)]
        if bad_keys:
            raise InputFileError(
                f"Scenario #{index} in {self.file_path} has non-text field names: "
                f"{', '.join(repr(key) for key in bad_keys)}"
            )

        raw = dict(entry)
        name = str(raw.pop("name", f"scenario-{index}"))
        try:
            inputs = parse_inputs(raw, defaults)
        except InputError:
            logger.error(f"Invalid scenario {name!r} in {self.file_path}")
            raise

        return Scenario(name=name, inputs=inputs)
