"""
Input parsing at the user boundary.

Raw text from the CLI, the terminal form or an inputs file is turned into
numbers here, before anything reaches the calculator. Numeric parsing never
fails: text that does not start with a number becomes 0.0, matching how a
browser number field treats `parseFloat(text) || 0`.
"""

from __future__ import annotations

import math
import re
from typing import Any, Dict, Mapping, Optional, Union

from src.domain.exceptions import InvalidDirectionError, UnknownFieldError
from src.models.sizing import Direction, SizingInputs
from src.utils.logging_setup import get_logger

logger = get_logger(__name__)

# Longest numeric prefix: optional sign, then Infinity or a decimal literal
_NUMBER_PREFIX = re.compile(r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

# Accepted spellings for input fields (camelCase as used by the web form)
FIELD_ALIASES: Dict[str, str] = {
    "actualPrice": "actual_price",
    "leveragePrice": "leverage_price",
    "priceHigh": "price_high",
    "priceLow": "price_low",
    "initialCapital": "initial_capital",
    "takeProfitPercent": "take_profit_percent",
    "positionSize": "position_size",
    "lossesFactor": "losses_factor",
}

NUMERIC_FIELDS = tuple(name for name in SizingInputs.field_names() if name != "direction")


def parse_number(value: Union[str, int, float, None]) -> float:
    """
    Coerce raw input into a float.

    Args:
        value: Raw text or a number. None counts as empty.

    Returns:
        Parsed value; 0.0 for empty, unparsable or NaN input.

    Example:
        >>> parse_number("12.5abc")
        12.5
        >>> parse_number("abc")
        0.0
    """
    if value is None:
        return 0.0

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        number = float(value)
    else:
        text = str(value).lstrip()
        match = _NUMBER_PREFIX.match(text)
        if match is None:
            if text:
                logger.debug(f"Unparsable number {value!r} coerced to 0")
            return 0.0
        number = float(match.group(0))

    if math.isnan(number) or number == 0:
        return 0.0
    return number


def parse_direction(value: Union[str, Direction]) -> Direction:
    """
    Parse a trade direction.

    Case-insensitive; surrounding whitespace is ignored.

    Raises:
        InvalidDirectionError: If the value is neither Long nor Short.
    """
    if isinstance(value, Direction):
        return value

    if isinstance(value, str):
        normalized = value.strip().lower()
        for direction in Direction:
            if direction.value.lower() == normalized:
                return direction

    raise InvalidDirectionError(value)


def normalize_field_name(name: str) -> str:
    """Map a camelCase or snake_case field name to the input record name."""
    return FIELD_ALIASES.get(name, name)


def parse_field(field: str, value: Any) -> Union[float, Direction]:
    """
    Parse one raw value for the named input field.

    Raises:
        UnknownFieldError: If the field is not an input field.
        InvalidDirectionError: For an unrecognized direction.
    """
    name = normalize_field_name(field)
    if name == "direction":
        return parse_direction(value)
    if name not in NUMERIC_FIELDS:
        raise UnknownFieldError([field])
    return parse_number(value)


def parse_inputs(
    raw: Mapping[str, Any],
    defaults: Optional[SizingInputs] = None,
) -> SizingInputs:
    """
    Build an input record from a mapping of raw values.

    Missing fields keep their value from defaults.

    Args:
        raw: Field name (camelCase or snake_case) to raw value.
        defaults: Base record; SizingInputs() when omitted.

    Returns:
        New SizingInputs.

    Raises:
        UnknownFieldError: If any key is not an input field.
        InvalidDirectionError: For an unrecognized direction.
    """
    base = defaults if defaults is not None else SizingInputs()

    unknown = [key for key in raw if normalize_field_name(key) not in SizingInputs.field_names()]
    if unknown:
        raise UnknownFieldError(unknown)

    changes = {normalize_field_name(key): parse_field(key, value) for key, value in raw.items()}
    return base.with_update(**changes)
