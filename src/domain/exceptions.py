"""
Domain exceptions for the position sizing calculator.

Distinguishes recoverable boundary errors (bad user input, unreadable input
files) from fatal errors (broken configuration) that stop the program.
The derivation engine itself never raises.
"""

from typing import Iterable


class SizerError(Exception):
    """Base class for all sizer domain exceptions."""
    pass


class InputError(SizerError):
    """
    Errors caused by user-supplied input that the caller can recover from.

    Examples:
    - Unrecognized trade direction
    - Unknown input field name
    - Missing or malformed inputs file
    """
    pass


class FatalError(SizerError):
    """
    Critical errors requiring the program to stop.

    Examples:
    - Invalid configuration
    - Missing base configuration file
    """
    pass


class InvalidDirectionError(InputError, ValueError):
    """Trade direction is neither Long nor Short."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Invalid trade direction: {value!r} (expected 'Long' or 'Short')")


class UnknownFieldError(InputError, KeyError):
    """An input field name is not part of the input record."""

    def __init__(self, names: Iterable[str]):
        self.names = list(names)
        super().__init__(f"Unknown input field(s): {', '.join(str(n) for n in self.names)}")

    def __str__(self) -> str:
        return self.args[0]


class InputFileError(InputError):
    """Inputs file missing or not in the expected shape."""
    pass


class ConfigurationError(FatalError):
    """Invalid application configuration."""
    pass
