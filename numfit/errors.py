"""
Numfit error taxonomy.

All errors derive from ValueError so that callers catching ValueError keep working,
and from NumfitError so that numfit failures can be caught as a group.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any, Literal


# Classes --------------------------------------------------------------------------------------------------------------

class NumfitError(Exception):
    """Base class for all numfit errors."""


class InvalidInputError(NumfitError, ValueError):
    """
    Raised when a value is not a finite number or numeric string.

    Attributes:
        value: The rejected input.
    """

    def __init__(self, message: str, value: Any = None):
        super().__init__(message)
        self.value = value


class InvalidUnitError(NumfitError, ValueError):
    """Raised when a unit family is absent from the unit map."""

    def __init__(self, unit: Any):
        super().__init__(f"Invalid unit: {unit}")
        self.unit = unit


class InvalidSuffixError(NumfitError, ValueError):
    """
    Raised when a 'from' or 'to' suffix is absent from the unit ladder.

    Attributes:
        direction: Either "from" or "to".
        suffix: The rejected suffix, None when the ladder has no suffix at its base index.
    """

    def __init__(self, direction: Literal["from", "to"], suffix: str | None):
        super().__init__(f"Invalid {direction} suffix: {suffix}")
        self.direction = direction
        self.suffix = suffix


class UnknownOptimizerError(NumfitError, ValueError):
    """Raised when a unit optimizer token is not recognized."""

    def __init__(self, optimizer: Any):
        super().__init__(f"Unknown optimizer: {optimizer}")
        self.optimizer = optimizer
