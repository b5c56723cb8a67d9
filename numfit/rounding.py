"""
Deterministic decimal rounding: half away from zero and banker's (half to even).

Both strategies correct binary floating-point drift before rounding, so that values like
2.135 (stored as 2.13499999...) round as their decimal notation suggests.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import math
from enum import StrEnum, unique
from typing import Any, Callable

# Local ----------------------------------------------------------------------------------------------------------------
from .numeric import check_numeric_input, significant_digit_index


# @formatter:off

class RoundConf:
    """
    Rounding engine constants.

    Attributes:
        DEFAULT_PRECISION: Decimal places used when precision is not given.
        DRIFT_DECIMALS: Scaled values are rounded to this many decimals before the final rounding,
            this removes representation error like 2.135 * 100 == 213.49999999999997.
        TIE_TOLERANCE: Fractional parts within this distance of 0.5 are treated as exact ties.
    """
    DEFAULT_PRECISION = 1
    DRIFT_DECIMALS = 8
    TIE_TOLERANCE = 1e-8

# @formatter:on


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class RoundMethod(StrEnum):
    """
    Rounding strategies.

    Attributes:
        HALF_AWAY_FROM_ZERO: Commercial rounding, 2.5 → 3 and -2.5 → -3
        BANKERS: Round half to even, 2.5 → 2 and 3.5 → 4
    """
    HALF_AWAY_FROM_ZERO = "halfAwayFromZero"
    BANKERS = "bankersRound"


# Methods --------------------------------------------------------------------------------------------------------------

def round_half_away_from_zero(value: Any, *, precision: int = RoundConf.DEFAULT_PRECISION) -> float:
    """
    Round a number half away from zero at the given decimal precision.

    Ties always move away from zero regardless of sign, unlike Python's round() which
    rounds ties to even.

    Args:
        value: Number or numeric string.
        precision: Decimal places to keep, 0 rounds to integer.

    Returns:
        float: The rounded value.

    Raises:
        InvalidInputError: If value is not a finite number or numeric string.
        TypeError: If precision is not an int.

    Examples:
        >>> round_half_away_from_zero(2.5, precision=0)
        3.0
        >>> round_half_away_from_zero(-2.5, precision=0)
        -3.0
        >>> round_half_away_from_zero(2.135, precision=2)
        2.14
        >>> round_half_away_from_zero("3.14159", precision=2)
        3.14
    """
    _validate_precision(precision)
    number = check_numeric_input(value)

    sign = -1 if number < 0 else 1
    multiplier = 10 ** precision

    scaled = _correct_drift(abs(number) * multiplier)
    if not math.isfinite(scaled):
        # Magnitudes this large are whole numbers already
        return number
    rounded = math.floor(scaled + 0.5)

    return (sign * rounded) / multiplier


def bankers_round(value: Any, *, precision: int = RoundConf.DEFAULT_PRECISION) -> float:
    """
    Round a number half to even (banker's rounding).

    For |value| < 1 the effective precision is raised to reach the first significant digit,
    so small magnitudes keep a meaningful digit instead of collapsing to zero:
    0.00125 at precision 1 gives 0.001, not 0.0.

    Args:
        value: Number or numeric string.
        precision: Decimal places to keep, 0 rounds to integer.

    Returns:
        float: The rounded value, zero input returns 0.0.

    Raises:
        InvalidInputError: If value is not a finite number or numeric string.
        TypeError: If precision is not an int.

    Examples:
        >>> bankers_round(2.5, precision=0)
        2.0
        >>> bankers_round(3.5, precision=0)
        4.0
        >>> bankers_round(2.145, precision=2)
        2.14
        >>> bankers_round(0.0025, precision=2)
        0.002
    """
    _validate_precision(precision)
    number = check_numeric_input(value)

    if number == 0:
        return 0.0

    abs_number = abs(number)
    if abs_number < 1:
        effective = max(significant_digit_index(abs_number), precision)
    else:
        effective = precision

    scale = 10 ** effective
    scaled = _correct_drift(number * scale if effective else number)
    if not math.isfinite(scaled):
        return number

    integer_part = math.floor(scaled)
    fraction = scaled - integer_part

    if abs(fraction - 0.5) < RoundConf.TIE_TOLERANCE:
        rounded = integer_part if integer_part % 2 == 0 else integer_part + 1
    else:
        rounded = math.floor(scaled + 0.5)

    return rounded / scale if effective else float(rounded)


def get_rounder(method: RoundMethod | str) -> Callable[..., float]:
    """
    Resolve a rounding method token to its rounding function.

    Raises:
        ValueError: If method is not a known RoundMethod value.

    Examples:
        >>> get_rounder("bankersRound") is bankers_round
        True
    """
    try:
        method = RoundMethod(method)
    except ValueError:
        valid = ", ".join(repr(m.value) for m in RoundMethod)
        raise ValueError(f"Unknown round method: {method!r}, expected one of {valid}") from None

    if method == RoundMethod.BANKERS:
        return bankers_round
    return round_half_away_from_zero


# Private methods ------------------------------------------------------------------------------------------------------

def _correct_drift(scaled: float) -> float:
    return round(scaled, RoundConf.DRIFT_DECIMALS)


def _validate_precision(precision: int):
    if isinstance(precision, bool) or not isinstance(precision, int):
        raise TypeError(f"precision must be an int, got {type(precision).__name__}")
