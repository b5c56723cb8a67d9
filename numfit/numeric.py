"""
Numeric input coercion and validation for rounding and unit conversion.

Normalizes numbers from Python stdlib and third-party libraries into plain int/float,
and gates every rounding entry point on a finite numeric value.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import math
import operator
from typing import Any, Literal, Protocol, runtime_checkable

# Local ----------------------------------------------------------------------------------------------------------------
from .errors import InvalidInputError


@runtime_checkable
class SupportsFloat(Protocol):
    """Protocol for duck-typed numeric conversion."""

    def __float__(self) -> float: ...


# Methods --------------------------------------------------------------------------------------------------------------

def check_numeric_input(value: Any) -> float:
    """
    Validate a number or numeric string and return it as float.

    Accepts int, float, numeric str (surrounding whitespace allowed) and numeric-like types
    understood by std_numeric() such as Decimal, Fraction or NumPy scalars.

    Raises:
        InvalidInputError: If value is None, bool, an unsupported type, an empty string,
                           or if its numeric coercion is NaN or infinite.

    Examples:
        >>> check_numeric_input("3.14")
        3.14
        >>> check_numeric_input(None)
        Traceback (most recent call last):
            ...
        numfit.errors.InvalidInputError: Invalid input: expected a number or numeric string, but received NoneType.
    """
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise InvalidInputError(
                "Invalid input: expected a number or numeric string, but received an empty string.",
                value,
            )
        try:
            number = float(text)
        except ValueError:
            number = math.nan
    else:
        number = std_numeric(value, on_error="none")
        if number is None:
            raise InvalidInputError(
                f"Invalid input: expected a number or numeric string, but received {type(value).__name__}.",
                value,
            )

    try:
        number = float(number)
    except OverflowError:
        number = math.inf if number > 0 else -math.inf

    if math.isnan(number):
        raise InvalidInputError(
            "Invalid input: expected a number or numeric string, but received NaN.", value
        )
    if math.isinf(number):
        raise InvalidInputError(
            f"Invalid input: expected a finite number, but received {number}.", value
        )
    return number


def significant_digit_index(value: int | float) -> int:
    """
    Return the count of decimal places needed to reach the first significant digit of value.

    The result is -floor(log10(value)): 0 for [1, 10), -1 for [10, 100), 1 for [0.1, 1),
    3 for [0.001, 0.01) and so on.

    Raises:
        ValueError: If value is not a finite positive number; pass abs(value), never zero.

    Examples:
        >>> significant_digit_index(0.001)
        3
        >>> significant_digit_index(0.1)
        1
        >>> significant_digit_index(5)
        0
        >>> significant_digit_index(250)
        -2
    """
    if not math.isfinite(value) or value <= 0:
        raise ValueError(f"significant digit index requires a finite positive number, got {value}")
    return -math.floor(math.log10(value))


def std_numeric(
        value,
        *,
        on_error: Literal["raise", "nan", "none"] = "raise",
        allow_bool: bool = False
) -> int | float | None:
    """
    Convert numeric types to standard Python int, float, or None.

    Parameters
    ----------
    value : various
        Python int/float/None, Decimal, Fraction, and third-party numerics exposing
        __index__, .item(), .value (Quantity-like), __int__ or __float__.

    on_error : {"raise", "nan", "none"}, default "raise"
        How to handle unsupported types (str, list, dict, ...):
        raise TypeError, return float('nan'), or return None.
        Special float values (inf, nan) are returned as is regardless of this setting.

    allow_bool : bool, default False
        Convert bool to int if True, otherwise treat bool as a type error.

    Detection Priority
    ------------------
    1. __index__() → int (NumPy integers)
    2. .item() → int or float (array scalars)
    3. .value (Astropy Quantity)
    4. Integer-valued Decimal/Fraction → int
    5. __int__() → int (when __float__ not available)
    6. __float__() → float

    Examples
    --------
    >>> std_numeric(Decimal('42.0'))
    42
    >>> std_numeric(Fraction(1, 4))
    0.25
    >>> std_numeric("1.5", on_error="none")
    None
    """
    if value is None:
        return None

    if isinstance(value, bool):
        if allow_bool:
            return int(value)
        return _type_error(f"boolean values not supported, got {value}", on_error)

    if isinstance(value, (int, float)):
        return value

    # Text is never numeric here, str parsing belongs to check_numeric_input()
    if isinstance(value, (str, bytes, bytearray)):
        return _type_error(f"unsupported numeric type: {type(value).__name__}", on_error)

    # pandas.NA has __float__ but raises TypeError
    cls = type(value)
    if cls.__name__ == "NAType" and "pandas" in getattr(cls, "__module__", ""):
        return math.nan

    # Priority 1
    if hasattr(value, '__index__'):
        try:
            return operator.index(value)
        except (TypeError, ValueError) as e:
            return _type_error(f"cannot convert {cls.__name__} to int via __index__: {e}", on_error)

    # Priority 2
    if hasattr(value, 'item') and callable(value.item):
        try:
            result = value.item()
        except (TypeError, ValueError, AttributeError):
            result = None
        if isinstance(result, bool):
            if allow_bool:
                return int(result)
            return _type_error(f"boolean values not supported (from .item()), got {value}", on_error)
        if isinstance(result, (int, float)):
            return result

    # Priority 3
    if hasattr(value, 'value') and hasattr(value, 'unit'):
        try:
            return std_numeric(value.value, on_error=on_error, allow_bool=allow_bool)
        except AttributeError:
            pass

    # Priority 4
    if cls.__name__ in ('Decimal', 'Fraction') and hasattr(value, '__int__'):
        try:
            as_int = int(value)
            if value == cls(as_int):
                return as_int
        except (TypeError, ValueError, OverflowError):
            pass

    # Priority 5
    if hasattr(value, '__int__') and not hasattr(value, '__float__'):
        try:
            return int(value)
        except (TypeError, ValueError, OverflowError) as e:
            return _type_error(f"cannot convert {cls.__name__} to int via __int__: {e}", on_error)

    # Priority 6
    if isinstance(value, SupportsFloat):
        try:
            return float(value)
        except (TypeError, ValueError) as e:
            return _type_error(f"cannot convert {cls.__name__} to float: {e}", on_error)

    return _type_error(
        f"unsupported numeric type: {cls.__name__}. "
        f"Expected int, float, None, or types implementing __index__, __int__, "
        f"__float__, .item(), or having .value attribute",
        on_error,
    )


# Private methods ------------------------------------------------------------------------------------------------------

def _type_error(message: str, on_error: str) -> float | None:
    if on_error == "raise":
        raise TypeError(message)
    elif on_error == "nan":
        return math.nan
    else:  # on_error == "none"
        return None
