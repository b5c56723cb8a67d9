"""
Number formatting for display: rounding mode, thousands grouping and prefix/suffix affixes.

format_number() is the main entry point; it rounds with one of the rounding engine strategies
and renders the result through a pluggable locale.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
from dataclasses import dataclass
from decimal import Decimal
from enum import StrEnum, unique
from typing import Any, Callable, Self

# Local ----------------------------------------------------------------------------------------------------------------
from .numeric import check_numeric_input, significant_digit_index
from .rounding import RoundMethod, get_rounder

LocaleFormatter = Callable[[float, int | None], str]


# Classes --------------------------------------------------------------------------------------------------------------

# @formatter:off
@unique
class FormatMode(StrEnum):
    """
    Modes of format_number().

    Attributes:
        ADAPTIVE: Raise precision below magnitude 1 to reach the first significant digit
                  Example: 0.0000345 → "0.00003", 1234.567 → "1,234.57"
        FIXED:    Always show the requested decimal places
                  Example: 1234 → "1,234.00"
        AUTO:     Integers without a fractional part, others with the requested decimals
                  Example: 1000 → "1,000", 1234.5 → "1,234.50"
        RAW:      No rounding, full precision, still grouped
                  Example: 1234.56789 → "1,234.56789"
    """
    ADAPTIVE = "adaptive"
    FIXED = "fixed"
    AUTO = "auto"
    RAW = "raw"
# @formatter:on


@dataclass(frozen=True)
class Affix:
    """
    Prefix or suffix text with optional spacing.

    Attributes:
        text: The text attached to the number.
        space: Insert a single space between the number and the text.
    """
    text: str
    space: bool = False

    @classmethod
    def parse(cls, affix: "str | Affix | abc.Mapping | None") -> Self:
        """
        Normalize a bare string, an Affix or a {"text": ..., "space": ...} mapping.

        A bare string is attached without a space; None gives an empty affix.
        """
        if affix is None:
            return cls(text="")
        if isinstance(affix, Affix):
            return affix
        if isinstance(affix, str):
            return cls(text=affix)
        if isinstance(affix, abc.Mapping):
            return cls(text=affix.get("text", ""), space=bool(affix.get("space", False)))
        raise TypeError(f"affix must be str | Affix | Mapping | None, got {type(affix).__name__}")


@dataclass(frozen=True)
class NumberLocale:
    """
    Thousands and decimal separators used to render numbers.

    Examples:
        >>> NumberLocale.de().format(1234.5, 2)
        '1.234,50'
        >>> NumberLocale.en().format(1e-07, None)
        '0.0000001'
    """
    thousands_sep: str = ","
    decimal_sep: str = "."

    @classmethod
    def en(cls) -> Self:
        return cls(thousands_sep=",", decimal_sep=".")

    @classmethod
    def de(cls) -> Self:
        return cls(thousands_sep=".", decimal_sep=",")

    @classmethod
    def fr(cls) -> Self:
        return cls(thousands_sep="\u202f", decimal_sep=",")

    def __call__(self, number: float, decimals: int | None) -> str:
        return self.format(number, decimals)

    def format(self, number: float, decimals: int | None) -> str:
        """
        Render number with grouping; decimals=None renders all significant digits.
        """
        if number == 0:
            number = 0.0  # -0.0 renders as "0"

        if decimals is None:
            text = _grouped_plain(number)
        else:
            text = f"{number:,.{decimals}f}"

        return text.translate({ord(","): self.thousands_sep, ord("."): self.decimal_sep})


# Methods --------------------------------------------------------------------------------------------------------------

def format_number(
        value: Any,
        *,
        mode: FormatMode | str = FormatMode.AUTO,
        decimals: int = 2,
        round_method: RoundMethod | str = RoundMethod.HALF_AWAY_FROM_ZERO,
        prefix: str | Affix | abc.Mapping | None = None,
        suffix: str | Affix | abc.Mapping | None = None,
        locale: NumberLocale | LocaleFormatter | None = None,
) -> str:
    """
    Format a number with rounding, thousands grouping and optional affixes.

    Args:
        value: Number or numeric string.
        mode: One of 'adaptive', 'fixed', 'auto', 'raw', see FormatMode.
        decimals: Decimal places, raised in 'adaptive' mode for 0 < |value| < 1.
        round_method: 'halfAwayFromZero' or 'bankersRound', ignored in 'raw' mode.
        prefix: Bare string (no space), Affix or {"text": ..., "space": ...} mapping.
        suffix: Same as prefix.
        locale: NumberLocale or callable (number, decimals) -> str, NumberLocale.en() if None.
                decimals=None asks the callable for all significant digits.

    Returns:
        str: The formatted number with affixes.

    Raises:
        InvalidInputError: If value is not a finite number or numeric string.
        ValueError: If mode or round_method is unknown, or decimals is negative.
        TypeError: If decimals is not int, or an affix or locale has an unsupported type.

    Examples:
        >>> format_number(0.0000345, mode="adaptive", decimals=2)
        '0.00003'
        >>> format_number(1234, mode="fixed", decimals=2)
        '1,234.00'
        >>> format_number(1000, mode="auto")
        '1,000'
        >>> format_number(2.5, mode="fixed", decimals=0, round_method="bankersRound")
        '2'
        >>> format_number(1234.5, prefix=Affix("$", space=True))
        '$ 1,234.50'
        >>> format_number(1234.5, suffix="kg", locale=NumberLocale.de())
        '1.234,50kg'
    """
    mode = _parse_mode(mode)
    rounder = get_rounder(round_method)
    render = _parse_locale(locale)
    _validate_decimals(decimals)
    before = Affix.parse(prefix)
    after = Affix.parse(suffix)

    number = check_numeric_input(value)

    if mode == FormatMode.RAW:
        body = render(number, None)
    else:
        effective = decimals
        if mode == FormatMode.ADAPTIVE and 0 < abs(number) < 1:
            effective = max(significant_digit_index(abs(number)), decimals)

        rounded = rounder(number, precision=effective)

        if mode == FormatMode.AUTO and rounded.is_integer():
            body = render(rounded, None)
        else:
            body = render(rounded, effective)

    return (
        f"{before.text}{' ' if before.space else ''}"
        f"{body}"
        f"{' ' if after.space else ''}{after.text}"
    )


# Private methods ------------------------------------------------------------------------------------------------------

def _grouped_plain(number: float) -> str:
    """Grouped full-precision rendering without exponent notation."""
    if number.is_integer():
        return f"{int(number):,}"
    return format(Decimal(repr(number)), ",f")


def _parse_locale(locale: NumberLocale | LocaleFormatter | None) -> LocaleFormatter:
    if locale is None:
        return NumberLocale.en()
    if callable(locale):
        return locale
    raise TypeError(f"locale must be NumberLocale or callable, got {type(locale).__name__}")


def _parse_mode(mode: FormatMode | str) -> FormatMode:
    try:
        return FormatMode(mode)
    except ValueError:
        valid = ", ".join(repr(m.value) for m in FormatMode)
        raise ValueError(f"Unknown format mode: {mode!r}, expected one of {valid}") from None


def _validate_decimals(decimals: int):
    if isinstance(decimals, bool) or not isinstance(decimals, int):
        raise TypeError(f"decimals must be an int, got {type(decimals).__name__}")
    if decimals < 0:
        raise ValueError(f"decimals must be >= 0, got {decimals}")
