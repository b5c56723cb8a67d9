#
# Numfit Units of Measurement Tools
#

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
import logging
from collections import Counter
from dataclasses import dataclass, asdict
from enum import StrEnum, unique
from typing import Any, Iterable, Mapping, Self

# Third-party ----------------------------------------------------------------------------------------------------------
from frozendict import frozendict

# Local ----------------------------------------------------------------------------------------------------------------
from .errors import InvalidSuffixError, InvalidUnitError, UnknownOptimizerError
from .numeric import check_numeric_input
from .rounding import bankers_round

logger = logging.getLogger(__name__)


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class BaseUnit(StrEnum):
    """Unit families of the built-in BASE_UNIT_MAP."""
    AREA = "area"
    MASS = "mass"
    VOLUME = "volume"
    DATA = "data"
    COUNT = "count"
    CUSTOM = "custom"


@unique
class Optimizer(StrEnum):
    """
    Strategies for reducing a data set to a single unit suffix.

    Attributes:
        MIN: Fit the smallest absolute value
        MAX: Fit the largest absolute value
        FREQ: Fit every value and pick the most frequent suffix
    """
    MIN = "min"
    MAX = "max"
    FREQ = "freq"


class UnitsConf:
    DEFAULT_OPTIMIZER = Optimizer.MIN


@dataclass(frozen=True)
class UnitLadder:
    """
    Ordered unit suffixes of one measurement family.

    Attributes:
        gap: Power-of-ten exponent between adjacent suffixes, 3 means ×1000.
        suffices: Unique suffixes in ascending magnitude, index 0 is the smallest unit.
        base_index: Index of the canonical suffix used when no 'from' suffix is given.

    Note:
        base_index is not range-checked here, the converters report an out-of-range
        base_index as InvalidSuffixError when they need the base suffix.

    Examples:
        >>> mass = UnitLadder(gap=3, suffices=("g", "kg", "ton"), base_index=1)
        >>> mass.base_suffix
        'kg'
        >>> mass.index_of("ton")
        2
    """

    gap: int
    suffices: tuple[str, ...]
    base_index: int = 0

    def __post_init__(self):
        if isinstance(self.gap, bool) or not isinstance(self.gap, int):
            raise TypeError(f"gap must be an int, got {type(self.gap).__name__}")
        if self.gap <= 0:
            raise ValueError(f"gap must be > 0, got {self.gap}")

        if isinstance(self.suffices, str) or not isinstance(self.suffices, abc.Iterable):
            raise TypeError(f"suffices must be a sequence of str, got {type(self.suffices).__name__}")
        suffices = tuple(self.suffices)
        if not suffices:
            raise ValueError("suffices must not be empty")
        if not all(isinstance(s, str) for s in suffices):
            raise TypeError(f"suffices must contain str only, got {suffices!r}")
        if len(set(suffices)) != len(suffices):
            raise ValueError(f"suffices must be unique, got {suffices!r}")
        object.__setattr__(self, 'suffices', suffices)

        if isinstance(self.base_index, bool) or not isinstance(self.base_index, int):
            raise TypeError(f"base_index must be an int, got {type(self.base_index).__name__}")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Self:
        """
        Create a ladder from a plain mapping.

        Both 'base_index' and 'baseIndex' keys are accepted, the base index defaults to 0.

        Examples:
            >>> UnitLadder.from_mapping({"gap": 3, "suffices": ["g", "kg"], "baseIndex": 1})
            UnitLadder(gap=3, suffices=('g', 'kg'), base_index=1)
        """
        try:
            gap = data["gap"]
            suffices = data["suffices"]
        except KeyError as e:
            raise ValueError(f"unit ladder mapping requires 'gap' and 'suffices', missing {e}") from None
        base_index = data.get("base_index", data.get("baseIndex", 0))
        return cls(gap=gap, suffices=suffices, base_index=base_index)

    @property
    def base_suffix(self) -> str | None:
        """The canonical suffix, None if base_index points outside of suffices."""
        if 0 <= self.base_index < len(self.suffices):
            return self.suffices[self.base_index]
        return None

    def index_of(self, suffix: str) -> int | None:
        """Index of suffix in the ladder, None if absent."""
        try:
            return self.suffices.index(suffix)
        except ValueError:
            return None


@dataclass(frozen=True)
class ConvertedValue:
    """
    Result of a unit conversion.

    Attributes:
        number: Magnitude expressed in the scale of suffix.
        unit: Unit family name.
        suffix: One of the family suffices.

    Examples:
        >>> str(ConvertedValue(5.0, "mass", "kg"))
        '5 kg'
        >>> str(ConvertedValue(1.5, "count", "K"))
        '1.5 K'
    """

    number: float
    unit: str
    suffix: str

    def __str__(self):
        number = self.number
        if isinstance(number, float) and number.is_integer():
            number = int(number)
        if not self.suffix:
            return f"{number}"
        return f"{number} {self.suffix}"

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


# Constants ------------------------------------------------------------------------------------------------------------

# @formatter:off
BASE_UNIT_MAP: Mapping[str, UnitLadder] = frozendict({
    BaseUnit.AREA:   UnitLadder(gap=6, suffices=("cm²", "m²", "km²"), base_index=1),
    BaseUnit.MASS:   UnitLadder(gap=3, suffices=("g", "kg", "ton"), base_index=1),
    BaseUnit.VOLUME: UnitLadder(gap=3, suffices=("mL", "L", "kL"), base_index=1),
    BaseUnit.DATA:   UnitLadder(gap=3, suffices=("B", "KB", "MB", "GB", "TB", "PB"), base_index=0),
    BaseUnit.COUNT:  UnitLadder(gap=3, suffices=("", "K", "M", "B", "T"), base_index=0),
    BaseUnit.CUSTOM: UnitLadder(gap=3, suffices=("",), base_index=0),
})
# @formatter:on


# Methods --------------------------------------------------------------------------------------------------------------

def convert_unit_from_to(
        number: Any,
        *,
        unit: str,
        to: str,
        from_: str | None = None,
        unit_map: Mapping[str, UnitLadder | Mapping] | None = None,
) -> ConvertedValue:
    """
    Convert a number between two suffixes of the same unit family.

    The result is rescaled by the power of ten between the suffixes and rounded with
    banker's rounding at the default precision. Rounding applies even when from_ equals to,
    so 2.55 kg to kg gives 2.6 kg.

    Args:
        number: Number or numeric string expressed in from_ suffix.
        unit: Unit family name, a key of unit_map.
        to: Target suffix.
        from_: Source suffix, the family base suffix if None.
        unit_map: Unit families, BASE_UNIT_MAP if None.

    Raises:
        InvalidUnitError: If unit is absent from unit_map.
        InvalidSuffixError: If from_ or to is absent from the family suffices.
        InvalidInputError: If number is not a finite number or numeric string.

    Examples:
        >>> convert_unit_from_to(1.5, unit="mass", from_="kg", to="g")
        ConvertedValue(number=1500.0, unit='mass', suffix='g')
        >>> convert_unit_from_to(2048, unit="data", to="KB")
        ConvertedValue(number=2.0, unit='data', suffix='KB')
    """
    ladder = _resolve_ladder(unit, unit_map)
    from_index = _resolve_from_index(ladder, from_)
    to_index = _resolve_index(ladder, to, "to")
    number = check_numeric_input(number)

    diff = (to_index - from_index) * ladder.gap
    return ConvertedValue(number=bankers_round(number * 10 ** -diff), unit=unit, suffix=to)


def convert_unit_to_base(
        number: Any,
        *,
        unit: str,
        from_: str | None = None,
        unit_map: Mapping[str, UnitLadder | Mapping] | None = None,
) -> ConvertedValue:
    """
    Convert a number to the base suffix of its unit family.

    Raises:
        InvalidUnitError: If unit is absent from unit_map.
        InvalidSuffixError: If from_ is absent from the family suffices,
                            or if the family base_index points outside of its suffices.
        InvalidInputError: If number is not a finite number or numeric string.

    Examples:
        >>> convert_unit_to_base(2500, unit="mass", from_="g")
        ConvertedValue(number=2.5, unit='mass', suffix='kg')
    """
    ladder = _resolve_ladder(unit, unit_map)
    to = ladder.base_suffix
    if to is None:
        raise InvalidSuffixError("to", None)

    return convert_unit_from_to(number, unit=unit, to=to, from_=from_, unit_map={unit: ladder})


def convert_unit_to_fit(
        number: Any,
        *,
        unit: str,
        from_: str | None = None,
        offset: bool = False,
        unit_map: Mapping[str, UnitLadder | Mapping] | None = None,
) -> ConvertedValue:
    """
    Convert a number to the suffix that puts its magnitude into the readable window.

    The readable window is [1, 10^gap), or [1, 10^(gap+1)) with offset=True. A value already
    inside the window keeps its suffix. Otherwise the ladder is walked outward from from_,
    toward smaller suffixes for |number| < 1 and toward larger ones for |number| >= 1, and
    the first suffix whose rescaled value lands in the window wins. Values beyond the ladder
    are clamped to its extreme suffix.

    Zero is treated as too small and resolves to the smallest suffix of the ladder.

    Args:
        number: Number or numeric string expressed in from_ suffix.
        unit: Unit family name, a key of unit_map.
        from_: Source suffix, the family base suffix if None.
        offset: Widen the window by one order of magnitude to reduce threshold jitter.
        unit_map: Unit families, BASE_UNIT_MAP if None.

    Raises:
        InvalidUnitError: If unit is absent from unit_map.
        InvalidSuffixError: If from_ is absent from the family suffices.
        InvalidInputError: If number is not a finite number or numeric string.

    Examples:
        >>> convert_unit_to_fit(5000, unit="mass", from_="g")
        ConvertedValue(number=5.0, unit='mass', suffix='kg')
        >>> convert_unit_to_fit(5000, unit="mass", from_="g", offset=True)
        ConvertedValue(number=5000.0, unit='mass', suffix='g')
        >>> convert_unit_to_fit(0.5, unit="mass", from_="kg")
        ConvertedValue(number=500.0, unit='mass', suffix='g')
    """
    ladder = _resolve_ladder(unit, unit_map)
    from_index = _resolve_from_index(ladder, from_)
    number = check_numeric_input(number)

    return _fit(number, ladder, unit=unit, from_index=from_index, offset=offset)


def get_optimal_unit(
        numbers: Iterable[Any],
        *,
        unit: str,
        from_: str | None = None,
        offset: bool = False,
        optimizer: Optimizer | str = UnitsConf.DEFAULT_OPTIMIZER,
        unit_map: Mapping[str, UnitLadder | Mapping] | None = None,
) -> str:
    """
    Pick a single suffix to display a whole data set, e.g. for a chart axis.

    Signs are ignored. With 'min' or 'max' the smallest or largest absolute value is fitted,
    with 'freq' every value is fitted and the most frequent suffix wins; ties go to the suffix
    first reached in input order.

    Args:
        numbers: Values expressed in from_ suffix, an empty collection returns from_.
        unit: Unit family name, a key of unit_map.
        from_: Source suffix, the family base suffix if None.
        offset: Widen the fit window, see convert_unit_to_fit().
        optimizer: One of 'min', 'max', 'freq'.
        unit_map: Unit families, BASE_UNIT_MAP if None.

    Raises:
        InvalidUnitError: If unit is absent from unit_map.
        InvalidSuffixError: If from_ is absent from the family suffices.
        InvalidInputError: If any number is not a finite number or numeric string.
        UnknownOptimizerError: If optimizer is not recognized.

    Examples:
        >>> get_optimal_unit([100, 500_000, 1_000_000], unit="mass", from_="g")
        'g'
        >>> get_optimal_unit([100, 500_000, 1_000_000], unit="mass", from_="g", optimizer="max")
        'ton'
    """
    if isinstance(numbers, (str, bytes)) or not isinstance(numbers, abc.Iterable):
        raise TypeError(f"numbers must be an iterable of numbers, got {type(numbers).__name__}")

    ladder = _resolve_ladder(unit, unit_map)
    from_index = _resolve_from_index(ladder, from_)
    from_suffix = ladder.suffices[from_index]

    values = [abs(check_numeric_input(n)) for n in numbers]
    if not values:
        return from_suffix

    try:
        optimizer = Optimizer(optimizer)
    except ValueError:
        raise UnknownOptimizerError(optimizer) from None

    def fit_suffix(value: float) -> str:
        return _fit(value, ladder, unit=unit, from_index=from_index, offset=offset).suffix

    if optimizer == Optimizer.FREQ:
        counts = Counter(fit_suffix(v) for v in values)
        # most_common() keeps first-encountered order among equal counts
        suffix = counts.most_common(1)[0][0]
    else:
        target = min(values) if optimizer == Optimizer.MIN else max(values)
        suffix = fit_suffix(target)

    logger.debug("optimal %s suffix for %d values: %r (optimizer=%s)", unit, len(values), suffix, optimizer)
    return suffix


# Private methods ------------------------------------------------------------------------------------------------------

def _fit(number: float, ladder: UnitLadder, *, unit: str, from_index: int, offset: bool) -> ConvertedValue:
    window = 10 ** (ladder.gap + 1 if offset else ladder.gap)
    abs_number = abs(number)
    sign, candidates = _search_direction(ladder, from_index, abs_number)

    if 1 <= abs_number < window or not candidates:
        return ConvertedValue(number=bankers_round(number), unit=unit, suffix=ladder.suffices[from_index])

    for step, suffix in enumerate(candidates, start=1):
        rounded = bankers_round(number * 10 ** (sign * step * ladder.gap))
        if 1 <= abs(rounded) < window:
            return ConvertedValue(number=rounded, unit=unit, suffix=suffix)

    logger.debug("%s %r out of ladder range, clamped to %r", unit, number, candidates[-1])
    steps = len(candidates)
    return ConvertedValue(
        number=bankers_round(number * 10 ** (sign * steps * ladder.gap)),
        unit=unit,
        suffix=candidates[-1],
    )


def _search_direction(ladder: UnitLadder, from_index: int, abs_number: float) -> tuple[int, tuple[str, ...]]:
    """
    Exponent sign and candidate suffixes for the fit search, nearest candidate first.

    Magnitudes below 1 move toward smaller suffixes and scale the number up (sign +1),
    magnitudes of 1 and above move toward larger suffixes and scale it down (sign -1).
    """
    if abs_number < 1:
        return 1, tuple(reversed(ladder.suffices[:from_index]))
    return -1, ladder.suffices[from_index + 1:]


def _resolve_ladder(unit: str, unit_map: Mapping[str, UnitLadder | Mapping] | None) -> UnitLadder:
    unit_map = BASE_UNIT_MAP if unit_map is None else unit_map
    if not isinstance(unit_map, abc.Mapping):
        raise TypeError(f"unit_map must be a Mapping, got {type(unit_map).__name__}")

    try:
        ladder = unit_map[unit]
    except (KeyError, TypeError):
        raise InvalidUnitError(unit) from None

    if isinstance(ladder, UnitLadder):
        return ladder
    if isinstance(ladder, abc.Mapping):
        return UnitLadder.from_mapping(ladder)
    if ladder is None:
        raise InvalidUnitError(unit)
    raise TypeError(f"unit ladder must be a UnitLadder or Mapping, got {type(ladder).__name__}")


def _resolve_from_index(ladder: UnitLadder, from_: str | None) -> int:
    if from_ is None:
        if ladder.base_suffix is None:
            raise InvalidSuffixError("from", None)
        return ladder.base_index
    return _resolve_index(ladder, from_, "from")


def _resolve_index(ladder: UnitLadder, suffix: str, direction: str) -> int:
    index = ladder.index_of(suffix)
    if index is None:
        raise InvalidSuffixError(direction, suffix)
    return index
