"""
Numfit operations fed with NumPy scalars and arrays
"""

import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from numfit.errors import InvalidInputError
from numfit.formatters import format_number
from numfit.numeric import check_numeric_input
from numfit.rounding import bankers_round, round_half_away_from_zero
from numfit.units import ConvertedValue, convert_unit_to_fit, get_optimal_unit

# Integration Tests ----------------------------------------------------------------------------------------------------

pytestmark = pytest.mark.integration

# Optional imports -----------------------------------------------------------------------------------------------------

np = pytest.importorskip("numpy")


class TestCheckNumericInputIntegration:
    """Validation of NumPy scalar types."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param(np.int64(5), 5.0, id="int64"),
            pytest.param(np.int8(-3), -3.0, id="int8"),
            pytest.param(np.float64(2.5), 2.5, id="float64"),
            pytest.param(np.float32(0.5), 0.5, id="float32"),
        ],
    )
    def test_accepts(self, value, expected):
        """NumPy scalars convert to float."""
        result = check_numeric_input(value)
        assert result == expected
        assert type(result) is float

    @pytest.mark.parametrize(
        "value",
        [
            pytest.param(np.float64("nan"), id="nan"),
            pytest.param(np.float32("inf"), id="inf"),
            pytest.param(np.bool_(True), id="bool"),
            pytest.param(np.array([1.0, 2.0]), id="array"),
        ],
    )
    def test_rejects(self, value):
        """NaN, infinity, booleans and arrays are rejected."""
        with pytest.raises(InvalidInputError, match="Invalid input"):
            check_numeric_input(value)


class TestRoundingIntegration:
    """Rounding of NumPy scalars."""

    def test_bankers_round(self):
        """Ties at precision 0 go to the even integer."""
        assert bankers_round(np.float64(2.5), precision=0) == 2.0
        assert bankers_round(np.float64(3.5), precision=0) == 4.0

    def test_round_half_away_from_zero(self):
        """Negative ties move away from zero."""
        assert round_half_away_from_zero(np.float64(-2.5), precision=0) == -3.0

    def test_results_are_builtin_float(self):
        """Results never leak NumPy types."""
        assert type(bankers_round(np.int64(7))) is float
        assert type(round_half_away_from_zero(np.float32(1.25), precision=1)) is float


class TestUnitsIntegration:
    """Unit conversion of NumPy scalars and arrays."""

    def test_fit_scalar(self):
        """NumPy integers fit like builtin ints."""
        result = convert_unit_to_fit(np.int64(5000), unit="mass", from_="g")
        assert result == ConvertedValue(number=5, unit="mass", suffix="kg")

    @pytest.mark.parametrize(
        "optimizer, expected",
        [
            pytest.param("min", "g", id="min"),
            pytest.param("max", "ton", id="max"),
            pytest.param("freq", "kg", id="freq"),
        ],
    )
    def test_optimal_unit_array(self, optimizer, expected):
        """Arrays iterate as NumPy scalars."""
        numbers = np.array([500, 5000, 8000, 9000, 5_000_000])
        assert get_optimal_unit(numbers, unit="mass", from_="g", optimizer=optimizer) == expected

    def test_optimal_unit_empty_array(self):
        """An empty array returns the from suffix."""
        assert get_optimal_unit(np.array([]), unit="data", from_="MB") == "MB"


class TestFormatNumberIntegration:
    """Formatting of NumPy scalars."""

    def test_float32(self):
        """Float32 scalars format like builtin floats."""
        assert format_number(np.float32(1234.5)) == "1,234.50"

    def test_int64_raw(self):
        """Int64 scalars render in raw mode."""
        assert format_number(np.int64(1_000_000), mode="raw") == "1,000,000"
