#
# Numfit - Numeric Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import math
from decimal import Decimal
from fractions import Fraction

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from numfit.errors import InvalidInputError, NumfitError
from numfit.numeric import check_numeric_input, significant_digit_index, std_numeric


# Tests ----------------------------------------------------------------------------------------------------------------

class TestCheckNumericInput:
    """Validation of numbers and numeric strings."""

    @pytest.mark.parametrize("value, expected", [
        pytest.param(42, 42.0, id="int"),
        pytest.param(-3.5, -3.5, id="float"),
        pytest.param(0, 0.0, id="zero"),
        pytest.param("3.14159", 3.14159, id="str_float"),
        pytest.param(" 2.5 ", 2.5, id="str_whitespace"),
        pytest.param("1e3", 1000.0, id="str_e_notation"),
        pytest.param("-0", 0.0, id="str_negative_zero"),
        pytest.param(Decimal("2.25"), 2.25, id="decimal"),
        pytest.param(Fraction(1, 4), 0.25, id="fraction"),
    ])
    def test_accepts(self, value, expected):
        """Accept numbers and numeric strings and return float."""
        result = check_numeric_input(value)
        assert result == expected
        assert isinstance(result, float)

    @pytest.mark.parametrize("value, match", [
        pytest.param(None, "NoneType", id="none"),
        pytest.param(True, "bool", id="bool"),
        pytest.param([1, 2], "list", id="list"),
        pytest.param({"a": 1}, "dict", id="dict"),
        pytest.param("abc", "NaN", id="str_nan"),
        pytest.param("", "empty string", id="str_empty"),
        pytest.param("   ", "empty string", id="str_blank"),
        pytest.param(math.nan, "NaN", id="float_nan"),
        pytest.param(Decimal("NaN"), "NaN", id="decimal_nan"),
        pytest.param(math.inf, "finite", id="inf"),
        pytest.param("-inf", "finite", id="str_inf"),
        pytest.param(10 ** 400, "finite", id="int_overflow"),
    ])
    def test_rejects(self, value, match):
        """Reject non-numeric, NaN and infinite input."""
        with pytest.raises(InvalidInputError, match=match) as exc_info:
            check_numeric_input(value)
        assert exc_info.value.value is value

    def test_error_taxonomy(self):
        """InvalidInputError is both a NumfitError and a ValueError."""
        with pytest.raises(ValueError):
            check_numeric_input("abc")
        with pytest.raises(NumfitError):
            check_numeric_input(None)


class TestSignificantDigitIndex:
    """Decimal places to the first significant digit."""

    @pytest.mark.parametrize("value, expected", [
        pytest.param(0.001, 3, id="0.001"),
        pytest.param(0.0015, 3, id="0.0015"),
        pytest.param(0.1, 1, id="0.1"),
        pytest.param(0.99, 1, id="0.99"),
        pytest.param(0.0000345, 5, id="0.0000345"),
        pytest.param(1, 0, id="1"),
        pytest.param(5, 0, id="5"),
        pytest.param(9.99, 0, id="9.99"),
        pytest.param(10, -1, id="10"),
        pytest.param(250, -2, id="250"),
    ])
    def test_index(self, value, expected):
        """Leading zeros after the point plus one below 1, non-positive above."""
        assert significant_digit_index(value) == expected

    def test_no_negative_zero(self):
        """Values in [1, 10) give plain zero."""
        result = significant_digit_index(1.5)
        assert result == 0
        assert math.copysign(1, result) == 1

    @pytest.mark.parametrize("value", [
        pytest.param(0, id="zero"),
        pytest.param(-0.5, id="negative"),
        pytest.param(math.nan, id="nan"),
        pytest.param(math.inf, id="inf"),
    ])
    def test_invalid(self, value):
        """Zero, negative and non-finite values are rejected."""
        with pytest.raises(ValueError, match="finite positive"):
            significant_digit_index(value)


class TestStdNumeric:
    """Normalization of stdlib numeric types."""

    @pytest.mark.parametrize("value, expected, expected_type", [
        pytest.param(42, 42, int, id="int"),
        pytest.param(3.25, 3.25, float, id="float"),
        pytest.param(None, None, type(None), id="none"),
        pytest.param(Decimal("42.0"), 42, int, id="decimal_int_valued"),
        pytest.param(Decimal("3.5"), 3.5, float, id="decimal_fractional"),
        pytest.param(Fraction(84, 2), 42, int, id="fraction_int_valued"),
        pytest.param(Fraction(1, 4), 0.25, float, id="fraction_fractional"),
    ])
    def test_types(self, value, expected, expected_type):
        """Preserve ints, convert fractional types to float."""
        result = std_numeric(value)
        assert result == expected
        assert isinstance(result, expected_type)

    def test_special_floats_preserved(self):
        """Special IEEE 754 values pass through."""
        assert std_numeric(math.inf) == math.inf
        assert math.isnan(std_numeric(math.nan))

    @pytest.mark.parametrize("value", [
        pytest.param("1.5", id="str"),
        pytest.param([1], id="list"),
        pytest.param(object(), id="object"),
    ])
    def test_on_error_modes(self, value):
        """Unsupported types raise, or map to nan or None."""
        with pytest.raises(TypeError, match="unsupported numeric type"):
            std_numeric(value)
        assert math.isnan(std_numeric(value, on_error="nan"))
        assert std_numeric(value, on_error="none") is None

    def test_bool(self):
        """Booleans are rejected unless allowed."""
        with pytest.raises(TypeError, match="boolean"):
            std_numeric(True)
        assert std_numeric(True, allow_bool=True) == 1
        assert std_numeric(False, on_error="none") is None

    def test_int_only_type(self):
        """Types implementing only __int__ convert to int."""

        class OnlyInt:
            def __int__(self):
                return 7

        assert std_numeric(OnlyInt()) == 7

    def test_quantity_like(self):
        """Objects with .value and .unit use their magnitude."""

        class Quantity:
            value = 2.5
            unit = "kg"

        assert std_numeric(Quantity()) == 2.5
