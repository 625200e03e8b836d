"""
Тесты для модуля Numerical Safeguards

Проверяет:
1. Проверки типов (bool не считается числом)
2. Проверки диапазона (NaN/Inf всегда вне диапазона)
3. Толерантность суммирования
"""

import math
from fractions import Fraction

import pytest

from src.core.math.numerical_safeguards import (
    EPS_FLOAT_COMPARE_ABS,
    accumulation_tolerance,
    is_in_range,
    is_int_in_range,
    is_real_number,
    is_strict_int,
    is_valid_float,
)

# =============================================================================
# ТЕСТЫ ПРОВЕРОК ТИПОВ
# =============================================================================


class TestTypeChecks:
    """Тесты для is_real_number / is_strict_int / is_valid_float"""

    def test_real_numbers(self) -> None:
        assert is_real_number(1)
        assert is_real_number(1.5)
        assert is_real_number(Fraction(1, 3))
        assert is_real_number(float("nan"))

    def test_non_real_numbers(self) -> None:
        """bool, str, None, complex не являются вещественными числами"""
        assert not is_real_number(True)
        assert not is_real_number("1.0")
        assert not is_real_number(None)
        assert not is_real_number(1 + 2j)

    def test_strict_int(self) -> None:
        assert is_strict_int(0)
        assert is_strict_int(-7)
        assert not is_strict_int(7.0)
        assert not is_strict_int(False)
        assert not is_strict_int("7")

    def test_valid_float(self) -> None:
        assert is_valid_float(0.0)
        assert is_valid_float(-1e308)
        assert not is_valid_float(float("nan"))
        assert not is_valid_float(float("inf"))
        assert not is_valid_float(float("-inf"))


# =============================================================================
# ТЕСТЫ ПРОВЕРОК ДИАПАЗОНА
# =============================================================================


class TestIsInRange:
    """Тесты для is_in_range"""

    def test_inside_and_on_bounds(self) -> None:
        assert is_in_range(0.0, -999.0, 999.0)
        assert is_in_range(-999.0, -999.0, 999.0)
        assert is_in_range(999.0, -999.0, 999.0)
        assert is_in_range(5, -999.0, 999.0)

    def test_outside(self) -> None:
        assert not is_in_range(999.5, -999.0, 999.0)
        assert not is_in_range(-1000, -999.0, 999.0)

    def test_non_finite_never_in_range(self) -> None:
        assert not is_in_range(float("nan"), -math.inf, math.inf)
        assert not is_in_range(float("inf"), -math.inf, math.inf)

    def test_huge_int_out_of_range_without_overflow(self) -> None:
        """int произвольной длины не вызывает OverflowError"""
        assert not is_in_range(10**400, -999.0, 999.0)

    def test_non_numeric(self) -> None:
        assert not is_in_range("1", -999.0, 999.0)
        assert not is_in_range(None, -999.0, 999.0)
        assert not is_in_range(True, -999.0, 999.0)


class TestIsIntInRange:
    """Тесты для is_int_in_range"""

    def test_valid(self) -> None:
        assert is_int_in_range(1, 1, 999)
        assert is_int_in_range(999, 1, 999)

    def test_invalid(self) -> None:
        assert not is_int_in_range(0, 1, 999)
        assert not is_int_in_range(1000, 1, 999)
        assert not is_int_in_range(10.0, 1, 999)
        assert not is_int_in_range(True, 1, 999)


# =============================================================================
# ТЕСТЫ ТОЛЕРАНТНОСТИ СУММИРОВАНИЯ
# =============================================================================


class TestAccumulationTolerance:
    """Тесты для accumulation_tolerance"""

    def test_grows_with_n(self) -> None:
        assert accumulation_tolerance(1000, 1.0) > accumulation_tolerance(10, 1.0)

    def test_default_floor(self) -> None:
        assert EPS_FLOAT_COMPARE_ABS == 1e-12

    def test_floor_at_abs_eps(self) -> None:
        assert accumulation_tolerance(1, 0.0) == EPS_FLOAT_COMPARE_ABS

    def test_invalid_n(self) -> None:
        with pytest.raises(ValueError, match="n must be >= 1"):
            accumulation_tolerance(0, 1.0)
