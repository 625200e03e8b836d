"""
Numerical Safeguards — Float Primitives for Integration

Модуль содержит примитивы, на которые опирается Riemann Sum Engine:
- Проверка валидности float (не NaN, не Inf)
- Проверка принадлежности отрезку допустимых значений
- Проверка целочисленного параметра (bool не считается int)
- Толерантность накопленной ошибки суммирования

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. NaN/Inf никогда не проходят проверку диапазона
2. Проверки не бросают исключений: результат всегда bool
3. Значения НЕ санитизируются: результат интегрирования не подменяется
4. Все операции детерминированы и воспроизводимы
"""

import math
import sys
from numbers import Real
from typing import Any, Final

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Нижняя граница абсолютной толерантности суммирования
EPS_FLOAT_COMPARE_ABS: Final[float] = 1e-12


# =============================================================================
# ПРОВЕРКИ ТИПОВ
# =============================================================================


def is_real_number(value: Any) -> bool:
    """
    Проверка, является ли значение вещественным числом.

    bool исключается явно: True/False не являются допустимыми
    границами интервала.

    Args:
        value: Проверяемое значение

    Returns:
        True для int/float/numbers.Real (кроме bool)
    """
    return isinstance(value, Real) and not isinstance(value, bool)


def is_strict_int(value: Any) -> bool:
    """
    Проверка, является ли значение целым числом (не bool, не float).

    Examples:
        >>> is_strict_int(10)
        True
        >>> is_strict_int(10.0)
        False
        >>> is_strict_int(True)
        False
    """
    return isinstance(value, int) and not isinstance(value, bool)


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение конечное, False если NaN или Inf
    """
    return math.isfinite(value)


# =============================================================================
# ПРОВЕРКИ ДИАПАЗОНА
# =============================================================================


def is_in_range(value: Any, min_value: float, max_value: float) -> bool:
    """
    Проверка принадлежности значения замкнутому отрезку [min_value, max_value].

    Нечисловые значения и NaN/Inf всегда вне диапазона.

    Args:
        value: Проверяемое значение
        min_value: Нижняя граница (включительно)
        max_value: Верхняя граница (включительно)

    Returns:
        True если min_value <= value <= max_value

    Examples:
        >>> is_in_range(0.0, -999.0, 999.0)
        True
        >>> is_in_range(999.0, -999.0, 999.0)
        True
        >>> is_in_range(1000.0, -999.0, 999.0)
        False
        >>> is_in_range(float('nan'), -999.0, 999.0)
        False
    """
    if not is_real_number(value):
        return False

    # int произвольной длины не конвертируется в float без OverflowError
    if not is_strict_int(value) and not is_valid_float(float(value)):
        return False

    return min_value <= value <= max_value


def is_int_in_range(value: Any, min_value: int, max_value: int) -> bool:
    """
    Проверка, что значение целое и лежит в [min_value, max_value].

    Args:
        value: Проверяемое значение
        min_value: Нижняя граница (включительно)
        max_value: Верхняя граница (включительно)

    Returns:
        True если value — int (не bool) и min_value <= value <= max_value
    """
    if not is_strict_int(value):
        return False

    return min_value <= value <= max_value


# =============================================================================
# ТОЛЕРАНТНОСТЬ СУММИРОВАНИЯ
# =============================================================================


def accumulation_tolerance(n: int, magnitude: float) -> float:
    """
    Абсолютная толерантность для суммы из n слагаемых.

    Ошибка округления при последовательном суммировании растёт
    не быстрее n * eps * sum(|term|).

    Args:
        n: Количество слагаемых
        magnitude: Оценка sum(|term|)

    Returns:
        Абсолютная толерантность (>= EPS_FLOAT_COMPARE_ABS)
    """
    if n < 1:
        raise ValueError(f"n must be >= 1, got {n}")

    bound = n * 4.0 * sys.float_info.epsilon * abs(magnitude)
    return max(bound, EPS_FLOAT_COMPARE_ABS)
