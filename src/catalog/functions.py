"""Function Catalog — фиксированное меню интегрируемых функций.

Меню (порядок совпадает с номерами пунктов):
- 0: x^2
- 1: x^3
- 2: sin(x)
- 3: cos(x)
- 4: sqrt(x)
- 5: 2x+3

Engine ничего не знает об этих именах: каталог отдаёт только callable.
Первообразная хранится для справочного точного значения F(b) - F(a).
"""

import math
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, List, Mapping, Tuple


class UnknownFunctionError(LookupError):
    """Выбор не соответствует ни одному пункту меню."""


class FunctionKey(str, Enum):
    """Ключ функции каталога"""

    SQUARE = "x^2"
    CUBE = "x^3"
    SINE = "sin(x)"
    COSINE = "cos(x)"
    SQRT = "sqrt(x)"
    LINEAR = "2x+3"


@dataclass(frozen=True)
class CatalogEntry:
    """Пункт каталога."""

    key: FunctionKey
    label: str
    func: Callable[[float], float]
    antiderivative: Callable[[float], float]


def _sqrt(x: float) -> float:
    # IEEE sqrt: NaN для x < 0 вместо ValueError
    if x < 0:
        return math.nan
    return math.sqrt(x)


def _sqrt_antiderivative(x: float) -> float:
    if x < 0:
        return math.nan
    return 2.0 / 3.0 * x * math.sqrt(x)


_ENTRIES: Tuple[CatalogEntry, ...] = (
    CatalogEntry(
        key=FunctionKey.SQUARE,
        label="f(x) = x^2",
        func=lambda x: x * x,
        antiderivative=lambda x: x * x * x / 3.0,
    ),
    CatalogEntry(
        key=FunctionKey.CUBE,
        label="f(x) = x^3",
        func=lambda x: x * x * x,
        antiderivative=lambda x: x * x * x * x / 4.0,
    ),
    CatalogEntry(
        key=FunctionKey.SINE,
        label="f(x) = sin(x)",
        func=math.sin,
        antiderivative=lambda x: -math.cos(x),
    ),
    CatalogEntry(
        key=FunctionKey.COSINE,
        label="f(x) = cos(x)",
        func=math.cos,
        antiderivative=math.sin,
    ),
    CatalogEntry(
        key=FunctionKey.SQRT,
        label="f(x) = sqrt(x)",
        func=_sqrt,
        antiderivative=_sqrt_antiderivative,
    ),
    CatalogEntry(
        key=FunctionKey.LINEAR,
        label="f(x) = 2x + 3",
        func=lambda x: 2.0 * x + 3.0,
        antiderivative=lambda x: x * x + 3.0 * x,
    ),
)

# Read-only: {FunctionKey: CatalogEntry} в порядке меню
FUNCTION_CATALOG: Mapping[FunctionKey, CatalogEntry] = MappingProxyType(
    {entry.key: entry for entry in _ENTRIES}
)


def get_entry(key: FunctionKey) -> CatalogEntry:
    """Пункт каталога по ключу."""
    try:
        return FUNCTION_CATALOG[FunctionKey(key)]
    except (KeyError, ValueError):
        raise UnknownFunctionError(f"unknown function: {key!r}") from None


def get_integrand(key: FunctionKey) -> Callable[[float], float]:
    """Callable для ключа каталога."""
    return get_entry(key).func


def select_by_menu_index(index: int) -> CatalogEntry:
    """
    Пункт каталога по номеру меню.

    Args:
        index: номер пункта (0 .. len(FUNCTION_CATALOG) - 1)

    Returns:
        CatalogEntry

    Raises:
        UnknownFunctionError: номер вне меню
    """
    if isinstance(index, bool) or not isinstance(index, int):
        raise UnknownFunctionError(f"menu index must be int, got {index!r}")

    if not 0 <= index < len(_ENTRIES):
        raise UnknownFunctionError(
            f"menu index must be in [0, {len(_ENTRIES) - 1}], got {index}"
        )

    return _ENTRIES[index]


def parse_function_key(text: Any) -> FunctionKey:
    """
    Разбор выбора функции: значение ключа ("x^2"), имя ("SQUARE", "square")
    или номер меню ("0").

    Raises:
        UnknownFunctionError: выбор не распознан
    """
    if isinstance(text, FunctionKey):
        return text

    raw = str(text).strip()

    for key in FunctionKey:
        if raw == key.value or raw.upper() == key.name:
            return key

    if raw.isdigit():
        return select_by_menu_index(int(raw)).key

    raise UnknownFunctionError(f"unknown function: {text!r}")


def exact_integral(key: FunctionKey, a: float, b: float) -> float:
    """Справочное значение ∫ₐᵇ f(x) dx = F(b) - F(a)."""
    antiderivative = get_entry(key).antiderivative
    return antiderivative(b) - antiderivative(a)


def render_menu() -> List[str]:
    """Строки меню: '<номер> = <label>'."""
    return [f"{index} = {entry.label}" for index, entry in enumerate(_ENTRIES)]
