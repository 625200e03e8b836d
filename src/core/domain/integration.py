"""
Integration — доменные типы Riemann Sum Engine

Содержит:
- SamplingRule: закрытое перечисление правил выбора точки (LEFT/RIGHT/MIDPOINT)
- FailureReason: типизированные причины отказа валидации
- Interval: пара границ (a, b)
- IntegrationRequest: параметры одного вызова интегрирования
- SubintervalSample: эфемерная запись по одному подынтервалу (для отчёта)

IntegrationRequest — транспортная запись: диапазоны НЕ проверяются здесь,
валидацию выполняет engine и возвращает FailureReason.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class SamplingRule(str, Enum):
    """Правило выбора точки внутри подынтервала"""

    LEFT = "left"
    RIGHT = "right"
    MIDPOINT = "midpoint"

    @property
    def offset(self) -> float:
        """Смещение точки в единицах dx от левого конца подынтервала."""
        return _RULE_OFFSETS[self]

    @classmethod
    def parse(cls, value: Any) -> Optional["SamplingRule"]:
        """
        Разбор селектора правила.

        Принимает SamplingRule или строковое значение ("left", "right",
        "midpoint") без учёта регистра и пробелов по краям.

        Args:
            value: Селектор правила

        Returns:
            SamplingRule или None, если селектор не распознан
        """
        if isinstance(value, cls):
            return value

        if not isinstance(value, str):
            return None

        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


_RULE_OFFSETS = {
    SamplingRule.LEFT: 0.0,
    SamplingRule.RIGHT: 1.0,
    SamplingRule.MIDPOINT: 0.5,
}


class FailureReason(str, Enum):
    """Причина отказа валидации входных параметров.

    Порядок проверок в engine совпадает с порядком объявления.
    """

    OUT_OF_RANGE_ENDPOINT = "OutOfRangeEndpoint"
    NON_POSITIVE_INTERVAL = "NonPositiveInterval"
    INVALID_PARTITION_COUNT = "InvalidPartitionCount"
    UNRECOGNIZED_SAMPLING_RULE = "UnrecognizedSamplingRule"


# =============================================================================
# MODELS
# =============================================================================


class Interval(BaseModel):
    """Интервал интегрирования [a, b].

    Проверка a < b выполняется engine (NonPositiveInterval).
    """

    a: float = Field(..., description="Left bound")
    b: float = Field(..., description="Right bound")

    model_config = {"frozen": True}

    @property
    def length(self) -> float:
        """Длина интервала b - a (может быть <= 0 до валидации)."""
        return self.b - self.a


class IntegrationRequest(BaseModel):
    """Параметры одного вызова интегрирования.

    Соответствует контракту riemann_request.
    """

    a: float = Field(..., description="Left bound")
    b: float = Field(..., description="Right bound")
    n: int = Field(..., description="Partition count")
    rule: SamplingRule = Field(..., description="Sampling rule")

    model_config = {"frozen": True}

    @property
    def interval(self) -> Interval:
        return Interval(a=self.a, b=self.b)

    def to_contract(self) -> dict:
        """Payload контракта riemann_request."""
        return {"a": self.a, "b": self.b, "n": self.n, "rule": self.rule.value}


@dataclass(frozen=True)
class SubintervalSample:
    """Вклад одного подынтервала: создаётся и отбрасывается в пределах вызова."""

    index: int
    x: float
    height: float  # f(x)
    area: float  # f(x) * dx
    running_total: float
