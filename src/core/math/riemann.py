"""
Riemann Sum Engine — приближение определённого интеграла суммой прямоугольников

Для f, [a, b], n и правила выбора точки вычисляет:

    dx  = (b - a) / n
    x_i = a + (i + offset) * dx,   offset: LEFT=0, RIGHT=1, MIDPOINT=0.5
    S   = Σ f(x_i) * dx,           i = 0 .. n-1 (строго по возрастанию i)

Порядок проверок (первая нарушенная → немедленный отказ, f не вызывается):
1. a и b в [min_bound, max_bound]     → OUT_OF_RANGE_ENDPOINT
2. b > a                              → NON_POSITIVE_INTERVAL
3. n — int, 1 <= n <= max_partitions  → INVALID_PARTITION_COUNT
4. rule ∈ {LEFT, RIGHT, MIDPOINT}     → UNRECOGNIZED_SAMPLING_RULE

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Отказ валидации → value == 0.0 + FailureReason, без исключения
2. NaN/Inf из f НЕ санитизируются и попадают в результат
3. Engine не хранит состояние между вызовами (идемпотентность)
4. Reporter вызывается не более одного раза на подынтервал и не влияет на результат
5. Engine не подставляет значения по умолчанию (это политика вызывающей стороны)
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Iterator, Optional, Tuple

from src.core.config import EngineConfig
from src.core.domain.integration import (
    FailureReason,
    IntegrationRequest,
    SamplingRule,
    SubintervalSample,
)
from src.core.math.numerical_safeguards import (
    is_in_range,
    is_int_in_range,
    is_valid_float,
)
from src.reporting.sinks import ProgressReporter

logger = logging.getLogger(__name__)

Integrand = Callable[[float], float]


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class RiemannSumResult:
    """Результат одного вызова интегрирования."""

    value: float
    failure: Optional[FailureReason]

    # Параметры разбиения (0 при отказе до шага разбиения)
    rule: Optional[SamplingRule]
    n: int
    dx: float

    # Детали
    details: str

    @property
    def ok(self) -> bool:
        return self.failure is None

    def to_dict(self) -> Dict[str, Any]:
        """Payload контракта riemann_result (NaN/Inf → null)."""
        return {
            "ok": self.ok,
            "value": self.value if is_valid_float(self.value) else None,
            "failure": self.failure.value if self.failure is not None else None,
            "rule": self.rule.value if self.rule is not None else None,
            "n": self.n,
            "dx": self.dx,
            "details": self.details,
        }


# =============================================================================
# PARTITION
# =============================================================================


def iter_sample_points(
    a: float,
    b: float,
    n: int,
    rule: SamplingRule,
) -> Iterator[Tuple[int, float]]:
    """
    Точки выбора для каждого подынтервала разбиения.

    Входные параметры НЕ проверяются: вызывающая сторона передаёт
    уже валидированные значения.

    Args:
        a: Левая граница
        b: Правая граница
        n: Количество подынтервалов
        rule: Правило выбора точки

    Yields:
        (i, x_i) для i = 0 .. n-1

    Examples:
        >>> list(iter_sample_points(0.0, 1.0, 2, SamplingRule.MIDPOINT))
        [(0, 0.25), (1, 0.75)]
    """
    dx = (b - a) / n
    offset = rule.offset

    for i in range(n):
        yield i, a + (i + offset) * dx


# =============================================================================
# ENGINE
# =============================================================================


class RiemannSumEngine:
    """Riemann Sum Engine.

    Stateless: один экземпляр безопасно использовать для любого
    количества независимых вызовов.
    """

    def __init__(self, config: EngineConfig | None = None):
        """
        Args:
            config: границы допустимых параметров (опционально, используется default)
        """
        self.config = config or EngineConfig()

    def integrate(
        self,
        f: Integrand,
        a: Any,
        b: Any,
        n: Any,
        rule: Any,
        reporter: Optional[ProgressReporter] = None,
    ) -> RiemannSumResult:
        """Приближение ∫ₐᵇ f(x) dx суммой Римана.

        Args:
            f: интегрируемая функция float → float
            a: левая граница интервала
            b: правая граница интервала
            n: количество подынтервалов
            rule: SamplingRule или его строковое значение
            reporter: приёмник пошагового отчёта (опционально)

        Returns:
            RiemannSumResult: значение суммы или 0.0 с причиной отказа
        """
        cfg = self.config

        # 1. Границы в допустимом диапазоне
        if not (
            is_in_range(a, cfg.min_bound, cfg.max_bound)
            and is_in_range(b, cfg.min_bound, cfg.max_bound)
        ):
            return self._failed(
                FailureReason.OUT_OF_RANGE_ENDPOINT,
                n=n,
                details=(
                    f"endpoints must lie in [{cfg.min_bound}, {cfg.max_bound}], "
                    f"got a={a!r}, b={b!r}"
                ),
            )

        a = float(a)
        b = float(b)

        # 2. Положительная длина интервала
        if not b > a:
            return self._failed(
                FailureReason.NON_POSITIVE_INTERVAL,
                n=n,
                details=f"b must be greater than a, got a={a!r}, b={b!r}",
            )

        # 3. Количество разбиений
        if not is_int_in_range(n, 1, cfg.max_partitions):
            return self._failed(
                FailureReason.INVALID_PARTITION_COUNT,
                n=n,
                details=f"n must be an integer in [1, {cfg.max_partitions}], got {n!r}",
            )

        # 4. Правило выбора точки
        sampling_rule = SamplingRule.parse(rule)
        if sampling_rule is None:
            return self._failed(
                FailureReason.UNRECOGNIZED_SAMPLING_RULE,
                n=n,
                details=(
                    f"rule must be one of {[r.value for r in SamplingRule]}, got {rule!r}"
                ),
            )

        # Суммирование строго по возрастанию i
        dx = (b - a) / n
        total = 0.0

        for i, x in iter_sample_points(a, b, n, sampling_rule):
            height = f(x)
            area = height * dx
            total += area

            if reporter is not None:
                reporter.report(
                    SubintervalSample(
                        index=i,
                        x=x,
                        height=height,
                        area=area,
                        running_total=total,
                    )
                )

        logger.debug(
            "riemann sum computed: rule=%s n=%d a=%r b=%r value=%r",
            sampling_rule.value,
            n,
            a,
            b,
            total,
        )

        return RiemannSumResult(
            value=total,
            failure=None,
            rule=sampling_rule,
            n=n,
            dx=dx,
            details=f"OK: {sampling_rule.value} sum over [{a!r}, {b!r}] with n={n}",
        )

    def integrate_request(
        self,
        f: Integrand,
        request: IntegrationRequest,
        reporter: Optional[ProgressReporter] = None,
    ) -> RiemannSumResult:
        """Интегрирование по IntegrationRequest."""
        return self.integrate(f, request.a, request.b, request.n, request.rule, reporter)

    def _failed(self, reason: FailureReason, n: Any, details: str) -> RiemannSumResult:
        """Результат отказа валидации: value == 0.0."""
        logger.debug("riemann sum rejected: %s (%s)", reason.value, details)

        return RiemannSumResult(
            value=0.0,
            failure=reason,
            rule=None,
            n=n if is_int_in_range(n, 0, self.config.max_partitions) else 0,
            dx=0.0,
            details=details,
        )


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def integrate(
    f: Integrand,
    a: Any,
    b: Any,
    n: Any,
    rule: Any,
    reporter: Optional[ProgressReporter] = None,
    config: EngineConfig | None = None,
) -> RiemannSumResult:
    """
    Приближение ∫ₐᵇ f(x) dx суммой Римана.

    Args:
        f: интегрируемая функция
        a: левая граница
        b: правая граница
        n: количество подынтервалов
        rule: SamplingRule или "left" / "right" / "midpoint"
        reporter: приёмник пошагового отчёта (опционально)
        config: границы (опционально)

    Returns:
        RiemannSumResult

    Examples:
        >>> integrate(lambda x: x * x, 0.0, 1.0, 1, SamplingRule.LEFT).value
        0.0
        >>> integrate(lambda x: x, 5.0, 5.0, 10, "left").failure
        <FailureReason.NON_POSITIVE_INTERVAL: 'NonPositiveInterval'>
    """
    return RiemannSumEngine(config).integrate(f, a, b, n, rule, reporter)


def compare_rules(
    f: Integrand,
    a: Any,
    b: Any,
    n: Any,
    rules: Iterable[SamplingRule] = tuple(SamplingRule),
    config: EngineConfig | None = None,
) -> Dict[SamplingRule, RiemannSumResult]:
    """
    Сумма Римана для нескольких правил на одном разбиении.

    Args:
        f: интегрируемая функция
        a: левая граница
        b: правая граница
        n: количество подынтервалов
        rules: правила (default: LEFT, RIGHT, MIDPOINT)
        config: границы (опционально)

    Returns:
        {rule: RiemannSumResult} в порядке rules
    """
    engine = RiemannSumEngine(config)
    return {rule: engine.integrate(f, a, b, n, rule) for rule in rules}
