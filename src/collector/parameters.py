"""Parameter Collection — сбор параметров (a, b, n, rule) для engine.

Политика подстановки (вызывающая сторона, НЕ engine):
- a, b, n разбираются из сырого текста
- Если хотя бы одно из a, b, n не разбирается или нарушает границы
  (a, b ∈ [min_bound, max_bound], b > a, 1 <= n <= max_partitions),
  подставляется весь набор по умолчанию {a: 0.0, b: 1.0, n: 10}
- rule: выбранное пользователем правило, если распознано, иначе default_rule

Границы берутся из EngineConfig: n сравнивается с max_partitions,
а не с границей интервала.
"""

import logging
from typing import Any, Callable, Optional, Protocol, Tuple

from src.catalog.functions import (
    FunctionKey,
    UnknownFunctionError,
    parse_function_key,
    render_menu,
)
from src.core.config import (
    DEFAULT_A,
    DEFAULT_B,
    DEFAULT_N,
    DEFAULT_RULE,
    EngineConfig,
)
from src.core.domain.integration import IntegrationRequest, SamplingRule
from src.core.math.numerical_safeguards import is_in_range, is_int_in_range

logger = logging.getLogger(__name__)

DEFAULT_PARAMETERS = IntegrationRequest(a=DEFAULT_A, b=DEFAULT_B, n=DEFAULT_N, rule=DEFAULT_RULE)

# Функция меню по умолчанию (первый пункт)
DEFAULT_FUNCTION: FunctionKey = FunctionKey.SQUARE


class ParameterProvider(Protocol):
    """Источник параметров одного вызова интегрирования."""

    def collect(self) -> IntegrationRequest:
        ...


def _parse_float(raw: Any) -> Optional[float]:
    if isinstance(raw, bool):
        return None
    try:
        return float(str(raw).strip())
    except ValueError:
        return None


def _parse_int(raw: Any) -> Optional[int]:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    try:
        return int(str(raw).strip())
    except ValueError:
        return None


def parse_parameters(
    raw_a: Any,
    raw_b: Any,
    raw_n: Any,
    raw_rule: Any,
    config: Optional[EngineConfig] = None,
    default_rule: SamplingRule = DEFAULT_RULE,
) -> Tuple[IntegrationRequest, bool]:
    """
    Разбор сырых параметров с подстановкой значений по умолчанию.

    Args:
        raw_a: левая граница (текст или число)
        raw_b: правая граница (текст или число)
        raw_n: количество разбиений (текст или число)
        raw_rule: правило выбора точки (текст или SamplingRule)
        config: границы (default: EngineConfig())
        default_rule: правило при нераспознанном raw_rule

    Returns:
        (IntegrationRequest, substituted): substituted=True если
        хотя бы одно значение заменено значением по умолчанию
    """
    cfg = config or EngineConfig()
    substituted = False

    rule = SamplingRule.parse(raw_rule)
    if rule is None:
        logger.warning("unrecognized sampling rule %r, using %s", raw_rule, default_rule.value)
        rule = default_rule
        substituted = True

    a = _parse_float(raw_a)
    b = _parse_float(raw_b)
    n = _parse_int(raw_n)

    valid = (
        a is not None
        and b is not None
        and n is not None
        and is_in_range(a, cfg.min_bound, cfg.max_bound)
        and is_in_range(b, cfg.min_bound, cfg.max_bound)
        and b > a
        and is_int_in_range(n, 1, cfg.max_partitions)
    )

    if not valid:
        logger.warning(
            "invalid parameters a=%r b=%r n=%r, using defaults a=%r b=%r n=%r",
            raw_a,
            raw_b,
            raw_n,
            DEFAULT_PARAMETERS.a,
            DEFAULT_PARAMETERS.b,
            DEFAULT_PARAMETERS.n,
        )
        return (
            IntegrationRequest(
                a=DEFAULT_PARAMETERS.a,
                b=DEFAULT_PARAMETERS.b,
                n=DEFAULT_PARAMETERS.n,
                rule=rule,
            ),
            True,
        )

    return IntegrationRequest(a=a, b=b, n=n, rule=rule), substituted


class StaticParameterProvider:
    """Provider с заранее заданным IntegrationRequest."""

    def __init__(self, request: IntegrationRequest):
        self._request = request

    def collect(self) -> IntegrationRequest:
        return self._request


class InteractiveParameterProvider:
    """Provider, запрашивающий параметры через input_fn/output_fn.

    Все значения проходят через parse_parameters: некорректный ввод
    заменяется набором по умолчанию.
    """

    def __init__(
        self,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
        config: Optional[EngineConfig] = None,
        default_rule: SamplingRule = DEFAULT_RULE,
    ):
        self._input = input_fn
        self._output = output_fn
        self.config = config or EngineConfig()
        self.default_rule = default_rule

        # Флаг последней подстановки (для отчёта вызывающей стороне)
        self.last_substituted = False

    def choose_function(self) -> FunctionKey:
        """Выбор функции из меню; нераспознанный выбор → первый пункт меню."""
        self._output("Enter the number which corresponds with one of the following functions:")
        for line in render_menu():
            self._output(line)

        raw = self._input("Enter Option Here: ")
        try:
            return parse_function_key(raw)
        except UnknownFunctionError:
            logger.warning("unknown function choice %r, using %s", raw, DEFAULT_FUNCTION.value)
            return DEFAULT_FUNCTION

    def collect(self) -> IntegrationRequest:
        cfg = self.config
        raw_a = self._input(f"Enter the left endpoint a ({cfg.min_bound} to {cfg.max_bound}): ")
        raw_b = self._input(f"Enter the right endpoint b (greater than a, at most {cfg.max_bound}): ")
        raw_n = self._input(f"Enter the number of partitions n (1 to {cfg.max_partitions}): ")
        raw_rule = self._input("Enter the sampling rule (left, right, or midpoint): ")

        request, substituted = parse_parameters(
            raw_a, raw_b, raw_n, raw_rule, config=cfg, default_rule=self.default_rule
        )
        self.last_substituted = substituted

        if substituted:
            self._output(
                f"Invalid input. Using a={request.a}, b={request.b}, "
                f"n={request.n}, rule={request.rule.value}."
            )

        return request
