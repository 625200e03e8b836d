"""Integration Session — связывает engine, reporter и политику подстановки.

Политика (вызывающая сторона):
- Первый вызов engine с запрошенными параметрами
- При отказе и fallback_to_defaults=True: один повторный вызов с
  DEFAULT_PARAMETERS (правило запроса сохраняется, если оно распознано)
- Повтор не выполняется, если набор по умолчанию совпадает с запросом
"""

import logging
from dataclasses import dataclass
from typing import Optional

from src.collector.parameters import DEFAULT_PARAMETERS
from src.core.domain.integration import FailureReason, IntegrationRequest
from src.core.math.riemann import Integrand, RiemannSumEngine, RiemannSumResult
from src.reporting.sinks import ProgressReporter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionOutcome:
    """Итог сессии интегрирования."""

    request: IntegrationRequest  # параметры фактического вызова
    result: RiemannSumResult
    first_failure: Optional[FailureReason]  # отказ, вызвавший подстановку
    used_defaults: bool


class IntegrationSession:
    """Одна сессия: engine + optional reporter."""

    def __init__(
        self,
        engine: RiemannSumEngine | None = None,
        reporter: Optional[ProgressReporter] = None,
    ):
        self.engine = engine or RiemannSumEngine()
        self.reporter = reporter

    def run(
        self,
        f: Integrand,
        request: IntegrationRequest,
        *,
        fallback_to_defaults: bool = False,
    ) -> SessionOutcome:
        """Интегрирование с optional подстановкой параметров по умолчанию.

        Args:
            f: интегрируемая функция
            request: запрошенные параметры
            fallback_to_defaults: повторить с DEFAULT_PARAMETERS при отказе

        Returns:
            SessionOutcome
        """
        result = self.engine.integrate_request(f, request, self.reporter)
        if result.ok or not fallback_to_defaults:
            return SessionOutcome(
                request=request,
                result=result,
                first_failure=None,
                used_defaults=False,
            )

        fallback = IntegrationRequest(
            a=DEFAULT_PARAMETERS.a,
            b=DEFAULT_PARAMETERS.b,
            n=DEFAULT_PARAMETERS.n,
            rule=request.rule,
        )

        if fallback == request:
            return SessionOutcome(
                request=request,
                result=result,
                first_failure=result.failure,
                used_defaults=False,
            )

        logger.warning(
            "integration failed (%s), retrying with defaults a=%r b=%r n=%r",
            result.failure.value,
            fallback.a,
            fallback.b,
            fallback.n,
        )

        return SessionOutcome(
            request=fallback,
            result=self.engine.integrate_request(f, fallback, self.reporter),
            first_failure=result.failure,
            used_defaults=True,
        )
