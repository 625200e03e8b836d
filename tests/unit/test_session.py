"""Тесты для Integration Session.

Coverage:
- Успешный вызов без подстановки
- Отказ без fallback → результат engine как есть
- Отказ с fallback → один повтор с набором по умолчанию
- Повтор не выполняется для идентичных параметров
"""

import pytest

from src.app import IntegrationSession
from src.core.config import EngineConfig
from src.core.domain.integration import FailureReason, IntegrationRequest, SamplingRule
from src.core.math.riemann import RiemannSumEngine
from src.reporting.sinks import CallbackReporter


class CountingEngine(RiemannSumEngine):
    """Engine, считающий вызовы integrate."""

    def __init__(self, config=None):
        super().__init__(config)
        self.calls = 0

    def integrate(self, *args, **kwargs):
        self.calls += 1
        return super().integrate(*args, **kwargs)


def identity(x: float) -> float:
    return x


@pytest.fixture
def engine():
    return CountingEngine()


class TestIntegrationSession:
    def test_success(self, engine):
        request = IntegrationRequest(a=0.0, b=2.0, n=4, rule="midpoint")
        outcome = IntegrationSession(engine).run(identity, request)

        assert outcome.result.ok
        assert outcome.result.value == 2.0
        assert outcome.request is request
        assert outcome.used_defaults is False
        assert outcome.first_failure is None
        assert engine.calls == 1

    def test_failure_without_fallback(self, engine):
        request = IntegrationRequest(a=3.0, b=1.0, n=4, rule="left")
        outcome = IntegrationSession(engine).run(identity, request)

        assert outcome.result.failure == FailureReason.NON_POSITIVE_INTERVAL
        assert outcome.result.value == 0.0
        assert outcome.used_defaults is False
        assert engine.calls == 1

    def test_failure_with_fallback_uses_defaults_once(self, engine):
        request = IntegrationRequest(a=0.0, b=1.0, n=5000, rule="right")
        outcome = IntegrationSession(engine).run(identity, request, fallback_to_defaults=True)

        assert outcome.used_defaults is True
        assert outcome.first_failure == FailureReason.INVALID_PARTITION_COUNT
        assert outcome.request == IntegrationRequest(a=0.0, b=1.0, n=10, rule=SamplingRule.RIGHT)
        assert outcome.result.ok
        assert outcome.result.value == pytest.approx(0.55)
        assert engine.calls == 2

    def test_no_retry_when_defaults_identical(self):
        """Набор по умолчанию отвергнут конфигурацией → без повторного вызова."""
        engine = CountingEngine(EngineConfig(max_partitions=5))
        request = IntegrationRequest(a=0.0, b=1.0, n=10, rule="midpoint")

        outcome = IntegrationSession(engine).run(identity, request, fallback_to_defaults=True)

        assert outcome.used_defaults is False
        assert outcome.first_failure == FailureReason.INVALID_PARTITION_COUNT
        assert outcome.result.failure == FailureReason.INVALID_PARTITION_COUNT
        assert engine.calls == 1

    def test_reporter_passed_to_engine(self, engine):
        samples = []
        session = IntegrationSession(engine, reporter=CallbackReporter(samples.append))
        session.run(identity, IntegrationRequest(a=0.0, b=1.0, n=3, rule="left"))
        assert len(samples) == 3

    def test_default_engine(self):
        outcome = IntegrationSession().run(
            identity, IntegrationRequest(a=0.0, b=1.0, n=4, rule="left")
        )
        assert outcome.result.value == 0.375
