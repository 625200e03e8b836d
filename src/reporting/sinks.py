"""Progress Reporting — приёмники пошагового отчёта Riemann Sum Engine.

Engine вызывает reporter.report(sample) ровно один раз на подынтервал,
после накопления его площади. Отчёт чисто наблюдательный: reporter
не влияет на возвращаемое значение.

Реализации:
- NullReporter: ничего не делает
- CallbackReporter: передаёт sample в функцию
- LoggingReporter: пишет строку в logger (console/transcript через handlers)
- TranscriptReporter: пишет строку в текстовый поток (append-only)
- FanOutReporter: раздаёт sample нескольким reporters по порядку
"""

import logging
from typing import Callable, Iterable, List, Protocol, TextIO, runtime_checkable

from src.core.domain.integration import SubintervalSample


def format_sample(sample: SubintervalSample) -> str:
    """Каноническая строка отчёта по подынтервалу."""
    return (
        f"i={sample.index} x={sample.x!r} f(x)={sample.height!r} "
        f"area={sample.area!r} total={sample.running_total!r}"
    )


@runtime_checkable
class ProgressReporter(Protocol):
    """Приёмник пошагового отчёта."""

    def report(self, sample: SubintervalSample) -> None:
        ...


class NullReporter:
    """Reporter без побочных эффектов."""

    def report(self, sample: SubintervalSample) -> None:
        return None


class CallbackReporter:
    """Reporter, передающий каждый sample в функцию."""

    def __init__(self, callback: Callable[[SubintervalSample], None]):
        self._callback = callback

    def report(self, sample: SubintervalSample) -> None:
        self._callback(sample)


class LoggingReporter:
    """Reporter, пишущий строку отчёта в logger.

    Console и transcript file подключаются как handlers logger
    (см. src.core.logging_config).
    """

    def __init__(self, logger: logging.Logger, level: int = logging.DEBUG):
        """
        Args:
            logger: целевой logger
            level: уровень записей (default DEBUG)
        """
        self._logger = logger
        self._level = level

    def report(self, sample: SubintervalSample) -> None:
        if self._logger.isEnabledFor(self._level):
            self._logger.log(self._level, "%s", format_sample(sample))


class TranscriptReporter:
    """Reporter, дописывающий строки отчёта в текстовый поток.

    Поток открывает и закрывает вызывающая сторона.
    """

    def __init__(self, stream: TextIO):
        self._stream = stream

    def report(self, sample: SubintervalSample) -> None:
        self._stream.write(format_sample(sample) + "\n")


class FanOutReporter:
    """Reporter, раздающий sample нескольким reporters по порядку.

    Исключение любого reporter пробрасывается вызывающей стороне.
    """

    def __init__(self, *reporters: ProgressReporter):
        self._reporters: List[ProgressReporter] = list(reporters)

    @classmethod
    def of(cls, reporters: Iterable[ProgressReporter]) -> "FanOutReporter":
        return cls(*reporters)

    def __len__(self) -> int:
        return len(self._reporters)

    def report(self, sample: SubintervalSample) -> None:
        for reporter in self._reporters:
            reporter.report(sample)
