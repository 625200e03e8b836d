"""Reporting — приёмники пошагового отчёта engine."""

from .sinks import (
    CallbackReporter,
    FanOutReporter,
    LoggingReporter,
    NullReporter,
    ProgressReporter,
    TranscriptReporter,
    format_sample,
)

__all__ = [
    "CallbackReporter",
    "FanOutReporter",
    "LoggingReporter",
    "NullReporter",
    "ProgressReporter",
    "TranscriptReporter",
    "format_sample",
]
