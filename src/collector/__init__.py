"""Collector — сбор параметров интегрирования и политика подстановки."""

from .parameters import (
    DEFAULT_FUNCTION,
    DEFAULT_PARAMETERS,
    InteractiveParameterProvider,
    ParameterProvider,
    StaticParameterProvider,
    parse_parameters,
)

__all__ = [
    "DEFAULT_FUNCTION",
    "DEFAULT_PARAMETERS",
    "InteractiveParameterProvider",
    "ParameterProvider",
    "StaticParameterProvider",
    "parse_parameters",
]
