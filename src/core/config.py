"""
Configuration — границы допустимых параметров и настройки приложения

Два уровня конфигурации:
- EngineConfig: неизменяемые границы для Riemann Sum Engine (dataclass)
- Settings: настройки приложения из окружения (pydantic-settings, префикс RIEMANN_)

Значения по умолчанию:
- Интервал: каждая граница в [-999, 999]
- Количество разбиений: 1 <= n <= 999
- Параметры по умолчанию для подстановки: a=0.0, b=1.0, n=10
"""

import math
from dataclasses import dataclass
from functools import lru_cache
from typing import Final, Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.core.domain.integration import SamplingRule

# =============================================================================
# ГРАНИЦЫ
# =============================================================================

# Допустимый диапазон для каждой границы интервала
MIN_BOUND: Final[float] = -999.0
MAX_BOUND: Final[float] = 999.0

# Максимальное количество разбиений (совпадает с MAX_BOUND)
MAX_PARTITIONS: Final[int] = 999


# =============================================================================
# ПАРАМЕТРЫ ПО УМОЛЧАНИЮ (политика вызывающей стороны)
# =============================================================================

DEFAULT_A: Final[float] = 0.0
DEFAULT_B: Final[float] = 1.0
DEFAULT_N: Final[int] = 10
DEFAULT_RULE: Final[SamplingRule] = SamplingRule.MIDPOINT


# =============================================================================
# ENGINE CONFIG
# =============================================================================


@dataclass(frozen=True)
class EngineConfig:
    """Конфигурация Riemann Sum Engine.

    Границы для проверки входных параметров.
    """

    # Диапазон для каждой границы интервала (включительно)
    min_bound: float = MIN_BOUND
    max_bound: float = MAX_BOUND

    # Верхняя граница количества разбиений (включительно)
    max_partitions: int = MAX_PARTITIONS

    def __post_init__(self) -> None:
        if not (math.isfinite(self.min_bound) and math.isfinite(self.max_bound)):
            raise ValueError(
                f"bounds must be finite, got [{self.min_bound}, {self.max_bound}]"
            )

        if self.min_bound >= self.max_bound:
            raise ValueError(
                f"min_bound {self.min_bound} must be < max_bound {self.max_bound}"
            )

        if isinstance(self.max_partitions, bool) or not isinstance(self.max_partitions, int):
            raise ValueError(f"max_partitions must be int, got {self.max_partitions!r}")

        if self.max_partitions < 1:
            raise ValueError(f"max_partitions must be >= 1, got {self.max_partitions}")

    @classmethod
    def from_settings(cls, settings: "Settings") -> "EngineConfig":
        """Построение EngineConfig из настроек приложения."""
        return cls(
            min_bound=settings.min_bound,
            max_bound=settings.max_bound,
            max_partitions=settings.max_partitions,
        )


# =============================================================================
# SETTINGS
# =============================================================================

# Имена уровней logging, допустимые в настройках и в CLI
LOG_LEVELS: Final[tuple] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Настройки приложения (переменные окружения RIEMANN_*, файл .env)."""

    model_config = SettingsConfigDict(
        env_prefix="RIEMANN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Границы
    min_bound: float = Field(default=MIN_BOUND, description="Minimum admissible endpoint")
    max_bound: float = Field(default=MAX_BOUND, description="Maximum admissible endpoint")
    max_partitions: int = Field(default=MAX_PARTITIONS, ge=1, description="Maximum partition count")

    # Политика подстановки
    default_rule: SamplingRule = Field(
        default=DEFAULT_RULE,
        description="Sampling rule used when the caller substitutes defaults",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: Literal["text", "json"] = Field(
        default="text",
        description="Log format: 'text' for plain lines, 'json' for one JSON object per line",
    )
    log_file_path: Optional[str] = Field(
        default=None,
        description="Append-only log file (disabled when unset)",
    )
    transcript_path: Optional[str] = Field(
        default=None,
        description="Default plain-text transcript file for the CLI (disabled when unset)",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Проверка имени уровня logging"""
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"unknown log level: {v}")
        return level

    @field_validator("max_bound")
    @classmethod
    def validate_bounds_order(cls, v: float, info) -> float:
        """Проверка, что max_bound > min_bound"""
        if "min_bound" in info.data:
            lower = info.data["min_bound"]
            if v <= lower:
                raise ValueError(f"max_bound {v} must be > min_bound {lower}")
        return v


@lru_cache()
def get_settings() -> Settings:
    """Кэшированный экземпляр настроек."""
    return Settings()
