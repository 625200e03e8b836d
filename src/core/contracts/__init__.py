"""
Contract Validation Module

Модуль для валидации JSON контрактов запроса и результата интегрирования.
"""

from .validators import (
    DEFAULT_SCHEMA_DIR,
    ContractValidator,
    RiemannRequestValidator,
    RiemannResultValidator,
    SchemaLoader,
    get_schema_loader,
    validate_riemann_request,
    validate_riemann_result,
)

__all__ = [
    "DEFAULT_SCHEMA_DIR",
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "RiemannRequestValidator",
    "RiemannResultValidator",
    # Functions
    "get_schema_loader",
    "validate_riemann_request",
    "validate_riemann_result",
]
