"""
JSON Schema Contract Validators

Модуль для валидации JSON payload-ов запроса и результата интегрирования.
Использует библиотеку jsonschema (Draft 2020-12).

Схемы лежат рядом с модулем (schema/*.json) и устанавливаются как package data:
- riemann_request.json (параметры вызова engine)
- riemann_result.json (результат вызова engine)
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator

DEFAULT_SCHEMA_DIR = Path(__file__).parent / "schema"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    По умолчанию читает schema/ рядом с этим модулем.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or DEFAULT_SCHEMA_DIR
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'riemann_result')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если файл не является валидной JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # meta-validation
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


@lru_cache()
def get_schema_loader() -> SchemaLoader:
    """Общий загрузчик схем пакета (создаётся при первом обращении)."""
    return SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = get_schema_loader().load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Валидация данных против схемы.

        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)


class RiemannRequestValidator(ContractValidator):
    """Валидатор для riemann_request контракта."""

    def __init__(self):
        super().__init__("riemann_request")


class RiemannResultValidator(ContractValidator):
    """Валидатор для riemann_result контракта."""

    def __init__(self):
        super().__init__("riemann_result")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_riemann_request(data: Dict[str, Any]) -> None:
    """
    Валидация riemann_request данных.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    RiemannRequestValidator().validate(data)


def validate_riemann_result(data: Dict[str, Any]) -> None:
    """
    Валидация riemann_result данных.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    RiemannResultValidator().validate(data)
