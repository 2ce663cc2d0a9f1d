"""
JSON Schema Contract Validators

Модуль для валидации JSON данных на границе движка: матрицы, которые
передаёт вызывающая сторона, и trace, который уходит внешним
рендерерам/экспортёрам (PDF/CSV/TXT).
Проверка выполняется jsonschema (Draft 2020-12).

Схемы:
- matrix.json (Matrix entity)
- trace.json (упорядоченная последовательность Matrix)
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Sequence

import jsonschema
from jsonschema import Draft202012Validator

from src.core.domain.matrix import Matrix


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик схем контрактов (matrix, trace).

    Схемы лежат в schema/ рядом с этим модулем (ставятся вместе с пакетом).
    """

    def __init__(self):
        self._schema_dir = Path(__file__).parent / "schema"

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'matrix')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема сама по себе невалидна
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Meta-validation
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Валидатор одного контракта: схема из SchemaLoader + Draft 2020-12.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Any) -> None:
        """
        Строгая проверка payload.

        Raises:
            jsonschema.ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Any) -> bool:
        """Проверка валидности данных без exception."""
        return self.validator.is_valid(data)

    def iter_errors(self, data: Any):
        """Итератор по всем ошибкам валидации."""
        return self.validator.iter_errors(data)


class MatrixValidator(ContractValidator):
    """Валидатор для контракта одной матрицы."""

    def __init__(self):
        super().__init__("matrix")


class TraceValidator(ContractValidator):
    """Валидатор для контракта trace (список матриц)."""

    def __init__(self):
        super().__init__("trace")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_matrix(data: Dict[str, Any]) -> None:
    """
    Валидация одной матрицы (dict).

    Raises:
        jsonschema.ValidationError: Если данные не соответствуют схеме
    """
    MatrixValidator().validate(data)


def validate_trace(data: List[Dict[str, Any]]) -> None:
    """
    Валидация trace (list of dict).

    Raises:
        jsonschema.ValidationError: Если данные не соответствуют схеме
    """
    TraceValidator().validate(data)


def load_matrices(payload: Iterable[Dict[str, Any]]) -> List[Matrix]:
    """
    Загрузка входных матриц из JSON-совместимых dict.

    Сначала проверка схемой, затем построение Pydantic моделей
    (которые дополнительно проверяют rows×cols).

    Raises:
        jsonschema.ValidationError: Если dict не соответствует схеме
        pydantic.ValidationError: Если data не совпадает с rows×cols
    """
    validator = MatrixValidator()
    matrices: List[Matrix] = []
    for item in payload:
        validator.validate(item)
        matrices.append(Matrix.model_validate(item))
    return matrices


def dump_trace(trace: Sequence[Matrix]) -> List[Dict[str, Any]]:
    """
    Сериализация trace в JSON-совместимые dict (контракт trace.json).

    Returns:
        Список dict в порядке вычисления
    """
    return [m.model_dump(mode="json") for m in trace]
