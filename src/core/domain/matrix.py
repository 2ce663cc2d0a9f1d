"""
Matrix — Модель матрицы и операндов выражения

Immutable Pydantic модель матрицы с пошаговым описанием вычисления (steps).
Scalar — голое число на стеке evaluator'а, без идентичности и без trace.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. data всегда содержит ровно rows строк по ровно cols элементов
2. Каждая операция создаёт новую матрицу с новым id (никаких мутаций data)
3. Матрица и скаляр различаются явным тегом OperandKind
"""

import uuid
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union

from pydantic import BaseModel, Field, model_validator


# =============================================================================
# ENUMS
# =============================================================================


class OperandKind(str, Enum):
    """Тег операнда на стеке evaluator'а"""

    SCALAR = "SCALAR"
    MATRIX = "MATRIX"


def new_matrix_id() -> str:
    """Новый непрозрачный идентификатор матрицы."""
    return str(uuid.uuid4())


# =============================================================================
# MATRIX MODEL
# =============================================================================


class Matrix(BaseModel):
    """
    Модель матрицы.

    Immutable модель (frozen=True). Результат любой операции — новый экземпляр
    с новым id. Входные матрицы принадлежат вызывающей стороне, движок их
    только читает.
    """

    id: str = Field(default_factory=new_matrix_id, min_length=1, description="Уникальный id")
    name: str = Field(..., description="Отображаемое имя (например, 'Matriz A')")
    rows: int = Field(..., gt=0, description="Количество строк")
    cols: int = Field(..., gt=0, description="Количество столбцов")
    data: list[list[float]] = Field(..., description="Значения, rows×cols")
    steps: list[str] | None = Field(None, description="Пошаговое описание вычисления")

    model_config = {"frozen": True}

    kind: ClassVar[OperandKind] = OperandKind.MATRIX

    @model_validator(mode="after")
    def validate_shape(self) -> "Matrix":
        """Проверка, что data ровно rows×cols"""
        if len(self.data) != self.rows:
            raise ValueError(f"data has {len(self.data)} rows, expected {self.rows}")
        for i, row in enumerate(self.data):
            if len(row) != self.cols:
                raise ValueError(
                    f"data row {i} has {len(row)} columns, expected {self.cols}"
                )
        return self

    @property
    def shape(self) -> str:
        """Размерность в виде 'RxC' (для сообщений об ошибках)."""
        return f"{self.rows}x{self.cols}"

    def is_square(self) -> bool:
        return self.rows == self.cols

    def same_shape(self, other: "Matrix") -> bool:
        return self.rows == other.rows and self.cols == other.cols


# =============================================================================
# SCALAR OPERAND
# =============================================================================


@dataclass(frozen=True)
class Scalar:
    """Скалярный операнд: голое число, без идентичности, не попадает в trace."""

    value: float

    kind: ClassVar[OperandKind] = OperandKind.SCALAR


# Значение на стеке evaluator'а
Operand = Union[Matrix, Scalar]
