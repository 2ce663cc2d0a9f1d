"""
OperationLog — Журнал выполненной операции

Immutable Pydantic модель: что было выполнено, над какими матрицами,
с каким скаляром и какой получен результат (одна или несколько матриц).
"""

import uuid
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field

from .matrix import Matrix


# =============================================================================
# ENUMS
# =============================================================================


class OperationType(str, Enum):
    """Тип операции"""

    ADD = "ADD"
    SUBTRACT = "SUBTRACT"
    MULTIPLY = "MULTIPLY"
    SCALAR_ADD = "SCALAR_ADD"
    SCALAR_SUB = "SCALAR_SUB"
    SCALAR_MUL = "SCALAR_MUL"
    TRANSPOSE = "TRANSPOSE"
    POWER = "POWER"
    EXPRESSION = "EXPRESSION"


# =============================================================================
# OPERATION LOG MODEL
# =============================================================================


class OperationLog(BaseModel):
    """
    Запись журнала операций.

    result — всегда список: batch-операции над каждой матрицей дают
    несколько результатов, выражение даёт полный trace.
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), description="Id записи")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), description="Время (UTC)"
    )
    type: OperationType = Field(..., description="Тип операции")
    details: str = Field(..., description="Описание (например, текст выражения)")
    input_matrices: list[str] = Field(default_factory=list, description="Имена входных матриц")
    scalar: float | None = Field(None, description="Скаляр (для SCALAR_* / POWER)")
    result: list[Matrix] = Field(default_factory=list, description="Результирующие матрицы")

    model_config = {"frozen": True}

    def final_result(self) -> Matrix | None:
        """
        Последняя матрица результата.

        Returns:
            Последний элемент result или None если результат пуст
        """
        if not self.result:
            return None
        return self.result[-1]
