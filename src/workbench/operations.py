"""Workbench — batch-операции над упорядоченным набором матриц

Два класса операций:
- Поэлементные (TRANSPOSE, POWER, SCALAR_ADD/SUB/MUL): применяются к
  КАЖДОЙ выбранной матрице отдельно, по результату на матрицу.
- Агрегирующие (ADD, SUBTRACT, MULTIPLY): объединяют ВСЕ выбранные
  матрицы в порядке выбора в один результат.

Также:
- solve_expression: вычисление выражения с записью в журнал
- promote_result / promote_results: превращение результата во вход
"""

import logging
from typing import Final, Sequence

from src.core.domain.errors import (
    DimensionMismatch,
    EmptySelection,
    InsufficientOperands,
    UnsupportedOperation,
)
from src.core.domain.matrix import Matrix, new_matrix_id
from src.core.domain.operation_log import OperationLog, OperationType
from src.core.math.matrix_algebra import (
    SCALAR_OPERATORS,
    add_matrices,
    clone_data,
    dimensions_match,
    multiplication_chain_valid,
    multiply_matrices,
    power_matrix,
    scalar_operation,
    subtract_matrices,
    transpose_matrix,
)
from src.expression.evaluator import EvaluatorConfig, ExpressionEvaluator

logger = logging.getLogger(__name__)

# =============================================================================
# КЛАССЫ ОПЕРАЦИЙ
# =============================================================================

PER_MATRIX_OPERATIONS: Final[frozenset[OperationType]] = frozenset(
    {OperationType.TRANSPOSE, OperationType.POWER, *SCALAR_OPERATORS}
)

AGGREGATE_OPERATIONS: Final[frozenset[OperationType]] = frozenset(
    {OperationType.ADD, OperationType.SUBTRACT, OperationType.MULTIPLY}
)

# Минимум матриц для агрегирующей операции
AGGREGATE_MIN_OPERANDS: Final[int] = 2


# =============================================================================
# BATCH OPERATIONS
# =============================================================================


def _apply_per_matrix(
    operation: OperationType, matrix: Matrix, scalar: float, exponent: float
) -> Matrix:
    if operation == OperationType.TRANSPOSE:
        return transpose_matrix(matrix)
    if operation == OperationType.POWER:
        return power_matrix(matrix, exponent)
    return scalar_operation(matrix, scalar, operation)


def _apply_aggregate(operation: OperationType, selected: Sequence[Matrix]) -> Matrix:
    if len(selected) < AGGREGATE_MIN_OPERANDS:
        raise InsufficientOperands(
            f"{operation.value} requires at least {AGGREGATE_MIN_OPERANDS} matrices."
        )

    if operation == OperationType.MULTIPLY:
        if not multiplication_chain_valid(selected):
            raise DimensionMismatch(
                "Incompatible dimensions for chained multiplication (cols of A != rows of B)."
            )
        return multiply_matrices(selected)

    if not dimensions_match(selected):
        action = "addition" if operation == OperationType.ADD else "subtraction"
        raise DimensionMismatch(f"Incompatible dimensions for {action}.")
    if operation == OperationType.ADD:
        return add_matrices(selected)
    return subtract_matrices(selected)


def apply_operation(
    operation: OperationType,
    selected: Sequence[Matrix],
    scalar: float = 0.0,
    exponent: float = 2,
) -> OperationLog:
    """Выполнение batch-операции над выбранными матрицами.

    Args:
        operation: тип операции (кроме EXPRESSION)
        selected: матрицы в порядке выбора
        scalar: скаляр k для SCALAR_* операций
        exponent: показатель для POWER

    Returns:
        OperationLog с результатами (по одному на матрицу или один общий)

    Raises:
        EmptySelection: нет выбранных матриц
        InsufficientOperands: агрегирующая операция с одной матрицей
        DimensionMismatch: несовместимые размерности
        InvalidExponent: показатель не целое >= 1
        UnsupportedOperation: EXPRESSION или иной не batch тип
    """
    if not selected:
        raise EmptySelection("Select at least one matrix.")

    if operation in PER_MATRIX_OPERATIONS:
        results = [_apply_per_matrix(operation, m, scalar, exponent) for m in selected]
    elif operation in AGGREGATE_OPERATIONS:
        results = [_apply_aggregate(operation, selected)]
    else:
        raise UnsupportedOperation(f"{operation.value} is not a batch operation.")

    recorded_scalar: float | None = None
    if operation in SCALAR_OPERATORS:
        recorded_scalar = scalar
    elif operation == OperationType.POWER:
        recorded_scalar = exponent

    logger.debug("%s over %d matrices produced %d results", operation.value, len(selected), len(results))
    return OperationLog(
        type=operation,
        details=operation.value,
        input_matrices=[m.name for m in selected],
        scalar=recorded_scalar,
        result=results,
    )


def solve_expression(
    expression: str,
    matrices: Sequence[Matrix],
    config: EvaluatorConfig | None = None,
) -> OperationLog:
    """Вычисление выражения с записью в журнал.

    Returns:
        OperationLog типа EXPRESSION, result — полный trace

    Raises:
        ExpressionError: один из видов таксономии ошибок
    """
    trace = ExpressionEvaluator(config).evaluate_expression(expression, matrices)
    return OperationLog(
        type=OperationType.EXPRESSION,
        details=f"Expression: {expression}",
        input_matrices=[m.name for m in matrices],
        result=trace,
    )


# =============================================================================
# PROMOTION
# =============================================================================


def promote_result(result: Matrix, existing_count: int) -> Matrix:
    """
    Копия результата как новой входной матрицы.

    Имя 'R{n}' только для отображения: идентификатор выражения состоит
    из одних букв, поэтому в выражениях копия доступна по позиционной букве.

    Args:
        result: вычисленная матрица
        existing_count: сколько матриц уже есть у вызывающей стороны

    Returns:
        Новая матрица с новым id и именем R{existing_count + 1}
    """
    return result.model_copy(
        update={
            "id": new_matrix_id(),
            "name": f"R{existing_count + 1}",
            "data": clone_data(result.data),
        }
    )


def promote_results(results: Sequence[Matrix]) -> list[Matrix]:
    """Копии результатов batch-операции: новый id, имя в скобках."""
    return [
        r.model_copy(
            update={"id": new_matrix_id(), "name": f"({r.name})", "data": clone_data(r.data)}
        )
        for r in results
    ]
