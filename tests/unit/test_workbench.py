"""
Тесты для Workbench — batch-операции, журнал и продвижение результатов

Проверяет:
- Поэлементные операции (по результату на матрицу)
- Агрегирующие операции (один результат, порядок выбора)
- Ошибки выбора и размерностей
- solve_expression → OperationLog типа EXPRESSION
- promote_result / promote_results
"""

import pytest

from src.core.domain import (
    DimensionMismatch,
    EmptySelection,
    InsufficientOperands,
    InvalidExponent,
    OperationLog,
    OperationType,
    UnknownVariable,
    UnsupportedOperation,
)
from src.workbench import (
    AGGREGATE_OPERATIONS,
    PER_MATRIX_OPERATIONS,
    apply_operation,
    promote_result,
    promote_results,
    solve_expression,
)


# =============================================================================
# ТЕСТЫ: Классы операций
# =============================================================================


class TestOperationClasses:
    """Разбиение OperationType на классы."""

    def test_partition(self):
        assert PER_MATRIX_OPERATIONS.isdisjoint(AGGREGATE_OPERATIONS)
        assert OperationType.EXPRESSION not in PER_MATRIX_OPERATIONS | AGGREGATE_OPERATIONS
        assert len(PER_MATRIX_OPERATIONS | AGGREGATE_OPERATIONS) == len(OperationType) - 1


# =============================================================================
# ТЕСТЫ: Поэлементные операции
# =============================================================================


class TestPerMatrixOperations:
    """TRANSPOSE / POWER / SCALAR_* над каждой матрицей."""

    def test_transpose_each(self, matrix_a, matrix_2x3):
        log = apply_operation(OperationType.TRANSPOSE, [matrix_a, matrix_2x3])
        assert isinstance(log, OperationLog)
        assert [m.name for m in log.result] == ["Matriz Aᵀ", "Matriz Eᵀ"]
        assert log.input_matrices == ["Matriz A", "Matriz E"]
        assert log.scalar is None

    def test_power_each(self, matrix_a, matrix_b):
        log = apply_operation(OperationType.POWER, [matrix_a, matrix_b], exponent=2)
        assert log.result[0].data == [[7, 10], [15, 22]]
        assert log.result[1].data == [[67, 78], [91, 106]]
        assert log.scalar == 2

    def test_power_invalid_exponent(self, matrix_a):
        with pytest.raises(InvalidExponent):
            apply_operation(OperationType.POWER, [matrix_a], exponent=0)

    def test_scalar_operations(self, matrix_a):
        log = apply_operation(OperationType.SCALAR_MUL, [matrix_a], scalar=-1)
        assert log.result[0].data == [[-1, -2], [-3, -4]]
        assert log.scalar == -1

        log = apply_operation(OperationType.SCALAR_ADD, [matrix_a], scalar=10)
        assert log.result[0].data == [[11, 12], [13, 14]]

        log = apply_operation(OperationType.SCALAR_SUB, [matrix_a], scalar=1)
        assert log.result[0].data == [[0, 1], [2, 3]]

    def test_single_matrix_allowed(self, matrix_a):
        log = apply_operation(OperationType.TRANSPOSE, [matrix_a])
        assert len(log.result) == 1


# =============================================================================
# ТЕСТЫ: Агрегирующие операции
# =============================================================================


class TestAggregateOperations:
    """ADD / SUBTRACT / MULTIPLY над всем выбором."""

    def test_add_in_selection_order(self, matrix_a, matrix_b):
        log = apply_operation(OperationType.ADD, [matrix_a, matrix_b, matrix_a])
        assert len(log.result) == 1
        assert log.result[0].name == "(Matriz A + Matriz B + Matriz A)"
        assert log.result[0].data == [[7, 10], [13, 16]]
        assert log.details == "ADD"

    def test_subtract(self, matrix_a, matrix_b):
        log = apply_operation(OperationType.SUBTRACT, [matrix_b, matrix_a])
        assert log.final_result().data == [[4, 4], [4, 4]]

    def test_multiply_chain(self, matrix_a, matrix_2x3, matrix_3x3):
        log = apply_operation(OperationType.MULTIPLY, [matrix_a, matrix_2x3, matrix_3x3])
        assert log.final_result().data == [[9, 12, 15], [19, 26, 33]]

    def test_requires_two(self, matrix_a):
        with pytest.raises(InsufficientOperands):
            apply_operation(OperationType.ADD, [matrix_a])

    def test_add_dimension_mismatch(self, matrix_a, matrix_3x3):
        with pytest.raises(DimensionMismatch, match="addition"):
            apply_operation(OperationType.ADD, [matrix_a, matrix_3x3])

    def test_subtract_dimension_mismatch(self, matrix_a, matrix_3x3):
        with pytest.raises(DimensionMismatch, match="subtraction"):
            apply_operation(OperationType.SUBTRACT, [matrix_a, matrix_3x3])

    def test_multiply_chain_invalid(self, matrix_2x3, matrix_a):
        with pytest.raises(DimensionMismatch, match="chained multiplication"):
            apply_operation(OperationType.MULTIPLY, [matrix_2x3, matrix_a])


# =============================================================================
# ТЕСТЫ: Ошибки выбора
# =============================================================================


class TestSelectionErrors:
    """Пустой выбор и не batch типы."""

    def test_empty_selection(self):
        with pytest.raises(EmptySelection):
            apply_operation(OperationType.ADD, [])

    def test_expression_not_batch(self, matrix_a):
        with pytest.raises(UnsupportedOperation):
            apply_operation(OperationType.EXPRESSION, [matrix_a])


# =============================================================================
# ТЕСТЫ: solve_expression
# =============================================================================


class TestSolveExpression:
    """Журнал вычисления выражения."""

    def test_log(self, matrix_a, matrix_b):
        log = solve_expression("A^2 + B", [matrix_a, matrix_b])
        assert log.type == OperationType.EXPRESSION
        assert log.details == "Expression: A^2 + B"
        assert log.input_matrices == ["Matriz A", "Matriz B"]
        assert [m.name for m in log.result] == ["Matriz A^2", "(Matriz A^2 + Matriz B)"]
        assert log.final_result().data == [[12, 16], [22, 30]]

    def test_bare_identifier_no_final(self, matrix_a):
        log = solve_expression("A", [matrix_a])
        assert log.result == []
        assert log.final_result() is None

    def test_errors_propagate(self, matrix_a):
        with pytest.raises(UnknownVariable):
            solve_expression("Z", [matrix_a])


# =============================================================================
# ТЕСТЫ: Продвижение результатов
# =============================================================================


class TestPromotion:
    """promote_result / promote_results."""

    def test_promote_result(self, matrix_a, matrix_b):
        [result] = solve_expression("A+B", [matrix_a, matrix_b]).result
        promoted = promote_result(result, existing_count=2)
        assert promoted.name == "R3"
        assert promoted.id != result.id
        assert promoted.data == result.data
        assert promoted.data is not result.data

    def test_promoted_usable_in_expression(self, matrix_a, matrix_b):
        inputs = [matrix_a, matrix_b]
        [result] = solve_expression("A+B", inputs).result
        inputs.append(promote_result(result, len(inputs)))
        assert inputs[-1].name == "R3"
        # Третья матрица доступна как 'C'
        log = solve_expression("C - A", inputs)
        assert log.final_result().data == [[5, 6], [7, 8]]

    def test_promote_results(self, matrix_a, matrix_b):
        log = apply_operation(OperationType.TRANSPOSE, [matrix_a, matrix_b])
        promoted = promote_results(log.result)
        assert [m.name for m in promoted] == ["(Matriz Aᵀ)", "(Matriz Bᵀ)"]
        assert {m.id for m in promoted}.isdisjoint({m.id for m in log.result})
