"""
Тесты для базовых доменных моделей: Matrix, Scalar, OperationLog, ошибки

Проверяет:
1. Создание и валидацию моделей Pydantic
2. Инвариант формы data (rows×cols)
3. Immutability (frozen=True)
4. Сериализацию/десериализацию JSON
5. Таксономию ошибок (kind)
"""

import dataclasses

import pytest
from pydantic import ValidationError

from src.core.domain import (
    DimensionMismatch,
    ExpressionError,
    FinalResultMustBeMatrix,
    Matrix,
    OperandKind,
    OperationLog,
    OperationType,
    Scalar,
    UnknownVariable,
)


# =============================================================================
# MATRIX TESTS
# =============================================================================


class TestMatrix:
    """Тесты для модели Matrix"""

    def test_create(self, matrix_a):
        assert matrix_a.rows == 2
        assert matrix_a.cols == 2
        assert matrix_a.shape == "2x2"
        assert matrix_a.steps is None
        assert matrix_a.kind == OperandKind.MATRIX

    def test_default_ids_unique(self):
        m1 = Matrix(name="M", rows=1, cols=1, data=[[1]])
        m2 = Matrix(name="M", rows=1, cols=1, data=[[1]])
        assert m1.id and m2.id
        assert m1.id != m2.id

    def test_ints_coerced_to_float(self):
        m = Matrix(name="M", rows=1, cols=2, data=[[1, 2]])
        assert all(isinstance(v, float) for v in m.data[0])

    def test_wrong_row_count(self):
        with pytest.raises(ValidationError, match="rows"):
            Matrix(name="M", rows=3, cols=2, data=[[1, 2], [3, 4]])

    def test_ragged_rows(self):
        with pytest.raises(ValidationError, match="columns"):
            Matrix(name="M", rows=2, cols=2, data=[[1, 2], [3]])

    @pytest.mark.parametrize("rows, cols", [(0, 1), (1, 0), (-1, 1)])
    def test_dimensions_positive(self, rows, cols):
        with pytest.raises(ValidationError):
            Matrix(name="M", rows=rows, cols=cols, data=[])

    def test_frozen(self, matrix_a):
        with pytest.raises(ValidationError):
            matrix_a.name = "Other"

    def test_is_square(self, matrix_a, matrix_2x3):
        assert matrix_a.is_square()
        assert not matrix_2x3.is_square()

    def test_same_shape(self, matrix_a, matrix_b, matrix_3x3):
        assert matrix_a.same_shape(matrix_b)
        assert not matrix_a.same_shape(matrix_3x3)

    def test_json_round_trip(self, matrix_a):
        restored = Matrix.model_validate_json(matrix_a.model_dump_json())
        assert restored == matrix_a
        assert "kind" not in matrix_a.model_dump()


# =============================================================================
# SCALAR TESTS
# =============================================================================


class TestScalar:
    """Тесты для скалярного операнда"""

    def test_kind(self):
        assert Scalar(1.5).kind == OperandKind.SCALAR

    def test_value_equality(self):
        assert Scalar(2.0) == Scalar(2.0)

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            Scalar(1.0).value = 2.0


# =============================================================================
# OPERATION LOG TESTS
# =============================================================================


class TestOperationLog:
    """Тесты для модели OperationLog"""

    def test_defaults(self):
        log = OperationLog(type=OperationType.ADD, details="ADD")
        assert log.id
        assert log.timestamp.tzinfo is not None
        assert log.input_matrices == []
        assert log.scalar is None
        assert log.final_result() is None

    def test_final_result(self, matrix_a, matrix_b):
        log = OperationLog(
            type=OperationType.EXPRESSION,
            details="Expression: A+B",
            result=[matrix_a, matrix_b],
        )
        assert log.final_result() is log.result[-1]
        assert log.final_result().id == "id-b"

    def test_type_from_string(self):
        log = OperationLog(type="TRANSPOSE", details="TRANSPOSE")
        assert log.type == OperationType.TRANSPOSE

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            OperationLog(type="DIVIDE", details="DIVIDE")


# =============================================================================
# ERROR TAXONOMY TESTS
# =============================================================================


class TestErrors:
    """Тесты таксономии ошибок"""

    def test_kind_names(self):
        assert UnknownVariable.kind == "UnknownVariable"
        assert DimensionMismatch.kind == "DimensionMismatch"
        assert FinalResultMustBeMatrix.kind == "FinalResultMustBeMatrix"

    def test_message_preserved(self):
        error = UnknownVariable("Matrix 'X' not found.")
        assert isinstance(error, ExpressionError)
        assert str(error) == "Matrix 'X' not found."
