"""
Dispatch — Операторы выражения и диспетчеризация по типам операндов

Закрытый набор операторов описан статической таблицей
symbol → (precedence, arity, handler). Обработчики сопоставляют пару
тегов операндов (SCALAR/MATRIX) явно, без проб типов.

| op | SCALAR,SCALAR | SCALAR,MATRIX / MATRIX,SCALAR | MATRIX,MATRIX             |
|----|---------------|-------------------------------|---------------------------|
| +  | a + b         | ScalarMatrixAdditionUnsupported | Add (равные rows×cols)  |
| -  | a - b         | ScalarMatrixAdditionUnsupported | Subtract                |
| *  | a * b         | ScalarOp умножение            | Multiply (A.cols == B.rows) |
| ^  | PowerOperandTypeError, кроме MATRIX ^ SCALAR (Power)                      |
| '  | унарный: только MATRIX (Transpose)                                        |

Каждый обработчик возвращает список вычисленных значений в порядке
вычисления; последний элемент — результат, который кладётся на стек.
"""

from dataclasses import dataclass
from typing import Callable, Final

from src.core.domain.errors import (
    DimensionMismatch,
    PowerOperandTypeError,
    ScalarMatrixAdditionUnsupported,
    TransposeRequiresMatrix,
)
from src.core.domain.matrix import Matrix, Operand, OperandKind, Scalar
from src.core.domain.operation_log import OperationType
from src.core.math.matrix_algebra import (
    add_matrices,
    multiply_two,
    power_sequence,
    scalar_operation,
    subtract_matrices,
    transpose_matrix,
)

SCALAR: Final = OperandKind.SCALAR
MATRIX: Final = OperandKind.MATRIX


# =============================================================================
# GENERIC OPERATIONS
# =============================================================================


def generic_add(a: Operand, b: Operand) -> Operand:
    """
    Сложение: скаляр+скаляр или матрица+матрица.

    Raises:
        ScalarMatrixAdditionUnsupported: Скаляр и матрица вперемешку
        DimensionMismatch: Разные rows×cols
    """
    pair = (a.kind, b.kind)
    if pair == (SCALAR, SCALAR):
        return Scalar(a.value + b.value)
    if pair == (MATRIX, MATRIX):
        if not a.same_shape(b):
            raise DimensionMismatch(
                f"Incompatible dimensions for addition: {a.shape} vs {b.shape}"
            )
        return add_matrices([a, b])
    raise ScalarMatrixAdditionUnsupported(
        "Cannot add a scalar and a matrix directly (only scalar multiplication is defined)"
    )


def generic_subtract(a: Operand, b: Operand) -> Operand:
    """
    Вычитание: скаляр-скаляр или матрица-матрица.

    Raises:
        ScalarMatrixAdditionUnsupported: Скаляр и матрица вперемешку
        DimensionMismatch: Разные rows×cols
    """
    pair = (a.kind, b.kind)
    if pair == (SCALAR, SCALAR):
        return Scalar(a.value - b.value)
    if pair == (MATRIX, MATRIX):
        if not a.same_shape(b):
            raise DimensionMismatch(
                f"Incompatible dimensions for subtraction: {a.shape} vs {b.shape}"
            )
        return subtract_matrices([a, b])
    raise ScalarMatrixAdditionUnsupported(
        "Cannot subtract a scalar and a matrix directly (only scalar multiplication is defined)"
    )


def generic_multiply(a: Operand, b: Operand) -> Operand:
    """
    Умножение для всех четырёх пар типов.

    Raises:
        DimensionMismatch: Матрица·матрица при A.cols != B.rows
    """
    pair = (a.kind, b.kind)
    if pair == (SCALAR, SCALAR):
        return Scalar(a.value * b.value)
    if pair == (SCALAR, MATRIX):
        return scalar_operation(b, a.value, OperationType.SCALAR_MUL)
    if pair == (MATRIX, SCALAR):
        return scalar_operation(a, b.value, OperationType.SCALAR_MUL)
    return multiply_two(a, b)


def generic_power(a: Operand, b: Operand) -> list[Matrix]:
    """
    Степень: основание — матрица, показатель — скаляр.

    Returns:
        Все последовательные степени (последняя — результат)

    Raises:
        PowerOperandTypeError: Основание не матрица или показатель не скаляр
        DimensionMismatch: Матрица не квадратная
        InvalidExponent: Показатель не целое >= 1
    """
    if (a.kind, b.kind) != (MATRIX, SCALAR):
        raise PowerOperandTypeError("Power requires a matrix base and a numeric exponent")
    return power_sequence(a, b.value)


def generic_transpose(a: Operand) -> Matrix:
    """
    Транспонирование: только для матриц.

    Raises:
        TransposeRequiresMatrix: Операнд — скаляр
    """
    if a.kind == SCALAR:
        raise TransposeRequiresMatrix("Transpose only applies to matrices")
    return transpose_matrix(a)


# =============================================================================
# OPERATOR TABLE
# =============================================================================


@dataclass(frozen=True)
class OperatorSpec:
    """Описание оператора: приоритет, арность и обработчик."""

    symbol: str
    precedence: int
    arity: int
    handler: Callable[..., list[Operand]]

    def apply(self, *operands: Operand) -> list[Operand]:
        return self.handler(*operands)


OPERATORS: Final[dict[str, OperatorSpec]] = {
    "+": OperatorSpec("+", 1, 2, lambda a, b: [generic_add(a, b)]),
    "-": OperatorSpec("-", 1, 2, lambda a, b: [generic_subtract(a, b)]),
    "*": OperatorSpec("*", 2, 2, lambda a, b: [generic_multiply(a, b)]),
    "^": OperatorSpec("^", 3, 2, generic_power),
    "'": OperatorSpec("'", 4, 1, lambda a: [generic_transpose(a)]),
}

# Зарезервированные символы: участвуют в приоритетах парсера, но без обработчика
RESERVED_PRECEDENCE: Final[dict[str, int]] = {"/": 2}

TRANSPOSE: Final[str] = "'"
POWER: Final[str] = "^"


def precedence_of(symbol: str) -> int | None:
    """
    Приоритет оператора.

    Returns:
        Приоритет или None для символа вне таблицы (например, ',')
    """
    spec = OPERATORS.get(symbol)
    if spec is not None:
        return spec.precedence
    return RESERVED_PRECEDENCE.get(symbol)
