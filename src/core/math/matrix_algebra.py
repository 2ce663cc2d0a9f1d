"""
Matrix Algebra — Примитивы матричной алгебры с пошаговым описанием

Каждый примитив возвращает НОВУЮ матрицу (новый id) со steps:
первая строка — краткое описание операции, далее по строке на каждую
ячейку результата в row-major порядке:

    c{row}{col} = <выражение> = <результат>      (индексы с 1)

Операции:
- Add(M1..Mn): поэлементная сумма слева направо
- Subtract(M1..Mn): M1 - M2 - ... - Mn последовательно
- Multiply(M1..Mn): ((M1·M2)·M3)·..., каждая ячейка округляется до 4 знаков
- Transpose(M): result[j][i] = M[i][j], без округления
- Power(M, n): n-1 последовательных умножений на исходную M (O(n), НЕ
  возведение в степень через квадраты)
- ScalarOp(M, k, op): поэлементно M[i][j] op k, округление до 4 знаков

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Входные матрицы никогда не мутируются
2. Каждый результат получает свежий id
3. Формат steps и округление воспроизводимы бит-в-бит
"""

import logging
import operator
import random
from typing import Callable, Final, Sequence

from src.core.domain.errors import (
    DimensionMismatch,
    InvalidExponent,
    UnsupportedOperation,
)
from src.core.domain.matrix import Matrix, new_matrix_id
from src.core.domain.operation_log import OperationType
from src.core.math.numeric import (
    format_number,
    format_operand,
    is_positive_integer,
    round_cell,
)

logger = logging.getLogger(__name__)

# =============================================================================
# ПАРАМЕТРЫ
# =============================================================================

# До скольких операндов имя результата перечисляет все имена
SMART_NAME_MAX_OPERANDS: Final[int] = 3

# Диапазон случайных значений ячеек: [RANDOM_CELL_MIN, RANDOM_CELL_MAX]
RANDOM_CELL_MIN: Final[int] = -10
RANDOM_CELL_MAX: Final[int] = 9

# Скалярные операции: символ в шагах и арифметика
SCALAR_OPERATORS: Final[dict[OperationType, tuple[str, Callable[[float, float], float]]]] = {
    OperationType.SCALAR_ADD: ("+", operator.add),
    OperationType.SCALAR_SUB: ("-", operator.sub),
    OperationType.SCALAR_MUL: ("·", operator.mul),
}


# =============================================================================
# ФАБРИКИ
# =============================================================================


def create_empty_data(rows: int, cols: int, fill: float = 0.0) -> list[list[float]]:
    """Новая сетка rows×cols, заполненная `fill`."""
    return [[fill for _ in range(cols)] for _ in range(rows)]


def clone_data(data: Sequence[Sequence[float]]) -> list[list[float]]:
    """Глубокая копия сетки значений."""
    return [list(row) for row in data]


def generate_random_data(
    rows: int, cols: int, rng: random.Random | None = None
) -> list[list[float]]:
    """
    Случайная целочисленная сетка rows×cols.

    Args:
        rows: Количество строк
        cols: Количество столбцов
        rng: Источник случайности (для воспроизводимости в тестах)

    Returns:
        Сетка целых значений из [-10, 9]
    """
    rng = rng or random.Random()
    return [
        [float(rng.randint(RANDOM_CELL_MIN, RANDOM_CELL_MAX)) for _ in range(cols)]
        for _ in range(rows)
    ]


def make_matrix(name: str, data: Sequence[Sequence[float]], matrix_id: str | None = None) -> Matrix:
    """
    Матрица из сетки значений; rows/cols выводятся из data.

    Raises:
        pydantic.ValidationError: Если сетка пустая или строки разной длины
    """
    rows = len(data)
    cols = len(data[0]) if rows else 0
    return Matrix(
        id=matrix_id or new_matrix_id(),
        name=name,
        rows=rows,
        cols=cols,
        data=clone_data(data),
    )


def make_random_matrix(
    name: str, rows: int, cols: int, rng: random.Random | None = None
) -> Matrix:
    """Матрица rows×cols со случайными значениями."""
    return make_matrix(name, generate_random_data(rows, cols, rng))


# =============================================================================
# ВАЛИДАЦИЯ РАЗМЕРНОСТЕЙ
# =============================================================================


def dimensions_match(matrices: Sequence[Matrix]) -> bool:
    """
    Проверка совпадения размерностей для Add/Subtract.

    Returns:
        True если матриц >= 2 и у всех одинаковые rows×cols
    """
    if len(matrices) < 2:
        return False
    first = matrices[0]
    return all(m.same_shape(first) for m in matrices)


def multiplication_chain_valid(matrices: Sequence[Matrix]) -> bool:
    """
    Проверка цепочки умножения: M[i].cols == M[i+1].rows для всех i.

    Returns:
        True если матриц >= 2 и цепочка согласована
    """
    if len(matrices) < 2:
        return False
    return all(
        left.cols == right.rows for left, right in zip(matrices, matrices[1:])
    )


def _require_same_shape(matrices: Sequence[Matrix], action: str) -> None:
    if not matrices:
        raise ValueError(f"{action} requires at least one matrix")
    first = matrices[0]
    for m in matrices[1:]:
        if not m.same_shape(first):
            raise DimensionMismatch(
                f"Incompatible dimensions for {action}: {first.shape} vs {m.shape}"
            )


def _smart_name(matrices: Sequence[Matrix], symbol: str, fallback: str) -> str:
    if len(matrices) <= SMART_NAME_MAX_OPERANDS:
        return "(" + f" {symbol} ".join(m.name for m in matrices) + ")"
    return fallback


# =============================================================================
# СЛОЖЕНИЕ И ВЫЧИТАНИЕ
# =============================================================================


def add_matrices(matrices: Sequence[Matrix]) -> Matrix:
    """
    Поэлементная сумма всех матриц слева направо (без округления).

    Args:
        matrices: Матрицы одинаковой размерности

    Returns:
        Новая матрица-сумма со steps

    Raises:
        DimensionMismatch: Если размерности различаются
    """
    _require_same_shape(matrices, "addition")
    rows, cols = matrices[0].rows, matrices[0].cols
    result = create_empty_data(rows, cols)
    steps: list[str] = []

    for i in range(rows):
        for j in range(cols):
            total = 0.0
            parts: list[str] = []
            for m in matrices:
                value = m.data[i][j]
                total += value
                parts.append(format_operand(value))
            result[i][j] = total
            steps.append(f"c{i + 1}{j + 1} = {' + '.join(parts)} = {format_number(total)}")

    return Matrix(
        name=_smart_name(matrices, "+", "Total Sum"),
        rows=rows,
        cols=cols,
        data=result,
        steps=["Adding elements in the same position:", *steps],
    )


def subtract_matrices(matrices: Sequence[Matrix]) -> Matrix:
    """
    Последовательная разность M1 - M2 - ... - Mn (без округления).

    Raises:
        DimensionMismatch: Если размерности различаются
    """
    _require_same_shape(matrices, "subtraction")
    rows, cols = matrices[0].rows, matrices[0].cols
    result = create_empty_data(rows, cols)
    steps: list[str] = []

    for i in range(rows):
        for j in range(cols):
            value = matrices[0].data[i][j]
            parts = [format_operand(value)]
            for m in matrices[1:]:
                subtrahend = m.data[i][j]
                value -= subtrahend
                parts.append(format_operand(subtrahend))
            result[i][j] = value
            steps.append(f"c{i + 1}{j + 1} = {' - '.join(parts)} = {format_number(value)}")

    return Matrix(
        name=_smart_name(matrices, "-", "Sequential Difference"),
        rows=rows,
        cols=cols,
        data=result,
        steps=["Subtracting elements in the same position sequentially:", *steps],
    )


# =============================================================================
# УМНОЖЕНИЕ
# =============================================================================


def multiply_two(a: Matrix, b: Matrix) -> Matrix:
    """
    Произведение двух матриц: строка на столбец.

    Каждая ячейка округляется до 4 знаков сразу после суммирования.

    Args:
        a: Левая матрица (rows×n)
        b: Правая матрица (n×cols)

    Returns:
        Новая матрица a.rows×b.cols с именем '(a · b)'

    Raises:
        DimensionMismatch: Если a.cols != b.rows
    """
    if a.cols != b.rows:
        raise DimensionMismatch(
            f"Incompatible dimensions for multiplication: {a.shape} and {b.shape}"
        )

    result = create_empty_data(a.rows, b.cols)
    steps: list[str] = []

    for i in range(a.rows):
        for j in range(b.cols):
            total = 0.0
            parts: list[str] = []
            for k in range(a.cols):
                left = a.data[i][k]
                right = b.data[k][j]
                total += left * right
                parts.append(f"({format_number(left)} · {format_number(right)})")
            cell = round_cell(total)
            result[i][j] = cell
            steps.append(f"c{i + 1}{j + 1} = {' + '.join(parts)} = {format_number(cell)}")

    return Matrix(
        name=f"({a.name} · {b.name})",
        rows=a.rows,
        cols=b.cols,
        data=result,
        steps=[f"Row-by-column product ({a.name} x {b.name}):", *steps],
    )


def multiply_matrices(matrices: Sequence[Matrix]) -> Matrix:
    """
    Цепочка умножений ((M1·M2)·M3)·... попарно слева направо.

    Итоговая матрица сохраняет имя последнего попарного шага, steps
    накапливаются (с заголовком шага, если матриц больше двух).

    Raises:
        DimensionMismatch: Если цепочка не согласована
    """
    if not matrices:
        raise ValueError("multiplication requires at least one matrix")

    current = matrices[0]
    accumulated: list[str] = []

    for step, following in enumerate(matrices[1:], start=1):
        product = multiply_two(current, following)
        if len(matrices) > 2:
            accumulated.append(f"--- Step {step}: {current.name} x {following.name} ---")
        accumulated.extend(product.steps or [])
        current = product

    if current is matrices[0]:
        # Одна матрица: копия без умножений
        return current.model_copy(update={"id": new_matrix_id(), "data": clone_data(current.data)})

    logger.debug("Multiplied chain of %d matrices into %s", len(matrices), current.shape)
    return current.model_copy(update={"steps": accumulated})


# =============================================================================
# ТРАНСПОНИРОВАНИЕ
# =============================================================================


def transpose_matrix(matrix: Matrix) -> Matrix:
    """
    Транспонирование: строки становятся столбцами (без округления).

    Returns:
        Новая матрица cols×rows с именем 'nameᵀ'
    """
    result = create_empty_data(matrix.cols, matrix.rows)
    steps: list[str] = []

    for i in range(matrix.rows):
        for j in range(matrix.cols):
            value = matrix.data[i][j]
            result[j][i] = value
            steps.append(
                f"c{j + 1}{i + 1} takes the value of a{i + 1}{j + 1} ({format_number(value)})"
            )

    return Matrix(
        name=f"{matrix.name}ᵀ",
        rows=matrix.cols,
        cols=matrix.rows,
        data=result,
        steps=["Swapping rows and columns:", *steps],
    )


# =============================================================================
# СТЕПЕНЬ
# =============================================================================


def _validate_power(matrix: Matrix, exponent: float) -> None:
    if not matrix.is_square():
        raise DimensionMismatch(
            f"Matrix {matrix.name} must be square to be raised to a power, got {matrix.shape}"
        )
    if not is_positive_integer(exponent):
        raise InvalidExponent(
            f"Exponent must be a positive integer >= 1, got {format_number(exponent)}"
        )


def power_sequence(matrix: Matrix, exponent: float) -> list[Matrix]:
    """
    Все последовательные степени M^2, M^3, ..., M^n.

    Каждая степень — результат ОДНОГО умножения предыдущей на исходную M
    (n-1 умножений всего). Для n == 1 — единственная копия 'M^1'.

    Args:
        matrix: Квадратная матрица
        exponent: Целое >= 1

    Returns:
        Список степеней в порядке вычисления (последняя — M^n)

    Raises:
        DimensionMismatch: Если матрица не квадратная
        InvalidExponent: Если показатель не целое >= 1
    """
    _validate_power(matrix, exponent)
    n = int(exponent)

    if n == 1:
        return [
            matrix.model_copy(
                update={
                    "id": new_matrix_id(),
                    "name": f"{matrix.name}^1",
                    "data": clone_data(matrix.data),
                    "steps": ["Power 1 is the same matrix."],
                }
            )
        ]

    powers: list[Matrix] = []
    current = matrix
    for k in range(2, n + 1):
        product = multiply_two(current, matrix)
        current = product.model_copy(update={"name": f"{matrix.name}^{k}"})
        powers.append(current)
    return powers


def power_matrix(matrix: Matrix, exponent: float) -> Matrix:
    """
    Степень матрицы M^n последовательным умножением.

    Returns:
        Новая матрица 'name^n' с накопленными steps всех умножений

    Raises:
        DimensionMismatch: Если матрица не квадратная
        InvalidExponent: Если показатель не целое >= 1
    """
    powers = power_sequence(matrix, exponent)
    if int(exponent) == 1:
        return powers[0]

    accumulated: list[str] = []
    for k, partial in enumerate(powers, start=2):
        accumulated.append(f"--- Power {k} ---")
        accumulated.extend(partial.steps or [])

    return powers[-1].model_copy(update={"id": new_matrix_id(), "steps": accumulated})


# =============================================================================
# СКАЛЯРНЫЕ ОПЕРАЦИИ
# =============================================================================


def scalar_operation(matrix: Matrix, scalar: float, operation: OperationType) -> Matrix:
    """
    Поэлементная операция со скаляром: M[i][j] op k.

    Args:
        matrix: Исходная матрица
        scalar: Скаляр k
        operation: SCALAR_ADD / SCALAR_SUB / SCALAR_MUL

    Returns:
        Новая матрица 'k(name)', каждая ячейка округлена до 4 знаков

    Raises:
        UnsupportedOperation: Если operation не скалярная
    """
    if operation not in SCALAR_OPERATORS:
        raise UnsupportedOperation(f"Not a scalar operation: {operation.value}")

    symbol, apply = SCALAR_OPERATORS[operation]
    scalar_text = format_number(scalar)
    result = create_empty_data(matrix.rows, matrix.cols)
    steps: list[str] = []

    for i, row in enumerate(matrix.data):
        for j, value in enumerate(row):
            cell = round_cell(apply(value, scalar))
            result[i][j] = cell
            steps.append(
                f"c{i + 1}{j + 1} = {format_number(value)} {symbol} {scalar_text} = {format_number(cell)}"
            )

    return Matrix(
        name=f"{scalar_text}({matrix.name})",
        rows=matrix.rows,
        cols=matrix.cols,
        data=result,
        steps=[f"Applying scalar ({scalar_text}) to each element:", *steps],
    )
