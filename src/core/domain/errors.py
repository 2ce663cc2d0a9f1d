"""
Errors — Таксономия ошибок вычисления выражений

Каждая ошибка несёт человекочитаемое сообщение и имя вида (`kind`).
Структурированных кодов нет: вызывающая сторона показывает сообщение как есть.

Все проверки локальные и немедленные: никаких retry, никакого частичного
восстановления. При ошибке всё, что успел построить evaluator, отбрасывается
вместе со стеком.
"""


class ExpressionError(Exception):
    """Базовая ошибка движка выражений."""

    kind: str = "ExpressionError"


# =============================================================================
# ОШИБКИ ВЫРАЖЕНИЯ
# =============================================================================


class EmptyExpression(ExpressionError):
    """Пустая строка выражения (до токенизации)."""

    kind = "EmptyExpression"


class UnknownVariable(ExpressionError):
    """Идентификатор не найден в resolver."""

    kind = "UnknownVariable"


class MissingOperand(ExpressionError):
    """Оператор применён к пустому стеку."""

    kind = "MissingOperand"


class TransposeRequiresMatrix(ExpressionError):
    """Транспонирование (') применено к скаляру."""

    kind = "TransposeRequiresMatrix"


class ScalarMatrixAdditionUnsupported(ExpressionError):
    """`+` / `-` между скаляром и матрицей."""

    kind = "ScalarMatrixAdditionUnsupported"


class PowerOperandTypeError(ExpressionError):
    """`^`: основание не матрица или показатель не скаляр."""

    kind = "PowerOperandTypeError"


class UnknownOperator(ExpressionError):
    """Оператор вне поддерживаемого набора (например, `/` или `,`)."""

    kind = "UnknownOperator"


class MalformedExpression(ExpressionError):
    """После вычисления на стеке не ровно один операнд."""

    kind = "MalformedExpression"


class FinalResultMustBeMatrix(ExpressionError):
    """Итог вычисления — скаляр."""

    kind = "FinalResultMustBeMatrix"


class EvaluationLimitExceeded(ExpressionError):
    """Превышен лимит из EvaluatorConfig."""

    kind = "EvaluationLimitExceeded"


# =============================================================================
# ОШИБКИ МАТРИЧНОЙ АЛГЕБРЫ
# =============================================================================


class DimensionMismatch(ExpressionError):
    """
    Несовместимые размерности.

    - Add/Subtract: разные rows×cols
    - Multiply: A.cols != B.rows
    - Power: матрица не квадратная
    """

    kind = "DimensionMismatch"


class InvalidExponent(ExpressionError):
    """Показатель степени не целое число >= 1."""

    kind = "InvalidExponent"


# =============================================================================
# ОШИБКИ BATCH-ОПЕРАЦИЙ
# =============================================================================


class EmptySelection(ExpressionError):
    """Batch-операция вызвана без матриц."""

    kind = "EmptySelection"


class InsufficientOperands(ExpressionError):
    """Агрегирующая batch-операция требует минимум 2 матрицы."""

    kind = "InsufficientOperands"


class UnsupportedOperation(ExpressionError):
    """OperationType не является batch-операцией."""

    kind = "UnsupportedOperation"
