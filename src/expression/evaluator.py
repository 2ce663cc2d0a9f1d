"""
Evaluator — Стековое вычисление RPN и trace промежуточных матриц

Проход по RPN с одним стеком операндов:
- Number → Scalar(float(lexeme))
- Identifier → матрица из resolver (ссылка на вход, в trace не попадает)
- ' → снять один операнд, Transpose
- + - * ^ → снять b, затем a (a — левый операнд), диспетчеризация по (a, b)

Каждая вычисленная матрица, чей id не совпадает ни с одним входным,
добавляется в trace в порядке вычисления. Дедупликации между
вычислениями нет: одна и та же подформула, вычисленная дважды, даёт две
записи в trace. Для ^ в trace попадает каждая промежуточная степень.

В конце на стеке должен остаться ровно один операнд, и это должна быть
матрица. Выражение из одного идентификатора даёт пустой trace.

Вычисление синхронное и реентерабельное: всё состояние локально для вызова.
"""

import logging
from dataclasses import dataclass
from typing import Sequence

from src.core.domain.errors import (
    EmptyExpression,
    EvaluationLimitExceeded,
    ExpressionError,
    FinalResultMustBeMatrix,
    MalformedExpression,
    MissingOperand,
    UnknownOperator,
)
from src.core.domain.matrix import Matrix, Operand, OperandKind, Scalar
from src.core.math.numeric import format_number
from src.expression.dispatch import OPERATORS, POWER, TRANSPOSE
from src.expression.parser import to_rpn
from src.expression.resolver import VariableResolver
from src.expression.tokenizer import Token, TokenKind, tokenize

logger = logging.getLogger(__name__)


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class EvaluatorConfig:
    """Конфигурация evaluator'а.

    Лимиты для UI вокруг движка: длинные цепочки умножений и большие
    степени движок сам не ограничивает. None — без ограничения.
    """

    # Максимальная длина строки выражения (символов)
    max_expression_length: int | None = None

    # Максимальный показатель степени для ^
    max_exponent: int | None = None

    # Максимальное rows/cols любой входной матрицы
    max_dimension: int | None = None


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class EvaluationResult:
    """Результат вычисления RPN."""

    trace: list[Matrix]
    final_value: Operand


# =============================================================================
# EVALUATOR
# =============================================================================


class ExpressionEvaluator:
    """Вычисление матричных выражений с полным trace.

    Порядок:
    1. Пустое выражение → EmptyExpression (до токенизации)
    2. Лимиты конфигурации (длина выражения, размерности входов)
    3. tokenize → to_rpn → стековое вычисление
    4. Проверка итогового стека
    """

    def __init__(self, config: EvaluatorConfig | None = None):
        """
        Args:
            config: конфигурация лимитов (опционально, по умолчанию без лимитов)
        """
        self.config = config or EvaluatorConfig()

    def evaluate_expression(self, expression: str, matrices: Sequence[Matrix]) -> list[Matrix]:
        """Вычисление выражения над доступными матрицами.

        Args:
            expression: Инфиксное выражение (например, "3*A' - B^2 + C")
            matrices: Доступные матрицы вызывающей стороны (только чтение)

        Returns:
            Trace: все вычисленные (не входные) матрицы в порядке вычисления,
            последняя — итог. Пустой, если выражение — один идентификатор.

        Raises:
            ExpressionError: один из видов таксономии ошибок
        """
        try:
            if not expression.strip():
                raise EmptyExpression("The expression is empty.")
            self._check_limits(expression, matrices)

            tokens = tokenize(expression)
            logger.debug("Tokens: %s", [t.lexeme for t in tokens])
            result = self.evaluate(to_rpn(tokens), VariableResolver(matrices))
        except ExpressionError as e:
            logger.warning("Evaluation of %r failed (%s): %s", expression, e.kind, e)
            raise

        logger.info(
            "Evaluated %r: %d traced matrices, result %s",
            expression,
            len(result.trace),
            result.final_value.shape,
        )
        return result.trace

    def evaluate(self, rpn: Sequence[Token], resolver: VariableResolver) -> EvaluationResult:
        """Стековое вычисление RPN.

        Args:
            rpn: Токены в постфиксном порядке
            resolver: Разрешение идентификаторов и множество входных id

        Returns:
            EvaluationResult(trace, final_value)

        Raises:
            ExpressionError: один из видов таксономии ошибок
        """
        stack: list[Operand] = []
        trace: list[Matrix] = []

        for token in rpn:
            if token.kind == TokenKind.NUMBER:
                stack.append(Scalar(float(token.lexeme)))
            elif token.kind == TokenKind.IDENTIFIER:
                stack.append(resolver.resolve(token.lexeme))
            elif token.kind == TokenKind.OPERATOR:
                produced = self._apply_operator(token, stack)
                for value in produced:
                    if value.kind == OperandKind.MATRIX and not resolver.is_input(value):
                        logger.debug("Traced %s (%s)", value.name, value.shape)
                        trace.append(value)
                stack.append(produced[-1])
            # Скобки, оставшиеся после кривой расстановки, пропускаются

        if len(stack) != 1:
            raise MalformedExpression(
                f"Error evaluating the expression: {len(stack)} values left on the stack."
            )

        final_value = stack[0]
        if final_value.kind == OperandKind.SCALAR:
            raise FinalResultMustBeMatrix(
                f"The final result must be a matrix, not a number ({format_number(final_value.value)})."
            )

        return EvaluationResult(trace=trace, final_value=final_value)

    def _apply_operator(self, token: Token, stack: list[Operand]) -> list[Operand]:
        if token.lexeme == TRANSPOSE:
            if not stack:
                raise MissingOperand("Invalid operation: transpose is missing its operand.")
            return OPERATORS[TRANSPOSE].apply(stack.pop())

        if len(stack) < 2:
            raise MissingOperand(f"Invalid operation: '{token.lexeme}' is missing operands.")
        b = stack.pop()
        a = stack.pop()

        spec = OPERATORS.get(token.lexeme)
        if spec is None:
            raise UnknownOperator(f"Unknown operator: {token.lexeme}")

        if token.lexeme == POWER:
            self._check_exponent(a, b)
        return spec.apply(a, b)

    def _check_limits(self, expression: str, matrices: Sequence[Matrix]) -> None:
        max_length = self.config.max_expression_length
        if max_length is not None and len(expression) > max_length:
            raise EvaluationLimitExceeded(
                f"Expression length {len(expression)} exceeds limit {max_length}."
            )

        max_dimension = self.config.max_dimension
        if max_dimension is None:
            return
        for matrix in matrices:
            if matrix.rows > max_dimension or matrix.cols > max_dimension:
                raise EvaluationLimitExceeded(
                    f"Matrix {matrix.name} ({matrix.shape}) exceeds dimension limit {max_dimension}."
                )

    def _check_exponent(self, base: Operand, exponent: Operand) -> None:
        # Неверные типы операндов обрабатывает generic_power
        max_exponent = self.config.max_exponent
        if max_exponent is None:
            return
        if (base.kind, exponent.kind) != (OperandKind.MATRIX, OperandKind.SCALAR):
            return
        if exponent.value > max_exponent:
            raise EvaluationLimitExceeded(
                f"Exponent {format_number(exponent.value)} exceeds limit {max_exponent}."
            )


# =============================================================================
# ENTRY POINT
# =============================================================================


def evaluate_expression(
    expression: str,
    available_matrices: Sequence[Matrix],
    config: EvaluatorConfig | None = None,
) -> list[Matrix]:
    """
    Вычисление выражения и возврат trace промежуточных матриц.

    Args:
        expression: Инфиксное выражение
        available_matrices: Доступные матрицы (порядок важен для алиасов A, B, ...)
        config: Лимиты (опционально)

    Returns:
        Упорядоченный trace вычисленных матриц

    Raises:
        ExpressionError: один из видов таксономии ошибок
    """
    return ExpressionEvaluator(config).evaluate_expression(expression, available_matrices)
