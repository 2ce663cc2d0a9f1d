"""
Parser — Shunting-yard: инфикс → RPN

Приоритеты: + - = 1; * = 2; ^ = 3; ' (постфиксное транспонирование) = 4.

Правила:
- Number/Identifier → сразу в выходную очередь
- Оператор t: пока на вершине стека оператор с приоритетом >= priority(t)
  И t != '^' — снимаем его в очередь; затем кладём t.
  Входящий '^' НИКОГДА не снимает операторы со стека: он ведёт себя как
  оператор максимального приоритета без редукции (это не правая
  ассоциативность в учебном смысле, и так и должно остаться).
- '(' → на стек
- ')' → снимаем операторы до '(' и выбрасываем её. Наличие '(' не
  проверяется: кривые скобки всплывут ошибкой evaluator'а.
- В конце — снимаем всё оставшееся.
"""

import logging
from typing import Sequence

from src.expression.dispatch import POWER, precedence_of
from src.expression.tokenizer import Token, TokenKind

logger = logging.getLogger(__name__)


def _reduces(top: Token, incoming: Token) -> bool:
    if not top.is_operator() or incoming.lexeme == POWER:
        return False
    top_precedence = precedence_of(top.lexeme)
    incoming_precedence = precedence_of(incoming.lexeme)
    if top_precedence is None or incoming_precedence is None:
        return False
    return top_precedence >= incoming_precedence


def to_rpn(tokens: Sequence[Token]) -> list[Token]:
    """
    Преобразование инфиксной последовательности токенов в RPN.

    Args:
        tokens: Результат tokenize()

    Returns:
        Токены в постфиксном порядке

    Examples:
        3*A'-B^2  →  3 A ' * B 2 ^ -
    """
    output: list[Token] = []
    stack: list[Token] = []

    for token in tokens:
        if token.kind in (TokenKind.NUMBER, TokenKind.IDENTIFIER):
            output.append(token)
        elif token.kind == TokenKind.OPERATOR:
            while stack and _reduces(stack[-1], token):
                output.append(stack.pop())
            stack.append(token)
        elif token.kind == TokenKind.LPAREN:
            stack.append(token)
        elif token.kind == TokenKind.RPAREN:
            while stack and stack[-1].kind != TokenKind.LPAREN:
                output.append(stack.pop())
            if stack:
                stack.pop()

    while stack:
        output.append(stack.pop())

    logger.debug("RPN: %s", " ".join(t.lexeme for t in output))
    return output
