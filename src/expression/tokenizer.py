"""
Tokenizer — Лексический разбор выражения

Распознаёт (в любом порядке, через необязательные пробелы):
- число: digits[.digits]
- идентификатор: одна или более латинских букв (регистр сохраняется)
- односимвольный оператор: + - * / ^ ' и зарезервированная запятая
- скобки ( )

Любой другой символ (не пробел) молча пропускается. Дерево не строится:
результат — плоская последовательность токенов слева направо.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Final

logger = logging.getLogger(__name__)


# =============================================================================
# ENUMS
# =============================================================================


class TokenKind(str, Enum):
    """Вид токена"""

    NUMBER = "NUMBER"
    IDENTIFIER = "IDENTIFIER"
    OPERATOR = "OPERATOR"
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"


@dataclass(frozen=True)
class Token:
    """Токен выражения."""

    kind: TokenKind
    lexeme: str

    def is_operator(self) -> bool:
        return self.kind == TokenKind.OPERATOR


# =============================================================================
# ЛЕКСЕР
# =============================================================================

TOKEN_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"(?P<number>[0-9]+(?:\.[0-9]+)?)"
    r"|(?P<identifier>[a-zA-Z]+)"
    r"|(?P<symbol>['+\-*/^(),])"
    r"|(?P<space>\s+)"
)

_PAREN_KINDS: Final[dict[str, TokenKind]] = {
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
}


def tokenize(expression: str) -> list[Token]:
    """
    Разбор строки выражения в последовательность токенов.

    Args:
        expression: Инфиксное выражение (например, "3*A' - B^2")

    Returns:
        Плоский список токенов слева направо

    Examples:
        >>> [t.lexeme for t in tokenize("3*A'-B^2")]
        ['3', '*', 'A', "'", '-', 'B', '^', '2']
    """
    tokens: list[Token] = []
    position = 0

    for match in TOKEN_PATTERN.finditer(expression):
        if match.start() > position:
            logger.debug("Skipped unrecognized characters: %r", expression[position:match.start()])
        position = match.end()

        if match.group("space"):
            continue
        if match.group("number"):
            tokens.append(Token(TokenKind.NUMBER, match.group("number")))
        elif match.group("identifier"):
            tokens.append(Token(TokenKind.IDENTIFIER, match.group("identifier")))
        else:
            symbol = match.group("symbol")
            tokens.append(Token(_PAREN_KINDS.get(symbol, TokenKind.OPERATOR), symbol))

    if position < len(expression):
        logger.debug("Skipped unrecognized characters: %r", expression[position:])

    return tokens
