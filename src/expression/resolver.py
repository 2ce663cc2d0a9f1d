"""
Variable Resolver — Имена матриц в выражении

Для каждой матрицы (в порядке входа):
1. Регистрация под полным именем в верхнем регистре
2. Если имя начинается с "MATRIZ " (без учёта регистра) — алиас по остатку
   после префикса (trim, upper). Перезаписывает коллизии из шага 1.
3. Fallback: буква по позиции (A, B, C, ...), ТОЛЬКО если эта буква ещё
   не занята. Позиционный алиас никогда не перекрывает явное имя/алиас.

Поиск идентификаторов без учёта регистра.
"""

from typing import Final, Sequence

from src.core.domain.errors import UnknownVariable
from src.core.domain.matrix import Matrix


# Префикс имени, из которого выводится короткий алиас ("Matriz A" → "A")
ALIAS_PREFIX: Final[str] = "MATRIZ "


def positional_alias(index: int) -> str:
    """Буква для позиции index: 0 → 'A', 1 → 'B', ..."""
    return chr(ord("A") + index)


def build_variable_map(matrices: Sequence[Matrix]) -> dict[str, Matrix]:
    """
    Таблица имя → матрица по правилам именования и алиасов.

    Args:
        matrices: Доступные матрицы (порядок важен для позиционных алиасов)

    Returns:
        dict с ключами в верхнем регистре
    """
    variables: dict[str, Matrix] = {}
    for index, matrix in enumerate(matrices):
        upper_name = matrix.name.upper()
        variables[upper_name] = matrix

        if upper_name.startswith(ALIAS_PREFIX):
            short_name = upper_name[len(ALIAS_PREFIX):].strip()
            if short_name:
                variables[short_name] = matrix

        letter = positional_alias(index)
        if letter not in variables:
            variables[letter] = matrix

    return variables


class VariableResolver:
    """
    Разрешение идентификаторов выражения в матрицы.

    Хранит также множество id входных матриц: результат, совпадающий по id
    с входом, не попадает в trace.
    """

    def __init__(self, matrices: Sequence[Matrix]):
        self._variables = build_variable_map(matrices)
        self.input_ids: frozenset[str] = frozenset(m.id for m in matrices)

    def resolve(self, identifier: str) -> Matrix:
        """
        Поиск матрицы по идентификатору (без учёта регистра).

        Raises:
            UnknownVariable: Если имя не зарегистрировано
        """
        matrix = self._variables.get(identifier.upper())
        if matrix is None:
            raise UnknownVariable(f"Matrix '{identifier}' not found.")
        return matrix

    def is_input(self, matrix: Matrix) -> bool:
        return matrix.id in self.input_ids

    def __len__(self) -> int:
        return len(self._variables)
