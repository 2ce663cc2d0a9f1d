"""
Тесты для Variable Resolver — имена, алиасы "Matriz X" и позиционные буквы

Проверяет:
- Регистрацию по полному имени в верхнем регистре
- Алиас по префиксу "Matriz " (перезаписывает коллизии)
- Позиционный fallback только для незанятых букв
- Поиск без учёта регистра и UnknownVariable
"""

import pytest

from src.core.domain import UnknownVariable
from src.core.math.matrix_algebra import make_matrix
from src.expression.resolver import VariableResolver, build_variable_map, positional_alias


def named(name: str, matrix_id: str):
    return make_matrix(name, [[1.0]], matrix_id=matrix_id)


class TestBuildVariableMap:
    """Тесты build_variable_map."""

    def test_full_name_uppercased(self):
        m = named("Foo", "m0")
        variables = build_variable_map([m])
        assert variables["FOO"] is m

    def test_matriz_prefix_alias(self):
        m = named("Matriz A", "m0")
        variables = build_variable_map([m])
        assert variables["MATRIZ A"] is m
        assert variables["A"] is m

    def test_prefix_case_insensitive(self):
        m = named("matriz   Zeta ", "m0")
        assert build_variable_map([m])["ZETA"] is m

    def test_empty_alias_skipped(self):
        m = named("Matriz  ", "m0")
        variables = build_variable_map([m])
        assert "" not in variables
        assert variables["A"] is m

    def test_positional_fallback(self):
        x, y = named("X", "m0"), named("Y", "m1")
        variables = build_variable_map([x, y])
        assert variables["A"] is x
        assert variables["B"] is y

    def test_positional_never_overrides_explicit(self):
        """Позиционная 'B' для второй матрицы не перекрывает явное имя 'B'."""
        first, second = named("B", "m0"), named("Q", "m1")
        variables = build_variable_map([first, second])
        assert variables["B"] is first
        assert variables["A"] is first
        assert variables["Q"] is second

    def test_alias_overrides_earlier_name(self):
        first, second = named("C", "m0"), named("Matriz C", "m1")
        variables = build_variable_map([first, second])
        assert variables["C"] is second

    def test_positional_alias_letters(self):
        assert positional_alias(0) == "A"
        assert positional_alias(2) == "C"


class TestVariableResolver:
    """Тесты VariableResolver."""

    def test_resolve_case_insensitive(self, matrix_a):
        resolver = VariableResolver([matrix_a])
        assert resolver.resolve("a") is matrix_a
        assert resolver.resolve("A") is matrix_a

    def test_unknown_variable(self, matrix_a):
        resolver = VariableResolver([matrix_a])
        with pytest.raises(UnknownVariable, match="'Zz'"):
            resolver.resolve("Zz")

    def test_input_ids(self, matrix_a, matrix_b):
        resolver = VariableResolver([matrix_a, matrix_b])
        assert resolver.input_ids == frozenset({"id-a", "id-b"})
        assert resolver.is_input(matrix_a) is True
        assert resolver.is_input(named("Other", "id-x")) is False

    def test_len_counts_all_keys(self, matrix_a):
        # "MATRIZ A" и алиас "A"
        assert len(VariableResolver([matrix_a])) == 2
