"""Общие фикстуры: стандартные матрицы для тестов движка."""

import pytest

from src.core.domain import Matrix


def matrix(name: str, data: list[list[float]], matrix_id: str | None = None) -> Matrix:
    """Матрица для тестов (rows/cols из data)."""
    kwargs = {"id": matrix_id} if matrix_id else {}
    return Matrix(name=name, rows=len(data), cols=len(data[0]), data=data, **kwargs)


@pytest.fixture
def matrix_a() -> Matrix:
    """Matriz A = [[1, 2], [3, 4]]"""
    return matrix("Matriz A", [[1, 2], [3, 4]], "id-a")


@pytest.fixture
def matrix_b() -> Matrix:
    """Matriz B = [[5, 6], [7, 8]]"""
    return matrix("Matriz B", [[5, 6], [7, 8]], "id-b")


@pytest.fixture
def matrix_c() -> Matrix:
    """Matriz C = [[-1, 0], [2, -3]] (отрицательные значения)"""
    return matrix("Matriz C", [[-1, 0], [2, -3]], "id-c")


@pytest.fixture
def matrix_3x3() -> Matrix:
    """Matriz D 3×3"""
    return matrix("Matriz D", [[1, 0, 0], [0, 1, 0], [0, 0, 1]], "id-d")


@pytest.fixture
def matrix_2x3() -> Matrix:
    """Matriz E 2×3 (неквадратная)"""
    return matrix("Matriz E", [[1, 2, 3], [4, 5, 6]], "id-e")
