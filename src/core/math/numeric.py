"""
Numeric — Округление ячеек и отображение чисел в шагах

Модуль фиксирует точный численный и текстовый контракт шагов вычисления:
- Округление ячейки до 4 знаков (round half away from zero по точному
  двоичному значению float)
- Кратчайшее отображение числа: целые без десятичной точки (6, а не 6.0)
- Отрицательные операнды в скобках для сумм и разностей: (-3)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Округление детерминировано и воспроизводимо бит-в-бит
2. Транспонирование и сложение НЕ округляют
3. -0 отображается как 0
"""

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Final

# =============================================================================
# ПАРАМЕТРЫ
# =============================================================================

# Количество знаков после запятой для произведений и скалярных операций
CELL_DECIMALS: Final[int] = 4

# Выше этого порога округление и позиционная запись не применяются
POSITIONAL_MAX: Final[float] = 1e21

# Ниже этого порога (по модулю) число отображается в экспоненциальной записи
POSITIONAL_MIN: Final[float] = 1e-6


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Returns:
        True если значение finite
    """
    return math.isfinite(value)


def is_positive_integer(value: float) -> bool:
    """
    Проверка, что значение — целое число >= 1.

    Examples:
        >>> is_positive_integer(3.0)
        True
        >>> is_positive_integer(2.5)
        False
        >>> is_positive_integer(0)
        False
    """
    return is_valid_float(value) and float(value).is_integer() and value >= 1


# =============================================================================
# ОКРУГЛЕНИЕ
# =============================================================================


def round_cell(value: float, decimals: int = CELL_DECIMALS) -> float:
    """
    Округление ячейки до `decimals` знаков.

    Используется точное десятичное значение float и round half away from zero,
    поэтому 0.03125 → 0.0313 и -0.03125 → -0.0313.

    Args:
        value: Значение ячейки
        decimals: Количество знаков (default: CELL_DECIMALS)

    Returns:
        Округлённое значение (NaN/Inf и |value| >= 1e21 без изменений)

    Examples:
        >>> round_cell(1.23456789)
        1.2346
        >>> round_cell(0.1 + 0.2)
        0.3
        >>> round_cell(0.03125)
        0.0313
    """
    if not is_valid_float(value) or abs(value) >= POSITIONAL_MAX:
        return value

    quantum = Decimal(1).scaleb(-decimals)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


# =============================================================================
# ОТОБРАЖЕНИЕ
# =============================================================================


def format_number(value: float) -> str:
    """
    Кратчайшее текстовое представление числа для шагов.

    Args:
        value: Число

    Returns:
        Строка: целые без точки, дробные в кратчайшей позиционной записи,
        очень малые/большие — в экспоненциальной (1e-7, 1.5e+21)

    Examples:
        >>> format_number(6.0)
        '6'
        >>> format_number(-2.5)
        '-2.5'
        >>> format_number(0.00001)
        '0.00001'
        >>> format_number(-0.0)
        '0'
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    magnitude = abs(value)
    if POSITIONAL_MIN <= magnitude < POSITIONAL_MAX:
        # Кратчайшие цифры repr, но позиционно: 6.0 → 6, 1e-05 → 0.00001
        return format(Decimal(repr(float(value))).normalize(), "f")

    mantissa, exponent = repr(float(value)).split("e")
    sign = "-" if exponent.startswith("-") else "+"
    return f"{mantissa}e{sign}{int(exponent.lstrip('+-'))}"


def format_operand(value: float) -> str:
    """
    Операнд для шага суммы/разности: отрицательные значения в скобках.

    Examples:
        >>> format_operand(3.0)
        '3'
        >>> format_operand(-3.0)
        '(-3)'
    """
    text = format_number(value)
    if value < 0:
        return f"({text})"
    return text
