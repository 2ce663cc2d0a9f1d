"""
Core math modules для matrix expression engine

Численные примитивы (округление, отображение чисел) и матричная алгебра
с пошаговым описанием вычислений.
"""

# Numeric
from src.core.math.numeric import (
    CELL_DECIMALS,
    format_number,
    format_operand,
    is_positive_integer,
    is_valid_float,
    round_cell,
)

# Matrix algebra
from src.core.math.matrix_algebra import (
    RANDOM_CELL_MAX,
    RANDOM_CELL_MIN,
    SCALAR_OPERATORS,
    add_matrices,
    clone_data,
    create_empty_data,
    dimensions_match,
    generate_random_data,
    make_matrix,
    make_random_matrix,
    multiplication_chain_valid,
    multiply_matrices,
    multiply_two,
    power_matrix,
    power_sequence,
    scalar_operation,
    subtract_matrices,
    transpose_matrix,
)

__all__ = [
    # Numeric — Constants
    "CELL_DECIMALS",
    # Numeric — Functions
    "format_number",
    "format_operand",
    "is_positive_integer",
    "is_valid_float",
    "round_cell",
    # Matrix algebra — Constants
    "RANDOM_CELL_MAX",
    "RANDOM_CELL_MIN",
    "SCALAR_OPERATORS",
    # Matrix algebra — Factories
    "clone_data",
    "create_empty_data",
    "generate_random_data",
    "make_matrix",
    "make_random_matrix",
    # Matrix algebra — Validation
    "dimensions_match",
    "multiplication_chain_valid",
    # Matrix algebra — Operations
    "add_matrices",
    "subtract_matrices",
    "multiply_two",
    "multiply_matrices",
    "transpose_matrix",
    "power_sequence",
    "power_matrix",
    "scalar_operation",
]
