"""
Contract Validation Module

Модуль для валидации JSON контрактов на границе движка (матрицы и trace).
"""

from .validators import (
    ContractValidator,
    MatrixValidator,
    SchemaLoader,
    TraceValidator,
    dump_trace,
    load_matrices,
    validate_matrix,
    validate_trace,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "MatrixValidator",
    "TraceValidator",
    # Functions
    "validate_matrix",
    "validate_trace",
    "load_matrices",
    "dump_trace",
]
