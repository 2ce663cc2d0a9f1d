"""Workbench — batch-операции, журнал операций и продвижение результатов."""

from .operations import (
    AGGREGATE_OPERATIONS,
    PER_MATRIX_OPERATIONS,
    apply_operation,
    promote_result,
    promote_results,
    solve_expression,
)

__all__ = [
    "AGGREGATE_OPERATIONS",
    "PER_MATRIX_OPERATIONS",
    "apply_operation",
    "solve_expression",
    "promote_result",
    "promote_results",
]
