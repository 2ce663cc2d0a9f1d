"""
Domain models and value objects.

Contains fundamental domain entities: Matrix, Scalar operand, OperationLog,
and the expression error taxonomy.
"""

from src.core.domain.errors import (
    DimensionMismatch,
    EmptyExpression,
    EmptySelection,
    EvaluationLimitExceeded,
    ExpressionError,
    FinalResultMustBeMatrix,
    InsufficientOperands,
    InvalidExponent,
    MalformedExpression,
    MissingOperand,
    PowerOperandTypeError,
    ScalarMatrixAdditionUnsupported,
    TransposeRequiresMatrix,
    UnknownOperator,
    UnknownVariable,
    UnsupportedOperation,
)
from src.core.domain.matrix import (
    Matrix,
    Operand,
    OperandKind,
    Scalar,
    new_matrix_id,
)
from src.core.domain.operation_log import OperationLog, OperationType

__all__ = [
    # Matrix model
    "Matrix",
    "Scalar",
    "Operand",
    "OperandKind",
    "new_matrix_id",
    # Operation log
    "OperationLog",
    "OperationType",
    # Errors
    "ExpressionError",
    "EmptyExpression",
    "UnknownVariable",
    "MissingOperand",
    "TransposeRequiresMatrix",
    "ScalarMatrixAdditionUnsupported",
    "DimensionMismatch",
    "InvalidExponent",
    "PowerOperandTypeError",
    "UnknownOperator",
    "MalformedExpression",
    "FinalResultMustBeMatrix",
    "EvaluationLimitExceeded",
    "EmptySelection",
    "InsufficientOperands",
    "UnsupportedOperation",
]
