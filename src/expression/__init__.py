"""Expression — движок вычисления матричных выражений.

Tokenizer → Parser (shunting-yard) → Evaluator (Resolver для имён,
Dispatch для операторов, матричная алгебра для вычислений) → trace.
"""

from .dispatch import (
    OPERATORS,
    OperatorSpec,
    generic_add,
    generic_multiply,
    generic_power,
    generic_subtract,
    generic_transpose,
    precedence_of,
)
from .evaluator import (
    EvaluationResult,
    EvaluatorConfig,
    ExpressionEvaluator,
    evaluate_expression,
)
from .parser import to_rpn
from .resolver import VariableResolver, build_variable_map
from .tokenizer import Token, TokenKind, tokenize

__all__ = [
    # Tokenizer
    "Token",
    "TokenKind",
    "tokenize",
    # Parser
    "to_rpn",
    # Resolver
    "VariableResolver",
    "build_variable_map",
    # Dispatch
    "OPERATORS",
    "OperatorSpec",
    "precedence_of",
    "generic_add",
    "generic_subtract",
    "generic_multiply",
    "generic_power",
    "generic_transpose",
    # Evaluator
    "EvaluatorConfig",
    "EvaluationResult",
    "ExpressionEvaluator",
    "evaluate_expression",
]
