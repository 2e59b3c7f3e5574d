"""Numeric evaluation of expressions and constraints under state values."""

from .result import Ok, Err, Result, UndeclaredVariables, DivisionByZero  # noqa: F401
from .exact import exact_power, exact_sign, to_exact  # noqa: F401
from .evaluator import (  # noqa: F401
    DEFAULT_TOLERANCE,
    evaluate_real_expr,
    evaluate_real_expr_result,
    evaluate_constraint,
    evaluate_constraint_result,
    validate_model,
)
