"""Evaluate further expressions against a solved model."""
from typing import Union

from ..evaluation.evaluator import (
    DEFAULT_TOLERANCE,
    evaluate_constraint_result,
    evaluate_real_expr_result,
)
from ..evaluation.result import Result
from ..language.constraint import Constraint
from ..language.real_expr import RealExpr
from ..utils.exceptions import SolverError
from .result import SolverReturn


def evaluate_against_model(
    solver_return: SolverReturn,
    expr: Union[Constraint, RealExpr],
    tol: float = DEFAULT_TOLERANCE,
) -> Result:
    """Diagnostic evaluation of ``expr`` under the model of a ``sat`` solve.

    Letters outside the solve's truth table and real variables the solve did
    not assign come back as an undeclared-variables failure.
    """
    if not solver_return.is_sat:
        raise SolverError(f"no model to evaluate against, solve answered {solver_return.status.value}")
    state_values = solver_return.state_values()
    variable_values = solver_return.variable_values()
    if isinstance(expr, Constraint):
        return evaluate_constraint_result(
            solver_return.tt, state_values, expr, variable_values, tol
        )
    return evaluate_real_expr_result(solver_return.tt, state_values, expr, variable_values)
