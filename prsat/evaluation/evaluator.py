"""
Evaluate expressions and constraints against concrete state values.

There is a single recursive evaluator returning a ``Result``; the eager
entry points are that evaluator followed by ``unwrap``. Before any
arithmetic the tree is scanned once for free variables, so an
undeclared-variables failure always reports every missing name.

Probability operators are translated through the truth table on the fly,
so callers may pass untranslated input.

Comparisons over floats are tolerance-aware: ``=`` holds when
``|l - r| <= tol`` and ``!=`` is its complement, ``<=`` and ``>=`` are
relaxed by ``tol`` while ``<`` and ``>`` are strict. In exact mode values
are sympy numbers and comparisons use the exact sign of ``l - r``; NaN
compares like it does over floats.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Iterable, List, Mapping, Optional, Union

from sympy import Expr

from ..language.dispatch import dispatch
from ..language.real_expr import (
    RealExpr,
    Literal,
    Variable,
    StateVariableSum,
    Probability,
    GivenProbability,
    Negative,
    Plus,
    Minus,
    Multiply,
    Divide,
    Power,
)
from ..language.constraint import (
    Constraint,
    Equal,
    NotEqual,
    LessThan,
    LessThanOrEqual,
    GreaterThan,
    GreaterThanOrEqual,
    ConstraintNegation,
    ConstraintConjunction,
    ConstraintDisjunction,
    ConstraintConditional,
    ConstraintBiconditional,
)
from ..state_space.truth_table import TruthTable
from ..translator.translate import translate_real_expr
from ..translator.variables import free_variables
from ..utils.exceptions import InvariantViolation
from .exact import exact_power, exact_sign, to_exact
from .result import Ok, Err, Result, UndeclaredVariables, DivisionByZero, combine

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE = 1e-14

Number = Union[float, Expr]
StateValues = Mapping[int, Number]
VariableValues = Mapping[str, Number]


@dataclass(frozen=True)
class EvalEnv:
    tt: TruthTable
    state_values: StateValues
    variable_values: VariableValues = field(default_factory=dict)
    tol: float = DEFAULT_TOLERANCE
    exact: bool = False

    def number(self, value) -> Number:
        return to_exact(value) if self.exact else float(value)


def _power(base: float, exponent: float) -> float:
    """``math.pow`` with IEEE results instead of exceptions."""
    try:
        return math.pow(base, exponent)
    except OverflowError:
        odd = float(exponent).is_integer() and int(exponent) % 2 == 1
        return -math.inf if base < 0 and odd else math.inf
    except ValueError:
        # 0 to a negative power, or a negative base to a fractional power
        return math.inf if base == 0 else math.nan


def _divide(numerator: float, denominator: float) -> Result[float]:
    if denominator == 0:
        return Err(DivisionByZero())
    return Ok(numerator / denominator)


def _divide_exact(numerator: Expr, denominator: Expr) -> Result[Expr]:
    if exact_sign(denominator) == 0:
        return Err(DivisionByZero())
    return Ok(numerator / denominator)


@dispatch(Literal, EvalEnv)
def _eval_real_expr(expr, env):
    return Ok(env.number(expr.value))


@dispatch(Variable, EvalEnv)
def _eval_real_expr(expr, env):  # noqa: F811
    if expr.id not in env.variable_values:
        return Err(UndeclaredVariables(real=(expr.id,)))
    return Ok(env.number(env.variable_values[expr.id]))


@dispatch(StateVariableSum, EvalEnv)
def _eval_real_expr(expr, env):  # noqa: F811
    total = env.number(0)
    for index in expr.indices:
        if index not in env.state_values:
            raise InvariantViolation(f"no value for state variable s_{index}")
        total += env.number(env.state_values[index])
    return Ok(total)


@dispatch((Probability, GivenProbability), EvalEnv)
def _eval_real_expr(expr, env):  # noqa: F811
    return _eval_real_expr(translate_real_expr(env.tt, expr), env)


@dispatch(Negative, EvalEnv)
def _eval_real_expr(expr, env):  # noqa: F811
    return _eval_real_expr(expr.expr, env).map(lambda v: -v)


@dispatch(Plus, EvalEnv)
def _eval_real_expr(expr, env):  # noqa: F811
    return combine(
        _eval_real_expr(expr.left, env), _eval_real_expr(expr.right, env), lambda l, r: Ok(l + r)
    )


@dispatch(Minus, EvalEnv)
def _eval_real_expr(expr, env):  # noqa: F811
    return combine(
        _eval_real_expr(expr.left, env), _eval_real_expr(expr.right, env), lambda l, r: Ok(l - r)
    )


@dispatch(Multiply, EvalEnv)
def _eval_real_expr(expr, env):  # noqa: F811
    return combine(
        _eval_real_expr(expr.left, env), _eval_real_expr(expr.right, env), lambda l, r: Ok(l * r)
    )


@dispatch(Divide, EvalEnv)
def _eval_real_expr(expr, env):  # noqa: F811
    return combine(
        _eval_real_expr(expr.numerator, env),
        _eval_real_expr(expr.denominator, env),
        _divide_exact if env.exact else _divide,
    )


@dispatch(Power, EvalEnv)
def _eval_real_expr(expr, env):  # noqa: F811
    power = exact_power if env.exact else _power
    return combine(
        _eval_real_expr(expr.base, env),
        _eval_real_expr(expr.exponent, env),
        lambda b, e: Ok(power(b, e)),
    )


def _equal(l: float, r: float, tol: float) -> bool:
    return abs(l - r) <= tol


_COMPARE = {
    Equal: _equal,
    NotEqual: lambda l, r, tol: not _equal(l, r, tol),
    LessThan: lambda l, r, tol: l < r,
    LessThanOrEqual: lambda l, r, tol: l <= r + tol,
    GreaterThan: lambda l, r, tol: l > r,
    GreaterThanOrEqual: lambda l, r, tol: l + tol >= r,
}

# exact comparisons by the sign of l - r; None (NaN) only satisfies !=
_BY_SIGN = {
    Equal: lambda s: s == 0,
    NotEqual: lambda s: s != 0,
    LessThan: lambda s: s == -1,
    LessThanOrEqual: lambda s: s in (-1, 0),
    GreaterThan: lambda s: s == 1,
    GreaterThanOrEqual: lambda s: s in (0, 1),
}


def _compare(kind, env: EvalEnv, l: Number, r: Number) -> bool:
    if env.exact:
        return _BY_SIGN[kind](exact_sign(l - r))
    return _COMPARE[kind](l, r, env.tol)


_CONNECT = {
    ConstraintConjunction: lambda l, r: l and r,
    ConstraintDisjunction: lambda l, r: l or r,
    ConstraintConditional: lambda l, r: (not l) or r,
    ConstraintBiconditional: lambda l, r: l == r,
}


@dispatch((Equal, NotEqual, LessThan, LessThanOrEqual, GreaterThan, GreaterThanOrEqual), EvalEnv)
def _eval_constraint(c, env):
    return combine(
        _eval_real_expr(c.left, env),
        _eval_real_expr(c.right, env),
        lambda l, r: Ok(_compare(type(c), env, l, r)),
    )


@dispatch(ConstraintNegation, EvalEnv)
def _eval_constraint(c, env):  # noqa: F811
    return _eval_constraint(c.constraint, env).map(lambda v: not v)


@dispatch(
    (ConstraintConjunction, ConstraintDisjunction, ConstraintConditional, ConstraintBiconditional),
    EvalEnv,
)
def _eval_constraint(c, env):  # noqa: F811
    connect = _CONNECT[type(c)]
    return combine(
        _eval_constraint(c.left, env),
        _eval_constraint(c.right, env),
        lambda l, r: Ok(connect(l, r)),
    )


def _undeclared(env: EvalEnv, node: Union[RealExpr, Constraint]) -> Optional[Err]:
    free = free_variables(node, env.tt.letters, env.variable_values.keys())
    if free.is_empty():
        return None
    return Err(UndeclaredVariables(real=tuple(free.real), sentence=tuple(free.sentence)))


def _env(tt, state_values, variable_values, tol, exact=False) -> EvalEnv:
    return EvalEnv(tt, state_values, dict(variable_values or {}), tol, exact)


def evaluate_real_expr_result(
    tt: TruthTable,
    state_values: StateValues,
    expr: RealExpr,
    variable_values: Optional[VariableValues] = None,
    exact: bool = False,
) -> Result[Number]:
    """Evaluate ``expr``, reporting undeclared variables or division by zero.

    With ``exact`` the value is a sympy number computed without rounding.

    Raises:
        InvariantViolation: a state index has no value.
    """
    env = _env(tt, state_values, variable_values, DEFAULT_TOLERANCE, exact)
    return _undeclared(env, expr) or _eval_real_expr(expr, env)


def evaluate_constraint_result(
    tt: TruthTable,
    state_values: StateValues,
    constraint: Constraint,
    variable_values: Optional[VariableValues] = None,
    tol: float = DEFAULT_TOLERANCE,
    exact: bool = False,
) -> Result[bool]:
    env = _env(tt, state_values, variable_values, tol, exact)
    return _undeclared(env, constraint) or _eval_constraint(constraint, env)


def evaluate_real_expr(
    tt: TruthTable,
    state_values: StateValues,
    expr: RealExpr,
    variable_values: Optional[VariableValues] = None,
    exact: bool = False,
) -> Number:
    """Eager variant of :func:`evaluate_real_expr_result`.

    Raises:
        UndeclaredVariablesError, DivisionByZeroError
    """
    return evaluate_real_expr_result(tt, state_values, expr, variable_values, exact).unwrap()


def evaluate_constraint(
    tt: TruthTable,
    state_values: StateValues,
    constraint: Constraint,
    variable_values: Optional[VariableValues] = None,
    tol: float = DEFAULT_TOLERANCE,
    exact: bool = False,
) -> bool:
    return evaluate_constraint_result(
        tt, state_values, constraint, variable_values, tol, exact
    ).unwrap()


def validate_model(
    constraints: Iterable[Constraint],
    state_values: StateValues,
    tt: TruthTable,
    variable_values: Optional[VariableValues] = None,
    tol: float = DEFAULT_TOLERANCE,
    exact: bool = False,
) -> List[bool]:
    """Whether each constraint holds under the given values.

    A constraint whose evaluation fails (division by zero, missing
    variable) does not hold. With ``exact`` comparisons are decided on
    sympy numbers and ``tol`` is not used; a float value stands for its
    shortest decimal form.
    """
    holds = []
    for index, c in enumerate(constraints):
        result = evaluate_constraint_result(tt, state_values, c, variable_values, tol, exact)
        ok = result.is_ok() and result.value
        if not ok:
            logger.debug("constraint %d fails validation: %s", index, result)
        holds.append(ok)
    return holds
