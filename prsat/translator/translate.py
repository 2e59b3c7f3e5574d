"""
Rewrite probability operators into sums of per-state probability variables.

``Pr(S)`` becomes the state-variable sum over the DNF of ``S`` (literal 1
when the DNF is every state), and ``Pr(S | T)`` becomes the quotient of the
sums for ``S & T`` and ``T``. Every other node is rebuilt with translated
children, so translating an already translated tree is the identity.
"""
from __future__ import annotations

from typing import Iterable, List, Sequence

from ..language.dispatch import dispatch
from ..language.sentence import Conjunction
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


def _dnf_to_real_expr(tt: TruthTable, dnf: Sequence[int]) -> RealExpr:
    if len(dnf) == tt.n_states():
        return Literal(1)
    return StateVariableSum(tuple(dnf))


@dispatch((Literal, Variable, StateVariableSum), object)
def _translate_real_expr(expr, tt):
    return expr


@dispatch(Probability, object)
def _translate_real_expr(expr, tt):  # noqa: F811
    return _dnf_to_real_expr(tt, tt.compute_dnf(expr.arg))


@dispatch(GivenProbability, object)
def _translate_real_expr(expr, tt):  # noqa: F811
    numerator = _dnf_to_real_expr(tt, tt.compute_dnf(Conjunction(expr.arg, expr.given)))
    denominator = _dnf_to_real_expr(tt, tt.compute_dnf(expr.given))
    return Divide(numerator, denominator)


@dispatch(Negative, object)
def _translate_real_expr(expr, tt):  # noqa: F811
    return Negative(_translate_real_expr(expr.expr, tt))


@dispatch((Plus, Minus, Multiply), object)
def _translate_real_expr(expr, tt):  # noqa: F811
    return type(expr)(_translate_real_expr(expr.left, tt), _translate_real_expr(expr.right, tt))


@dispatch(Divide, object)
def _translate_real_expr(expr, tt):  # noqa: F811
    return Divide(_translate_real_expr(expr.numerator, tt), _translate_real_expr(expr.denominator, tt))


@dispatch(Power, object)
def _translate_real_expr(expr, tt):  # noqa: F811
    return Power(_translate_real_expr(expr.base, tt), _translate_real_expr(expr.exponent, tt))


@dispatch((Equal, NotEqual, LessThan, LessThanOrEqual, GreaterThan, GreaterThanOrEqual), object)
def _translate_constraint(c, tt):
    return type(c)(_translate_real_expr(c.left, tt), _translate_real_expr(c.right, tt))


@dispatch(ConstraintNegation, object)
def _translate_constraint(c, tt):  # noqa: F811
    return ConstraintNegation(_translate_constraint(c.constraint, tt))


@dispatch(
    (ConstraintConjunction, ConstraintDisjunction, ConstraintConditional, ConstraintBiconditional),
    object,
)
def _translate_constraint(c, tt):  # noqa: F811
    return type(c)(_translate_constraint(c.left, tt), _translate_constraint(c.right, tt))


def translate_real_expr(tt: TruthTable, expr: RealExpr) -> RealExpr:
    return _translate_real_expr(expr, tt)


def translate_constraint(tt: TruthTable, constraint: Constraint) -> Constraint:
    return _translate_constraint(constraint, tt)


def translate(tt: TruthTable, constraints: Iterable[Constraint]) -> List[Constraint]:
    """Translate every constraint against the same truth table."""
    return [translate_constraint(tt, c) for c in constraints]
