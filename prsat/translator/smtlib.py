"""
SMT-LIB (QF_NRA) rendering of translated constraints.

A solver request is, in order: the logic declaration, one ``declare-const``
per real variable and per state variable, one ``assert`` per constraint,
``(check-sat)`` and ``(get-model)``.
"""
from __future__ import annotations

from fractions import Fraction
from typing import Iterable, List, Sequence

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
from ..utils.exceptions import TranslationError
from ..utils.sexpr import S, s_to_string

LOGIC = "QF_NRA"

COMPARISON_OPS = {
    Equal: "=",
    LessThan: "<",
    LessThanOrEqual: "<=",
    GreaterThan: ">",
    GreaterThanOrEqual: ">=",
}


def state_index_id(state_index: int) -> str:
    return f"s_{state_index}"


def literal_to_smtlib(value: float) -> S:
    """Integral values as numerals, others as the exact ratio of their decimal form."""
    if float(value).is_integer():
        return str(int(value))
    ratio = Fraction(repr(float(value)))
    return ["/", str(ratio.numerator), str(ratio.denominator)]


def _flatten_both(cls, expr: RealExpr, acc: List[S]) -> List[S]:
    # associative: every nested occurrence of cls is spliced in
    if isinstance(expr, cls):
        _flatten_both(cls, expr.left, acc)
        return _flatten_both(cls, expr.right, acc)
    acc.append(_real_expr_smtlib(expr))
    return acc


def _flatten_left(cls, expr: RealExpr, acc: List[S]) -> List[S]:
    # left-associative: only the left spine is spliced in
    if isinstance(expr, cls):
        left, right = (expr.numerator, expr.denominator) if cls is Divide else (expr.left, expr.right)
        _flatten_left(cls, left, acc)
        acc.append(_real_expr_smtlib(right))
        return acc
    acc.append(_real_expr_smtlib(expr))
    return acc


@dispatch(Literal)
def _real_expr_smtlib(expr):
    return literal_to_smtlib(expr.value)


@dispatch(Variable)
def _real_expr_smtlib(expr):  # noqa: F811
    return expr.id


@dispatch((Probability, GivenProbability))
def _real_expr_smtlib(expr):  # noqa: F811
    raise TranslationError(
        "Unable to convert a probability to an SMT-LIB term; translate the expression first"
    )


@dispatch(StateVariableSum)
def _real_expr_smtlib(expr):  # noqa: F811
    if not expr.indices:
        return "0"
    if len(expr.indices) == 1:
        return state_index_id(expr.indices[0])
    return ["+"] + [state_index_id(i) for i in expr.indices]


@dispatch(Negative)
def _real_expr_smtlib(expr):  # noqa: F811
    return ["-", _real_expr_smtlib(expr.expr)]


@dispatch(Plus)
def _real_expr_smtlib(expr):  # noqa: F811
    return ["+"] + _flatten_both(Plus, expr, [])


@dispatch(Multiply)
def _real_expr_smtlib(expr):  # noqa: F811
    return ["*"] + _flatten_both(Multiply, expr, [])


@dispatch(Minus)
def _real_expr_smtlib(expr):  # noqa: F811
    return ["-"] + _flatten_left(Minus, expr, [])


@dispatch(Divide)
def _real_expr_smtlib(expr):  # noqa: F811
    return ["/"] + _flatten_left(Divide, expr, [])


@dispatch(Power)
def _real_expr_smtlib(expr):  # noqa: F811
    return ["^", _real_expr_smtlib(expr.base), _real_expr_smtlib(expr.exponent)]


def _flatten_connective(cls, c: Constraint, acc: List[S]) -> List[S]:
    if isinstance(c, cls):
        _flatten_connective(cls, c.left, acc)
        return _flatten_connective(cls, c.right, acc)
    acc.append(_constraint_smtlib(c))
    return acc


def _flatten_right(cls, c: Constraint, acc: List[S]) -> List[S]:
    # a => (b => c) is (=> a b c); the left operand is never spliced
    while isinstance(c, cls):
        acc.append(_constraint_smtlib(c.left))
        c = c.right
    acc.append(_constraint_smtlib(c))
    return acc


@dispatch((Equal, LessThan, LessThanOrEqual, GreaterThan, GreaterThanOrEqual))
def _constraint_smtlib(c):
    return [COMPARISON_OPS[type(c)], _real_expr_smtlib(c.left), _real_expr_smtlib(c.right)]


@dispatch(NotEqual)
def _constraint_smtlib(c):  # noqa: F811
    return ["not", ["=", _real_expr_smtlib(c.left), _real_expr_smtlib(c.right)]]


@dispatch(ConstraintNegation)
def _constraint_smtlib(c):  # noqa: F811
    return ["not", _constraint_smtlib(c.constraint)]


@dispatch(ConstraintConjunction)
def _constraint_smtlib(c):  # noqa: F811
    return ["and"] + _flatten_connective(ConstraintConjunction, c, [])


@dispatch(ConstraintDisjunction)
def _constraint_smtlib(c):  # noqa: F811
    return ["or"] + _flatten_connective(ConstraintDisjunction, c, [])


@dispatch(ConstraintConditional)
def _constraint_smtlib(c):  # noqa: F811
    return ["=>"] + _flatten_right(ConstraintConditional, c, [])


@dispatch(ConstraintBiconditional)
def _constraint_smtlib(c):  # noqa: F811
    return ["=", _constraint_smtlib(c.left), _constraint_smtlib(c.right)]


def real_expr_to_smtlib(expr: RealExpr) -> S:
    """Render a translated expression.

    Raises:
        TranslationError: if a probability operator is still present.
    """
    return _real_expr_smtlib(expr)


def constraint_to_smtlib(constraint: Constraint) -> S:
    return _constraint_smtlib(constraint)


def constraints_to_smtlib_lines(
    tt: TruthTable, real_variables: Sequence[str], constraints: Iterable[Constraint]
) -> List[S]:
    """Complete solver request, one s-expression per line."""
    lines: List[S] = [["set-logic", LOGIC]]
    for name in real_variables:
        lines.append(["declare-const", name, "Real"])
    for state_index in tt.state_indices():
        lines.append(["declare-const", state_index_id(state_index), "Real"])
    for c in constraints:
        lines.append(["assert", constraint_to_smtlib(c)])
    lines.append(["check-sat"])
    lines.append(["get-model"])
    return lines


def constraints_to_smtlib_string(
    tt: TruthTable, real_variables: Sequence[str], constraints: Iterable[Constraint]
) -> str:
    return "\n".join(s_to_string(line) for line in constraints_to_smtlib_lines(tt, real_variables, constraints))
