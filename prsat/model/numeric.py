"""Exact and floating-point values of decoded model assignments."""
from __future__ import annotations

from sympy import Expr, Poly, Rational, Symbol
from sympy.polys import real_roots
from sympy.polys.polyerrors import PolynomialError

from ..utils.exceptions import DecodeError
from .assignment import (
    ModelAssignmentOutput,
    LiteralValue,
    NegativeValue,
    RationalValue,
    RootObjValue,
    UnknownValue,
)

_x = Symbol("x")


def _root(value: RootObjValue) -> Expr:
    poly = Poly(list(value.coefficients), _x)
    if poly.is_zero:
        raise DecodeError("root-obj of the zero polynomial")
    try:
        roots = real_roots(poly, multiple=False)
    except PolynomialError as e:
        raise DecodeError(f"cannot isolate roots of {poly}") from e
    # one entry per distinct root, ascending
    if not 1 <= value.index <= len(roots):
        raise DecodeError(
            f"root index {value.index} out of range, {poly} has {len(roots)} real root(s)"
        )
    return roots[value.index - 1][0]


def assignment_to_sympy(value: ModelAssignmentOutput) -> Expr:
    """Exact sympy number for a decoded value.

    Root objects become explicit radicals where sympy finds them, and
    ``CRootOf`` instances otherwise.
    """
    if isinstance(value, LiteralValue):
        return Rational(value.value.numerator, value.value.denominator)
    if isinstance(value, NegativeValue):
        return -assignment_to_sympy(value.inner)
    if isinstance(value, RationalValue):
        denominator = assignment_to_sympy(value.denominator)
        if denominator == 0:
            raise DecodeError("rational model value with a zero denominator")
        return assignment_to_sympy(value.numerator) / denominator
    if isinstance(value, RootObjValue):
        return _root(value)
    if isinstance(value, UnknownValue):
        raise DecodeError(f"cannot evaluate unrecognized model value {value.s!r}")
    raise TypeError(f"not a model value: {value!r}")


def assignment_to_float(value: ModelAssignmentOutput) -> float:
    return float(assignment_to_sympy(value).evalf(30))
