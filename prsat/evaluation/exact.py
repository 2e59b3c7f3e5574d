"""
Exact arithmetic on the algebraic numbers a solver model produces.

Values are sympy numbers: rationals, radicals and ``CRootOf`` instances.
Signs are decided exactly, first with sympy's own numeric certification
and, when that is inconclusive, by checking whether the minimal
polynomial of the value is ``x``.
"""
from __future__ import annotations

import math
from fractions import Fraction
from typing import Optional, Union

from sympy import Basic, Expr, Pow, Rational, S, Symbol
from sympy.polys.numberfields import minimal_polynomial
from sympy.polys.polyerrors import NotAlgebraic

_x = Symbol("x")

# digits used to read the sign of a value already known to be nonzero
_SIGN_DIGITS = 30


def to_exact(value: Union[int, float, Fraction, Expr]) -> Expr:
    """The sympy number for ``value``; a float stands for its shortest decimal form."""
    if isinstance(value, Basic):
        return value
    if isinstance(value, float):
        if math.isnan(value):
            return S.NaN
        if math.isinf(value):
            return S.Infinity if value > 0 else S.NegativeInfinity
        value = Fraction(repr(value))
    ratio = Fraction(value)
    return Rational(ratio.numerator, ratio.denominator)


def exact_sign(value: Expr) -> Optional[int]:
    """-1, 0 or 1; None for NaN and values that are not real."""
    if value.is_Rational:
        return (value.p > 0) - (value.p < 0)
    if value is S.NaN or value.is_extended_real is False:
        return None
    if value.is_zero:
        return 0
    if value.is_extended_positive:
        return 1
    if value.is_extended_negative:
        return -1
    try:
        if minimal_polynomial(value, _x) == _x:
            return 0
    except (NotAlgebraic, NotImplementedError):
        return None
    approx = value.evalf(_SIGN_DIGITS)
    if not approx.is_Float:
        return None
    return 1 if approx > 0 else -1


def exact_power(base: Expr, exponent: Expr) -> Expr:
    """``base ** exponent`` with the IEEE answers where the power is undefined.

    ``0`` to a negative power is ``+oo``; a power that is not real is NaN.
    """
    if exact_sign(base) == 0 and exact_sign(exponent) == -1:
        return S.Infinity
    result = Pow(base, exponent)
    if result is S.ComplexInfinity or result.is_extended_real is False:
        return S.NaN
    return result
