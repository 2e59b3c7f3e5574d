"""
Decode the value terms a solver prints for real constants.

Grammar, most specific first::

    numeral
    (- term)
    (/ term term)
    (root-obj (+ monomial ...) index)

A root-obj stands for the ``index``-th real root (1-based, ascending) of a
univariate polynomial in ``x``. Its monomials are expected in strictly
descending degree; each is one of ``c``, ``x``, ``(^ x d)``, ``(* c x)``,
``(* c (^ x d))``, ``(- x)`` or ``(- (^ x d))`` where ``c`` is a numeral or
``(- numeral)``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from fractions import Fraction
from typing import List, Optional, Tuple, Union

from ..utils.exceptions import DecodeError
from ..utils.sexpr import S, s_to_string

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LiteralValue:
    """A numeral, kept exact."""

    value: Fraction


@dataclass(frozen=True)
class NegativeValue:
    inner: "ModelAssignmentOutput"


@dataclass(frozen=True)
class RationalValue:
    numerator: "ModelAssignmentOutput"
    denominator: "ModelAssignmentOutput"


@dataclass(frozen=True)
class RootObjValue:
    """Real root number ``index`` (1-based) of sum(c_i * x^(degree - i)).

    Attributes:
        coefficients: dense, highest degree first, ``len == degree + 1``.
    """

    index: int
    coefficients: Tuple[int, ...]

    @property
    def degree(self) -> int:
        return len(self.coefficients) - 1


@dataclass(frozen=True)
class UnknownValue:
    """A term outside the grammar, kept verbatim."""

    s: S


ModelAssignmentOutput = Union[LiteralValue, NegativeValue, RationalValue, RootObjValue, UnknownValue]


def _parse_int(s: S) -> Optional[int]:
    if not isinstance(s, str):
        return None
    try:
        value = Fraction(s)
    except ValueError:
        return None
    if value.denominator != 1:
        return None
    return value.numerator


def _require_int(s: S, what: str) -> int:
    value = _parse_int(s)
    if value is None:
        raise DecodeError(f"expected an integer {what}, got {s!r}")
    return value


def _coefficient(s: S) -> int:
    if isinstance(s, list) and len(s) == 2 and s[0] == "-":
        return -_require_int(s[1], "coefficient")
    return _require_int(s, "coefficient")


def _power_of_x(s: S) -> Optional[int]:
    """Degree of ``x`` or ``(^ x d)``, None for anything else."""
    if s == "x":
        return 1
    if isinstance(s, list) and len(s) == 3 and s[0] == "^" and s[1] == "x":
        return _require_int(s[2], "exponent")
    return None


def parse_poly_term(term: S) -> Tuple[int, int]:
    """Decode one monomial into ``(coefficient, degree)``.

    >>> parse_poly_term(['*', ['-', '3'], ['^', 'x', '3']])
    (-3, 3)
    """
    degree = _power_of_x(term)
    if degree is not None:
        return 1, degree
    constant = _parse_int(term)
    if constant is not None:
        return constant, 0
    if isinstance(term, list) and len(term) == 2 and term[0] == "-":
        degree = _power_of_x(term[1])
        if degree is not None:
            return -1, degree
        return -_require_int(term[1], "constant"), 0
    if isinstance(term, list) and len(term) == 3 and term[0] == "*":
        degree = _power_of_x(term[2])
        if degree is not None:
            return _coefficient(term[1]), degree
    raise DecodeError(f"unexpected monomial {s_to_string(term)}")


def _parse_root_obj(s: List[S]) -> RootObjValue:
    if len(s) != 3:
        raise DecodeError(f"root-obj expects a polynomial and an index: {s_to_string(s)}")
    poly, index = s[1], _require_int(s[2], "root index")
    if not isinstance(poly, list) or len(poly) < 2 or poly[0] != "+":
        raise DecodeError(f"root-obj polynomial is not a sum of monomials: {s_to_string(poly)}")

    coefficients: List[int] = []
    previous: Optional[int] = None
    for term in poly[1:]:
        c, exp = parse_poly_term(term)
        if previous is not None:
            if previous <= exp:
                raise DecodeError(
                    f"expected exponents to strictly decrease, got {exp} after {previous}"
                )
            coefficients.extend([0] * (previous - exp - 1))
        coefficients.append(c)
        previous = exp
    coefficients.extend([0] * previous)
    return RootObjValue(index, tuple(coefficients))


def parse_to_assignment(s: S) -> ModelAssignmentOutput:
    """Decode a parsed value term.

    Raises:
        DecodeError: a numeral or root-obj that does not follow the grammar.
    """
    if isinstance(s, str):
        try:
            return LiteralValue(Fraction(s))
        except ValueError as e:
            raise DecodeError(f"expected a numeral, got {s!r}") from e
    if len(s) == 2 and s[0] == "-":
        return NegativeValue(parse_to_assignment(s[1]))
    if len(s) == 3 and s[0] == "/":
        return RationalValue(parse_to_assignment(s[1]), parse_to_assignment(s[2]))
    if s and s[0] == "root-obj":
        return _parse_root_obj(s)
    logger.warning("unrecognized model value %s", s_to_string(s))
    return UnknownValue(s)


def _int_to_s(i: int) -> S:
    if i < 0:
        return ["-", str(-i)]
    return str(i)


def _numeral(value: Fraction) -> S:
    """Decimal text for ``value``, or a quotient when it has no finite decimal."""
    sign = "-" if value < 0 else ""
    num, den = abs(value.numerator), value.denominator
    if den == 1:
        return f"{sign}{num}.0"
    rest, digits = den, 0
    while rest % 2 == 0 or rest % 5 == 0:
        for p in (2, 5):
            if rest % p == 0:
                rest //= p
        digits += 1
    if rest != 1:
        return ["/", f"{sign}{num}.0", f"{den}.0"]
    text = str(num * 10 ** digits // den).rjust(digits + 1, "0")
    return f"{sign}{text[:-digits]}.{text[-digits:]}"


def _x_to(exp: int) -> S:
    return "x" if exp == 1 else ["^", "x", str(exp)]


def poly_s(cs: List[int]) -> S:
    """Render coefficients (highest degree first) the way the solver prints them."""
    if not cs:
        return "0"
    if len(cs) == 1:
        return _int_to_s(cs[0])
    if len(cs) == 2:
        return ["+", ["*", _int_to_s(cs[0]), "x"], _int_to_s(cs[1])]
    ret: List[S] = ["+"]
    for index, c in enumerate(cs):
        exp = len(cs) - index - 1
        if exp == 0:
            ret.append(_int_to_s(c))
        elif c == 0:
            continue
        elif c == 1:
            ret.append(_x_to(exp))
        elif c == -1 and exp >= 2:
            ret.append(["-", _x_to(exp)])
        else:
            ret.append(["*", _int_to_s(c), _x_to(exp)])
    return ret


def model_assignment_output_to_s(output: ModelAssignmentOutput) -> S:
    if isinstance(output, LiteralValue):
        return _numeral(output.value)
    if isinstance(output, NegativeValue):
        return ["-", model_assignment_output_to_s(output.inner)]
    if isinstance(output, RationalValue):
        return [
            "/",
            model_assignment_output_to_s(output.numerator),
            model_assignment_output_to_s(output.denominator),
        ]
    if isinstance(output, RootObjValue):
        terms: List[S] = ["+"]
        for index, c in enumerate(output.coefficients):
            exp = output.degree - index
            if exp == 0:
                terms.append(_int_to_s(c))
            elif c != 0:
                terms.append(["*", _int_to_s(c), _x_to(exp)])
        return ["root-obj", terms, str(output.index)]
    if isinstance(output, UnknownValue):
        return output.s
    raise TypeError(f"not a model value: {output!r}")


def model_assignment_output_to_string(output: ModelAssignmentOutput) -> str:
    return s_to_string(model_assignment_output_to_s(output))
