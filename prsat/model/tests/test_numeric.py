"""Tests for numeric evaluation of model values"""

import math
from fractions import Fraction

import pytest
from sympy import Rational, sqrt

from prsat.model import (
    LiteralValue,
    NegativeValue,
    RationalValue,
    RootObjValue,
    UnknownValue,
    assignment_to_float,
    assignment_to_sympy,
    parse_to_assignment,
)
from prsat.utils.exceptions import DecodeError
from prsat.utils.sexpr import parse_s


def test_literal_is_exact():
    assert assignment_to_sympy(LiteralValue(Fraction("0.1"))) == Rational(1, 10)


def test_long_numerals_are_exact():
    value = parse_to_assignment(parse_s("(/ 12345678901234567891 3)"))
    assert assignment_to_sympy(value) == Rational(12345678901234567891, 3)
    assert assignment_to_sympy(parse_to_assignment("0.10000000000000000001")) == Rational(
        10000000000000000001, 10**20
    )


def test_rational():
    value = parse_to_assignment(parse_s("(/ 1.0 3.0)"))
    assert assignment_to_sympy(value) == Rational(1, 3)
    assert assignment_to_float(NegativeValue(value)) == pytest.approx(-1 / 3)


def test_zero_denominator():
    with pytest.raises(DecodeError):
        assignment_to_sympy(RationalValue(LiteralValue(Fraction(1)), LiteralValue(Fraction(0))))


def test_root_obj_picks_ascending_root():
    """x^2 - 2 has roots -sqrt(2) < sqrt(2); root-obj indices are 1-based"""
    assert assignment_to_sympy(RootObjValue(1, (1, 0, -2))) == -sqrt(2)
    assert assignment_to_sympy(RootObjValue(2, (1, 0, -2))) == sqrt(2)


def test_root_obj_float():
    value = parse_to_assignment(parse_s("(root-obj (+ (* 8 (^ x 2)) (* 6 x) (- 1)) 2)"))
    expected = (-6 + math.sqrt(36 + 32)) / 16
    assert assignment_to_float(value) == pytest.approx(expected)


def test_repeated_root_counts_once():
    """(x - 1)^2 (x - 2) has two distinct real roots"""
    assert assignment_to_sympy(RootObjValue(2, (1, -4, 5, -2))) == 2


def test_root_index_out_of_range():
    with pytest.raises(DecodeError):
        assignment_to_sympy(RootObjValue(3, (1, 0, -2)))
    with pytest.raises(DecodeError):
        assignment_to_sympy(RootObjValue(1, (1, 0, 1)))


def test_unknown_value():
    with pytest.raises(DecodeError):
        assignment_to_float(UnknownValue(["foo"]))
