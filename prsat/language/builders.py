"""Short constructors for building trees by hand (mostly used in tests)."""
from __future__ import annotations

from typing import Iterable

from .sentence import (
    Sentence,
    Value,
    Letter,
    Negation,
    Conjunction,
    Disjunction,
    Conditional,
    Biconditional,
)
from .real_expr import (
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
from .constraint import (
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


# Sentences

def val(value: bool) -> Sentence:
    return Value(value)


def letter(id: str, index: int = 0) -> Letter:  # pylint: disable=redefined-builtin
    return Letter(id, index)


def not_(s: Sentence) -> Sentence:
    return Negation(s)


def and_(left: Sentence, right: Sentence) -> Sentence:
    return Conjunction(left, right)


def or_(left: Sentence, right: Sentence) -> Sentence:
    return Disjunction(left, right)


def imp(left: Sentence, right: Sentence) -> Sentence:
    return Conditional(left, right)


def iff(left: Sentence, right: Sentence) -> Sentence:
    return Biconditional(left, right)


# Real expressions

def lit(value: float) -> Literal:
    return Literal(value)


def vbl(id: str) -> Variable:  # pylint: disable=redefined-builtin
    return Variable(id)


def svs(indices: Iterable[int]) -> StateVariableSum:
    return StateVariableSum(tuple(indices))


def pr(arg: Sentence) -> RealExpr:
    return Probability(arg)


def cpr(arg: Sentence, given: Sentence) -> RealExpr:
    return GivenProbability(arg, given)


def neg(expr: RealExpr) -> RealExpr:
    return Negative(expr)


def plus(left: RealExpr, right: RealExpr) -> RealExpr:
    return Plus(left, right)


def minus(left: RealExpr, right: RealExpr) -> RealExpr:
    return Minus(left, right)


def mul(left: RealExpr, right: RealExpr) -> RealExpr:
    return Multiply(left, right)


def div(numerator: RealExpr, denominator: RealExpr) -> RealExpr:
    return Divide(numerator, denominator)


def power(base: RealExpr, exponent: RealExpr) -> RealExpr:
    return Power(base, exponent)


# Constraints

def eq(left: RealExpr, right: RealExpr) -> Constraint:
    return Equal(left, right)


def neq(left: RealExpr, right: RealExpr) -> Constraint:
    return NotEqual(left, right)


def lt(left: RealExpr, right: RealExpr) -> Constraint:
    return LessThan(left, right)


def lte(left: RealExpr, right: RealExpr) -> Constraint:
    return LessThanOrEqual(left, right)


def gt(left: RealExpr, right: RealExpr) -> Constraint:
    return GreaterThan(left, right)


def gte(left: RealExpr, right: RealExpr) -> Constraint:
    return GreaterThanOrEqual(left, right)


def cnot(c: Constraint) -> Constraint:
    return ConstraintNegation(c)


def cand(left: Constraint, right: Constraint) -> Constraint:
    return ConstraintConjunction(left, right)


def cor(left: Constraint, right: Constraint) -> Constraint:
    return ConstraintDisjunction(left, right)


def cimp(left: Constraint, right: Constraint) -> Constraint:
    return ConstraintConditional(left, right)


def ciff(left: Constraint, right: Constraint) -> Constraint:
    return ConstraintBiconditional(left, right)
