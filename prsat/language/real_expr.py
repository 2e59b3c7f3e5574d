"""Arithmetic expressions over probabilities and real variables."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .sentence import Sentence


@dataclass(frozen=True)
class RealExpr:
    """Base arithmetic expression node."""


@dataclass(frozen=True)
class Literal(RealExpr):
    value: float

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError(f"RealExpr literal initialized with a negative value '{self.value}'")


@dataclass(frozen=True)
class Variable(RealExpr):
    id: str


@dataclass(frozen=True)
class StateVariableSum(RealExpr):
    """Summed probability mass of exactly the states in ``indices``.

    Only produced by translation, never by user input.
    """

    indices: Tuple[int, ...]


@dataclass(frozen=True)
class Probability(RealExpr):
    arg: Sentence


@dataclass(frozen=True)
class GivenProbability(RealExpr):
    arg: Sentence
    given: Sentence


@dataclass(frozen=True)
class Negative(RealExpr):
    expr: RealExpr


@dataclass(frozen=True)
class Plus(RealExpr):
    left: RealExpr
    right: RealExpr


@dataclass(frozen=True)
class Minus(RealExpr):
    left: RealExpr
    right: RealExpr


@dataclass(frozen=True)
class Multiply(RealExpr):
    left: RealExpr
    right: RealExpr


@dataclass(frozen=True)
class Divide(RealExpr):
    numerator: RealExpr
    denominator: RealExpr


@dataclass(frozen=True)
class Power(RealExpr):
    base: RealExpr
    exponent: RealExpr


BINARY_REAL_EXPRS = (Plus, Minus, Multiply)
