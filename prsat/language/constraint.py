"""Constraints: comparisons of real expressions and their boolean combinations."""
from __future__ import annotations

from dataclasses import dataclass

from .real_expr import RealExpr


@dataclass(frozen=True)
class Constraint:
    """Base constraint node."""


@dataclass(frozen=True)
class Equal(Constraint):
    left: RealExpr
    right: RealExpr


@dataclass(frozen=True)
class NotEqual(Constraint):
    left: RealExpr
    right: RealExpr


@dataclass(frozen=True)
class LessThan(Constraint):
    left: RealExpr
    right: RealExpr


@dataclass(frozen=True)
class LessThanOrEqual(Constraint):
    left: RealExpr
    right: RealExpr


@dataclass(frozen=True)
class GreaterThan(Constraint):
    left: RealExpr
    right: RealExpr


@dataclass(frozen=True)
class GreaterThanOrEqual(Constraint):
    left: RealExpr
    right: RealExpr


@dataclass(frozen=True)
class ConstraintNegation(Constraint):
    constraint: Constraint


@dataclass(frozen=True)
class ConstraintConjunction(Constraint):
    left: Constraint
    right: Constraint


@dataclass(frozen=True)
class ConstraintDisjunction(Constraint):
    left: Constraint
    right: Constraint


@dataclass(frozen=True)
class ConstraintConditional(Constraint):
    left: Constraint
    right: Constraint


@dataclass(frozen=True)
class ConstraintBiconditional(Constraint):
    left: Constraint
    right: Constraint


COMPARISONS = (Equal, NotEqual, LessThan, LessThanOrEqual, GreaterThan, GreaterThanOrEqual)
BINARY_CONSTRAINTS = (
    ConstraintConjunction,
    ConstraintDisjunction,
    ConstraintConditional,
    ConstraintBiconditional,
)
