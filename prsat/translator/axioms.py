"""
Side constraints that make the translated problem faithful:

- probability axioms: every state variable is non-negative (positive in
  regular mode) and all state variables sum to one;
- division guards: every denominator that is not a nonzero literal must be
  nonzero, because real-arithmetic solvers treat ``x / 0`` as a total
  function and would otherwise admit spurious models.
"""
from __future__ import annotations

import logging
from typing import Iterable, List

from ..language.dispatch import dispatch
from ..language.real_expr import (
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

logger = logging.getLogger(__name__)


def probability_axioms(tt: TruthTable, regular: bool = False) -> List[Constraint]:
    """Per-state ``s_i > 0`` (regular) or ``s_i >= 0``, then ``sum s_i = 1``."""
    positivity = GreaterThan if regular else GreaterThanOrEqual
    axioms: List[Constraint] = [
        positivity(StateVariableSum((i,)), Literal(0)) for i in tt.state_indices()
    ]
    axioms.append(Equal(StateVariableSum(tuple(tt.state_indices())), Literal(1)))
    return axioms


def _needs_guard(denominator) -> bool:
    return not isinstance(denominator, Literal) or denominator.value == 0


@dispatch((Literal, Variable, StateVariableSum, Probability, GivenProbability), list)
def _guards_in(node, acc):
    return acc


@dispatch(Negative, list)
def _guards_in(node, acc):  # noqa: F811
    return _guards_in(node.expr, acc)


@dispatch((Plus, Minus, Multiply), list)
def _guards_in(node, acc):  # noqa: F811
    _guards_in(node.left, acc)
    return _guards_in(node.right, acc)


@dispatch(Power, list)
def _guards_in(node, acc):  # noqa: F811
    _guards_in(node.base, acc)
    return _guards_in(node.exponent, acc)


@dispatch(Divide, list)
def _guards_in(node, acc):  # noqa: F811
    if _needs_guard(node.denominator):
        acc.append(ConstraintNegation(Equal(node.denominator, Literal(0))))
    _guards_in(node.numerator, acc)
    return _guards_in(node.denominator, acc)


@dispatch((Equal, NotEqual, LessThan, LessThanOrEqual, GreaterThan, GreaterThanOrEqual), list)
def _guards_in(node, acc):  # noqa: F811
    _guards_in(node.left, acc)
    return _guards_in(node.right, acc)


@dispatch(ConstraintNegation, list)
def _guards_in(node, acc):  # noqa: F811
    return _guards_in(node.constraint, acc)


@dispatch(
    (ConstraintConjunction, ConstraintDisjunction, ConstraintConditional, ConstraintBiconditional),
    list,
)
def _guards_in(node, acc):  # noqa: F811
    _guards_in(node.left, acc)
    return _guards_in(node.right, acc)


def division_guards(nodes: Iterable) -> List[Constraint]:
    """``not (denominator = 0)`` for every guarded division.

    Guards are listed depth-first, left to right, without deduplication; a
    division's own guard precedes those of its subterms.
    """
    acc: List[Constraint] = []
    for node in nodes:
        _guards_in(node, acc)
    return acc


def enrich_constraints(
    tt: TruthTable, regular: bool, translated: List[Constraint]
) -> List[Constraint]:
    """Axioms, then division guards, then the translated constraints."""
    axioms = probability_axioms(tt, regular)
    guards = division_guards(translated)
    logger.debug(
        "enriched: %d axioms, %d division guards, %d constraints",
        len(axioms), len(guards), len(translated),
    )
    return axioms + guards + list(translated)
