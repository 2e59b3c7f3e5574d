"""Collect the free real variables and sentence letters of constraints."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Collection, Dict, Iterable, List, Union

from ..language.dispatch import dispatch
from ..language.sentence import Letter
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
from ..state_space.letters import LetterSet, letters_in_sentence


@dataclass
class VariableLists:
    """Real variable names and sentence letters, first-encounter order."""

    real: List[str] = field(default_factory=list)
    sentence: List[Letter] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.real and not self.sentence


class _Collector:
    def __init__(self):
        self.real: Dict[str, None] = {}
        self.sentence = LetterSet()

    def result(self) -> VariableLists:
        return VariableLists(real=list(self.real), sentence=list(self.sentence))


@dispatch((Literal, StateVariableSum), _Collector)
def _collect_variables(expr, acc):
    return acc


@dispatch(Variable, _Collector)
def _collect_variables(expr, acc):  # noqa: F811
    acc.real.setdefault(expr.id, None)
    return acc


@dispatch(Probability, _Collector)
def _collect_variables(expr, acc):  # noqa: F811
    for l in letters_in_sentence(expr.arg):
        acc.sentence.add(l)
    return acc


@dispatch(GivenProbability, _Collector)
def _collect_variables(expr, acc):  # noqa: F811
    for l in letters_in_sentence(expr.arg) + letters_in_sentence(expr.given):
        acc.sentence.add(l)
    return acc


@dispatch(Negative, _Collector)
def _collect_variables(expr, acc):  # noqa: F811
    return _collect_variables(expr.expr, acc)


@dispatch((Plus, Minus, Multiply), _Collector)
def _collect_variables(expr, acc):  # noqa: F811
    _collect_variables(expr.left, acc)
    return _collect_variables(expr.right, acc)


@dispatch(Divide, _Collector)
def _collect_variables(expr, acc):  # noqa: F811
    _collect_variables(expr.numerator, acc)
    return _collect_variables(expr.denominator, acc)


@dispatch(Power, _Collector)
def _collect_variables(expr, acc):  # noqa: F811
    _collect_variables(expr.base, acc)
    return _collect_variables(expr.exponent, acc)


@dispatch((Equal, NotEqual, LessThan, LessThanOrEqual, GreaterThan, GreaterThanOrEqual), _Collector)
def _collect_variables(c, acc):  # noqa: F811
    _collect_variables(c.left, acc)
    return _collect_variables(c.right, acc)


@dispatch(ConstraintNegation, _Collector)
def _collect_variables(c, acc):  # noqa: F811
    return _collect_variables(c.constraint, acc)


@dispatch(
    (ConstraintConjunction, ConstraintDisjunction, ConstraintConditional, ConstraintBiconditional),
    _Collector,
)
def _collect_variables(c, acc):  # noqa: F811
    _collect_variables(c.left, acc)
    return _collect_variables(c.right, acc)


def variables_in_constraints(constraints: Iterable[Union[Constraint, RealExpr]]) -> VariableLists:
    """All real variables and letters occurring in ``constraints``, deduplicated."""
    acc = _Collector()
    for c in constraints:
        _collect_variables(c, acc)
    return acc.result()


def free_variables(
    node: Union[Constraint, RealExpr],
    declared_letters: Collection[Letter],
    declared_reals: Collection[str] = (),
) -> VariableLists:
    """Variables of ``node`` that are not declared, first-encounter order."""
    found = variables_in_constraints([node])
    return VariableLists(
        real=[v for v in found.real if v not in declared_reals],
        sentence=[l for l in found.sentence if l not in declared_letters],
    )
