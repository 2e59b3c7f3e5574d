"""Random sentences, real expressions and constraints."""
from __future__ import annotations

import random
import string
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from ..language.sentence import (
    Sentence,
    Value,
    Letter,
    Negation,
    Conjunction,
    Disjunction,
    Conditional,
    Biconditional,
)
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
from .generator import Shape, make_generator

# Depth of sentences under probability leaves and of expressions under comparisons
LEAF_DEPTH = 5


def random_letters_and_assignments(
    rng: random.Random, n_letters: int
) -> Tuple[List[Letter], Callable[[Letter], bool]]:
    """The first ``n_letters`` letters A, B, ... and a random valuation of them."""
    if not 0 < n_letters <= len(string.ascii_uppercase):
        raise ValueError(f"n_letters must be in [1, 26], got {n_letters}")
    letters = [Letter(c) for c in string.ascii_uppercase[:n_letters]]
    assignment = {l.id: rng.random() < 0.5 for l in letters}

    def valuation(l: Letter) -> bool:
        return assignment[l.id]

    return letters, valuation


class SentenceFuzzer:
    def __init__(self, rng: random.Random, max_depth: int = 20):
        self.rng = rng
        self.max_depth = max_depth

    def generate(self, letters: List[Letter], depth: Optional[int] = None) -> Sentence:
        if not letters:
            raise ValueError("Unable to generate sentence without at least one letter to choose from")
        rng = self.rng
        shapes: Dict[str, Shape[Sentence]] = {
            "value": Shape(0, lambda _: Value(rng.random() < 0.5)),
            "letter": Shape(0, lambda _: rng.choice(letters)),
            "negation": Shape(1, lambda c: Negation(c[0])),
            "disjunction": Shape(2, lambda c: Disjunction(c[0], c[1])),
            "conjunction": Shape(2, lambda c: Conjunction(c[0], c[1])),
            "conditional": Shape(2, lambda c: Conditional(c[0], c[1])),
            "biconditional": Shape(2, lambda c: Biconditional(c[0], c[1])),
        }
        return make_generator(shapes)(rng, self.max_depth if depth is None else depth)


class RealExprFuzzer:
    def __init__(
        self,
        rng: random.Random,
        sentence: Optional[SentenceFuzzer] = None,
        max_depth: int = 20,
        include: Optional[Iterable[str]] = None,
        exclude: Optional[Iterable[str]] = None,
    ):
        self.rng = rng
        self.sentence = sentence or SentenceFuzzer(rng, max_depth)
        self.max_depth = max_depth
        self.include = include
        self.exclude = exclude

    def _variable_name(self) -> str:
        length = self.rng.randint(1, 3)
        return "".join(self.rng.choice(string.ascii_uppercase) for _ in range(length))

    def generate(self, letters: List[Letter], depth: Optional[int] = None) -> RealExpr:
        rng = self.rng

        def sg() -> Sentence:
            return self.sentence.generate(letters, LEAF_DEPTH)

        shapes: Dict[str, Shape[RealExpr]] = {
            "variable": Shape(0, lambda _: Variable(self._variable_name())),
            "state_variable_sum": Shape(0, lambda _: StateVariableSum(())),
            "literal": Shape(0, lambda _: Literal(rng.uniform(0, 100))),
            "probability": Shape(0, lambda _: Probability(sg())),
            "given_probability": Shape(0, lambda _: GivenProbability(sg(), sg())),
            "negative": Shape(1, lambda c: Negative(c[0])),
            "plus": Shape(2, lambda c: Plus(c[0], c[1])),
            "minus": Shape(2, lambda c: Minus(c[0], c[1])),
            "multiply": Shape(2, lambda c: Multiply(c[0], c[1])),
            "divide": Shape(2, lambda c: Divide(c[0], c[1])),
            "power": Shape(1, lambda c: Power(c[0], Literal(rng.randint(0, 4)))),
        }
        gen = make_generator(shapes, self.include, self.exclude)
        return gen(rng, self.max_depth if depth is None else depth)


class ConstraintFuzzer:
    def __init__(
        self,
        rng: random.Random,
        sentence: Optional[SentenceFuzzer] = None,
        real_expr: Optional[RealExprFuzzer] = None,
        max_depth: int = 20,
    ):
        self.rng = rng
        self.sentence = sentence or SentenceFuzzer(rng, max_depth)
        self.real_expr = real_expr or RealExprFuzzer(rng, self.sentence, max_depth)
        self.max_depth = max_depth

    def generate(self, letters: List[Letter], depth: Optional[int] = None) -> Constraint:
        def comparison(cls):
            return Shape(0, lambda _: cls(
                self.real_expr.generate(letters, LEAF_DEPTH),
                self.real_expr.generate(letters, LEAF_DEPTH),
            ))

        shapes: Dict[str, Shape[Constraint]] = {
            "equal": comparison(Equal),
            "not_equal": comparison(NotEqual),
            "less_than": comparison(LessThan),
            "less_than_or_equal": comparison(LessThanOrEqual),
            "greater_than": comparison(GreaterThan),
            "greater_than_or_equal": comparison(GreaterThanOrEqual),
            "negation": Shape(1, lambda c: ConstraintNegation(c[0])),
            "disjunction": Shape(2, lambda c: ConstraintDisjunction(c[0], c[1])),
            "conjunction": Shape(2, lambda c: ConstraintConjunction(c[0], c[1])),
            "conditional": Shape(2, lambda c: ConstraintConditional(c[0], c[1])),
            "biconditional": Shape(2, lambda c: ConstraintBiconditional(c[0], c[1])),
        }
        return make_generator(shapes)(self.rng, self.max_depth if depth is None else depth)
