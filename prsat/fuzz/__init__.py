"""Bounded random tree generation for property-based tests."""

from .generator import Shape, make_generator  # noqa: F401
from .fuzzers import (  # noqa: F401
    SentenceFuzzer,
    RealExprFuzzer,
    ConstraintFuzzer,
    random_letters_and_assignments,
)
