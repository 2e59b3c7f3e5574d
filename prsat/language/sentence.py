"""Propositional sentences."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Sentence:
    """Base sentence node."""


@dataclass(frozen=True)
class Value(Sentence):
    value: bool


@dataclass(frozen=True)
class Letter(Sentence):
    """Atomic letter; two letters are the same proposition iff id and index match."""

    id: str
    index: int = 0

    def __str__(self) -> str:
        return f"{self.id}{self.index if self.index > 0 else ''}"


@dataclass(frozen=True)
class Negation(Sentence):
    sentence: Sentence


@dataclass(frozen=True)
class Conjunction(Sentence):
    left: Sentence
    right: Sentence


@dataclass(frozen=True)
class Disjunction(Sentence):
    left: Sentence
    right: Sentence


@dataclass(frozen=True)
class Conditional(Sentence):
    left: Sentence
    right: Sentence


@dataclass(frozen=True)
class Biconditional(Sentence):
    left: Sentence
    right: Sentence


BINARY_SENTENCES = (Conjunction, Disjunction, Conditional, Biconditional)
