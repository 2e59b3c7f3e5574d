"""
Canonical truth table over a fixed letter set.

State ``s`` is read as an n-bit binary number, most significant bit first;
bit ``i`` belongs to the ``i``-th letter in canonical order and a ``0`` bit
means the letter is true. State 0 is therefore the all-true state. With no
letters there is exactly one (vacuous) state.
"""
from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Sequence, Tuple

from ..language.sentence import Sentence, Letter, Value, Negation, Conjunction
from ..utils.exceptions import InvariantViolation
from .letters import LetterSet, letter_sort_key
from .sentence_eval import evaluate_sentence_recursive, LetterValuation

logger = logging.getLogger(__name__)

LetterKey = Callable[[Letter], Tuple]


class TruthTable:
    """Read-only enumeration of the 2^n states of ``letters``.

    Attributes:
        letters: deduplicated letters, sorted with ``key``.
    """

    def __init__(self, letters: Iterable[Letter], key: LetterKey = letter_sort_key):
        self._letters: Tuple[Letter, ...] = tuple(sorted(LetterSet(letters), key=key))
        self._positions = {l: i for i, l in enumerate(self._letters)}
        self._states: Tuple[frozenset, ...] = self._enumerate_states(self._letters)
        logger.debug("truth table: %d letters, %d states", len(self._letters), len(self._states))

    @staticmethod
    def _enumerate_states(letters: Sequence[Letter]) -> Tuple[frozenset, ...]:
        n = len(letters)
        states = []
        for state_index in range(2 ** n):
            bits = format(state_index, "b").zfill(n) if n else ""
            states.append(frozenset(l for l, bit in zip(letters, bits) if bit == "0"))
        return tuple(states)

    @property
    def letters(self) -> Tuple[Letter, ...]:
        return self._letters

    def n_letters(self) -> int:
        return len(self._letters)

    def n_states(self) -> int:
        return len(self._states)

    def state_indices(self) -> range:
        return range(len(self._states))

    def _check_index(self, state_index: int) -> None:
        if not isinstance(state_index, int) or not 0 <= state_index < len(self._states):
            raise InvariantViolation(
                f"state index {state_index!r} out of range [0, {len(self._states)})"
            )

    def letter_value_from_index(self, letter: Letter, state_index: int) -> bool:
        """Whether ``letter`` is true in state ``state_index``."""
        self._check_index(state_index)
        return letter in self._states[state_index]

    def compute_dnf(self, sentence: Sentence) -> List[int]:
        """Indices of every state in which ``sentence`` is true, ascending."""
        return [
            index
            for index, state in enumerate(self._states)
            if evaluate_sentence_recursive(state.__contains__, sentence)
        ]

    def _evaluate_state(self, eval_letter: LetterValuation, state_index: int) -> bool:
        state = self._states[state_index]
        return all(eval_letter(l) == (l in state) for l in self._letters)

    def evaluate_dnf(self, eval_letter: LetterValuation, dnf: Iterable[int]) -> bool:
        """True iff ``eval_letter`` matches one of the states in ``dnf`` exactly."""
        for state_index in dnf:
            self._check_index(state_index)
            if self._evaluate_state(eval_letter, state_index):
                return True
        return False

    def state_from_index(self, state_index: int) -> Sentence:
        """Sentence true in exactly state ``state_index``.

        Built as a right-nested conjunction in letter order, e.g. for letters
        A, B, C state 5 gives ``~A & (B & ~C)``.
        """
        self._check_index(state_index)
        if not self._letters:
            return Value(True)
        state = self._states[state_index]
        current = None
        for l in reversed(self._letters):
            part = l if l in state else Negation(l)
            current = part if current is None else Conjunction(part, current)
        return current

    def __repr__(self) -> str:
        return f"TruthTable([{', '.join(str(l) for l in self._letters)}])"
