"""Letter bookkeeping: ordering, deduplication and collection."""
from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from ..language.dispatch import dispatch
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


def letter_sort_key(letter: Letter) -> Tuple[str, int]:
    """Default canonical order: name, then index."""
    return (letter.id, letter.index)


class LetterSet:
    """Insertion-ordered set of letters."""

    def __init__(self, letters: Iterable[Letter] = ()):
        self._letters: Dict[Letter, None] = {}
        for l in letters:
            self.add(l)

    def add(self, letter: Letter) -> bool:
        """Add ``letter``; return False if it was already present."""
        if letter in self._letters:
            return False
        self._letters[letter] = None
        return True

    def __contains__(self, letter: object) -> bool:
        return letter in self._letters

    def __iter__(self) -> Iterator[Letter]:
        return iter(self._letters)

    def __len__(self) -> int:
        return len(self._letters)

    def is_empty(self) -> bool:
        return not self._letters

    def difference(self, other: "LetterSet") -> "LetterSet":
        return LetterSet(l for l in self._letters if l not in other)

    def __repr__(self) -> str:
        return f"LetterSet([{', '.join(str(l) for l in self._letters)}])"


@dispatch(Value, object)
def _collect_letters(s, acc):
    return acc


@dispatch(Letter, object)
def _collect_letters(s, acc):  # noqa: F811
    acc.append(s)
    return acc


@dispatch(Negation, object)
def _collect_letters(s, acc):  # noqa: F811
    return _collect_letters(s.sentence, acc)


@dispatch((Conjunction, Disjunction, Conditional, Biconditional), object)
def _collect_letters(s, acc):  # noqa: F811
    _collect_letters(s.left, acc)
    return _collect_letters(s.right, acc)


def letters_in_sentence(sentence: Sentence, acc: Optional[List[Letter]] = None) -> List[Letter]:
    """Letters of ``sentence`` in left-to-right order, duplicates included."""
    return _collect_letters(sentence, [] if acc is None else acc)
