"""Canonical enumeration of propositional states."""

from .letters import LetterSet, letter_sort_key, letters_in_sentence  # noqa: F401
from .truth_table import TruthTable  # noqa: F401
from .sentence_eval import evaluate_sentence, evaluate_sentence_recursive  # noqa: F401
