"""Truth evaluation of sentences under a letter valuation."""
from __future__ import annotations

from typing import Callable, Dict, List, Tuple

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
from ..utils.exceptions import InvariantViolation

LetterValuation = Callable[[Letter], bool]

_BINARY = {
    Conjunction: lambda l, r: l and r,
    Disjunction: lambda l, r: l or r,
    Conditional: lambda l, r: (not l) or r,
    Biconditional: lambda l, r: l == r,
}


@dispatch(Value, object)
def _eval_sentence(s, eval_letter):
    return s.value


@dispatch(Letter, object)
def _eval_sentence(s, eval_letter):  # noqa: F811
    return eval_letter(s)


@dispatch(Negation, object)
def _eval_sentence(s, eval_letter):  # noqa: F811
    return not _eval_sentence(s.sentence, eval_letter)


@dispatch((Conjunction, Disjunction, Conditional, Biconditional), object)
def _eval_sentence(s, eval_letter):  # noqa: F811
    lv = _eval_sentence(s.left, eval_letter)
    rv = _eval_sentence(s.right, eval_letter)
    return _BINARY[type(s)](lv, rv)


def evaluate_sentence_recursive(eval_letter: LetterValuation, sentence: Sentence) -> bool:
    """Reference evaluator; follows the tree structure directly."""
    return _eval_sentence(sentence, eval_letter)


def evaluate_sentence(eval_letter: LetterValuation, sentence: Sentence) -> bool:
    """Evaluate ``sentence`` with an explicit stack.

    Produces the same values as :func:`evaluate_sentence_recursive` but does
    not hit the interpreter recursion limit on very deep sentences.
    """
    # (node, children_done)
    stack: List[Tuple[Sentence, bool]] = [(sentence, False)]
    values: Dict[int, bool] = {}

    while stack:
        node, children_done = stack.pop()
        if isinstance(node, Value):
            values[id(node)] = node.value
        elif isinstance(node, Letter):
            values[id(node)] = eval_letter(node)
        elif isinstance(node, Negation):
            if children_done:
                values[id(node)] = not values[id(node.sentence)]
            else:
                stack.append((node, True))
                stack.append((node.sentence, False))
        elif type(node) in _BINARY:
            if children_done:
                values[id(node)] = _BINARY[type(node)](values[id(node.left)], values[id(node.right)])
            else:
                stack.append((node, True))
                stack.append((node.right, False))
                stack.append((node.left, False))
        else:
            raise InvariantViolation(f"unknown sentence node: {node!r}")

    return values[id(sentence)]
