"""Minimal s-expressions: an atom is a ``str``, a list is a ``list`` of S.

Used both for rendering solver requests and for reading solver answers.
"""
from __future__ import annotations

import re
from typing import List, Union

from .exceptions import MalformedInputError

S = Union[str, List["S"]]

_TOKEN = re.compile(r"\s*(?:(\()|(\))|([^\s()]+))")


def s_to_string(s: S) -> str:
    """Render an atom as itself and a list as its space-joined elements in parens."""
    if isinstance(s, str):
        return s
    return "(" + " ".join(s_to_string(item) for item in s) + ")"


def _tokenize(text: str) -> List[str]:
    tokens = []
    pos = 0
    text = text.rstrip()
    while pos < len(text):
        match = _TOKEN.match(text, pos)
        if match is None:
            raise MalformedInputError(f"unexpected character at {pos} in {text!r}")
        tokens.append(match.group(1) or match.group(2) or match.group(3))
        pos = match.end()
    return tokens


def parse_s(text: str) -> S:
    """Parse exactly one s-expression from ``text``.

    >>> parse_s('(root-obj (+ (^ x 2) (- 2)) 1)')
    ['root-obj', ['+', ['^', 'x', '2'], ['-', '2']], '1']
    """
    tokens = _tokenize(text)
    if not tokens:
        raise MalformedInputError("empty s-expression")
    stack: List[List[S]] = []
    result: S | None = None
    for pos, token in enumerate(tokens):
        if result is not None:
            raise MalformedInputError(f"trailing input after s-expression: {tokens[pos:]}")
        if token == "(":
            stack.append([])
        elif token == ")":
            if not stack:
                raise MalformedInputError(f"unbalanced ')' in {text!r}")
            done = stack.pop()
            if stack:
                stack[-1].append(done)
            else:
                result = done
        elif stack:
            stack[-1].append(token)
        else:
            result = token
    if stack or result is None:
        raise MalformedInputError(f"unbalanced '(' in {text!r}")
    return result
