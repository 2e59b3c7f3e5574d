"""JSON interchange format for trees.

Every node becomes a dict with a ``"tag"`` key naming its shape plus one key
per child, e.g. ``{"tag": "probability", "arg": {"tag": "letter", "id": "A",
"index": 0}}``. This is the input format of the command line tool.
"""
from __future__ import annotations

import json
from typing import Any, Dict, List, Union

from ..utils.exceptions import MalformedInputError
from .dispatch import dispatch
from .sentence import (
    Sentence,
    Value,
    Letter,
    Negation,
    Conjunction,
    Disjunction,
    Conditional,
    Biconditional,
)
from .real_expr import (
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
from .constraint import (
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

Node = Union[Sentence, RealExpr, Constraint]

# Sentence and constraint connectives share tag names; the expected kind
# decides which class a tag maps to.
SENTENCE_TAGS = {
    "value": Value,
    "letter": Letter,
    "negation": Negation,
    "conjunction": Conjunction,
    "disjunction": Disjunction,
    "conditional": Conditional,
    "biconditional": Biconditional,
}

REAL_EXPR_TAGS = {
    "literal": Literal,
    "variable": Variable,
    "state_variable_sum": StateVariableSum,
    "probability": Probability,
    "given_probability": GivenProbability,
    "negative": Negative,
    "plus": Plus,
    "minus": Minus,
    "multiply": Multiply,
    "divide": Divide,
    "power": Power,
}

CONSTRAINT_TAGS = {
    "equal": Equal,
    "not_equal": NotEqual,
    "less_than": LessThan,
    "less_than_or_equal": LessThanOrEqual,
    "greater_than": GreaterThan,
    "greater_than_or_equal": GreaterThanOrEqual,
    "negation": ConstraintNegation,
    "conjunction": ConstraintConjunction,
    "disjunction": ConstraintDisjunction,
    "conditional": ConstraintConditional,
    "biconditional": ConstraintBiconditional,
}

_TAG_OF = {cls: tag for table in (SENTENCE_TAGS, REAL_EXPR_TAGS, CONSTRAINT_TAGS) for tag, cls in table.items()}


@dispatch(Value)
def _to_json(node):
    return {"tag": "value", "value": node.value}


@dispatch(Letter)
def _to_json(node):  # noqa: F811
    return {"tag": "letter", "id": node.id, "index": node.index}


@dispatch(Literal)
def _to_json(node):  # noqa: F811
    return {"tag": "literal", "value": node.value}


@dispatch(Variable)
def _to_json(node):  # noqa: F811
    return {"tag": "variable", "id": node.id}


@dispatch(StateVariableSum)
def _to_json(node):  # noqa: F811
    return {"tag": "state_variable_sum", "indices": list(node.indices)}


_COMPOSITE = (
    Negation,
    Conjunction,
    Disjunction,
    Conditional,
    Biconditional,
    Probability,
    GivenProbability,
    Negative,
    Plus,
    Minus,
    Multiply,
    Divide,
    Power,
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


@dispatch(_COMPOSITE)
def _to_json(node):  # noqa: F811
    out: Dict[str, Any] = {"tag": _TAG_OF[type(node)]}
    for name, child in vars(node).items():
        out[name] = _to_json(child)
    return out


def to_json(node: Node) -> Dict[str, Any]:
    """Convert a tree into nested JSON-compatible dicts."""
    return _to_json(node)


def _require(data: Dict[str, Any], key: str) -> Any:
    if key not in data:
        raise MalformedInputError(f"'{data.get('tag')}' node is missing '{key}'")
    return data[key]


def sentence_from_json(data: Dict[str, Any]) -> Sentence:
    tag = data.get("tag") if isinstance(data, dict) else None
    if tag not in SENTENCE_TAGS:
        raise MalformedInputError(f"unknown sentence tag: {tag!r}")
    if tag == "value":
        return Value(bool(_require(data, "value")))
    if tag == "letter":
        return Letter(str(_require(data, "id")), int(data.get("index", 0)))
    if tag == "negation":
        return Negation(sentence_from_json(_require(data, "sentence")))
    cls = SENTENCE_TAGS[tag]
    return cls(sentence_from_json(_require(data, "left")), sentence_from_json(_require(data, "right")))


def real_expr_from_json(data: Dict[str, Any]) -> RealExpr:
    tag = data.get("tag") if isinstance(data, dict) else None
    if tag not in REAL_EXPR_TAGS:
        raise MalformedInputError(f"unknown real expression tag: {tag!r}")
    if tag == "literal":
        try:
            return Literal(float(_require(data, "value")))
        except ValueError as exc:
            raise MalformedInputError(str(exc)) from exc
    if tag == "variable":
        return Variable(str(_require(data, "id")))
    if tag == "state_variable_sum":
        return StateVariableSum(tuple(int(i) for i in _require(data, "indices")))
    if tag == "probability":
        return Probability(sentence_from_json(_require(data, "arg")))
    if tag == "given_probability":
        return GivenProbability(
            sentence_from_json(_require(data, "arg")),
            sentence_from_json(_require(data, "given")),
        )
    if tag == "negative":
        return Negative(real_expr_from_json(_require(data, "expr")))
    if tag == "divide":
        return Divide(
            real_expr_from_json(_require(data, "numerator")),
            real_expr_from_json(_require(data, "denominator")),
        )
    if tag == "power":
        return Power(
            real_expr_from_json(_require(data, "base")),
            real_expr_from_json(_require(data, "exponent")),
        )
    cls = REAL_EXPR_TAGS[tag]
    return cls(real_expr_from_json(_require(data, "left")), real_expr_from_json(_require(data, "right")))


def constraint_from_json(data: Dict[str, Any]) -> Constraint:
    tag = data.get("tag") if isinstance(data, dict) else None
    if tag not in CONSTRAINT_TAGS:
        raise MalformedInputError(f"unknown constraint tag: {tag!r}")
    cls = CONSTRAINT_TAGS[tag]
    if tag == "negation":
        return ConstraintNegation(constraint_from_json(_require(data, "constraint")))
    if cls in (ConstraintConjunction, ConstraintDisjunction, ConstraintConditional, ConstraintBiconditional):
        return cls(constraint_from_json(_require(data, "left")), constraint_from_json(_require(data, "right")))
    return cls(real_expr_from_json(_require(data, "left")), real_expr_from_json(_require(data, "right")))


def constraint_or_real_expr_from_json(data: Dict[str, Any]) -> Union[Constraint, RealExpr]:
    """Decode either kind; comparison and connective tags mean a constraint."""
    tag = data.get("tag") if isinstance(data, dict) else None
    if tag in CONSTRAINT_TAGS:
        return constraint_from_json(data)
    return real_expr_from_json(data)


def load_constraints(text: str) -> List[Constraint]:
    """Parse a JSON document holding a list of constraints.

    The document is either a bare list or an object with a ``"constraints"`` key.
    """
    try:
        doc = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedInputError(f"invalid JSON: {exc}") from exc
    if isinstance(doc, dict):
        doc = _require(doc, "constraints")
    if not isinstance(doc, list):
        raise MalformedInputError("expected a list of constraints")
    return [constraint_from_json(item) for item in doc]


def dump_constraints(constraints: List[Constraint], indent: int = 2) -> str:
    return json.dumps([to_json(c) for c in constraints], indent=indent, ensure_ascii=False)
