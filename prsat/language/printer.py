"""Infix rendering of sentences, real expressions and constraints."""
from __future__ import annotations

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

SENTENCE_CONNECTIVES = {
    Conjunction: "&",
    Disjunction: "∨",
    Conditional: "→",
    Biconditional: "↔",
}

REAL_OPERATORS = {
    Plus: "+",
    Minus: "-",
    Multiply: "*",
}

COMPARISON_SYMBOLS = {
    Equal: "=",
    NotEqual: "≠",
    LessThan: "<",
    LessThanOrEqual: "≤",
    GreaterThan: ">",
    GreaterThanOrEqual: "≥",
}

CONSTRAINT_CONNECTIVES = {
    ConstraintConjunction: "&",
    ConstraintDisjunction: "∨",
    ConstraintConditional: "→",
    ConstraintBiconditional: "↔",
}


def format_number(value: float) -> str:
    """Integral values print without a trailing ``.0``."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


# Sentences

def _wrap_sentence(s: Sentence) -> str:
    text = _sentence_str(s)
    if isinstance(s, (Value, Letter, Negation)):
        return text
    return f"({text})"


@dispatch(Value)
def _sentence_str(s):
    return "⊤" if s.value else "⊥"


@dispatch(Letter)
def _sentence_str(s):  # noqa: F811
    return str(s)


@dispatch(Negation)
def _sentence_str(s):  # noqa: F811
    return f"~{_wrap_sentence(s.sentence)}"


@dispatch((Conjunction, Disjunction, Conditional, Biconditional))
def _sentence_str(s):  # noqa: F811
    op = SENTENCE_CONNECTIVES[type(s)]
    return f"{_wrap_sentence(s.left)} {op} {_wrap_sentence(s.right)}"


def sentence_to_string(s: Sentence) -> str:
    return _sentence_str(s)


# Real expressions

def _wrap_real_expr(expr: RealExpr) -> str:
    text = _real_expr_str(expr)
    if isinstance(expr, (Literal, Variable, Probability, GivenProbability, Negative)):
        return text
    if isinstance(expr, StateVariableSum) and len(expr.indices) <= 1:
        return text
    return f"({text})"


@dispatch(Literal)
def _real_expr_str(expr):
    return format_number(expr.value)


@dispatch(Variable)
def _real_expr_str(expr):  # noqa: F811
    return expr.id


@dispatch(StateVariableSum)
def _real_expr_str(expr):  # noqa: F811
    if not expr.indices:
        return "0"
    return " + ".join(f"s_{i}" for i in expr.indices)


@dispatch(Probability)
def _real_expr_str(expr):  # noqa: F811
    return f"Pr({sentence_to_string(expr.arg)})"


@dispatch(GivenProbability)
def _real_expr_str(expr):  # noqa: F811
    return f"Pr({sentence_to_string(expr.arg)} | {sentence_to_string(expr.given)})"


@dispatch(Negative)
def _real_expr_str(expr):  # noqa: F811
    return f"-{_wrap_real_expr(expr.expr)}"


@dispatch((Plus, Minus, Multiply))
def _real_expr_str(expr):  # noqa: F811
    op = REAL_OPERATORS[type(expr)]
    return f"{_wrap_real_expr(expr.left)} {op} {_wrap_real_expr(expr.right)}"


@dispatch(Divide)
def _real_expr_str(expr):  # noqa: F811
    return f"{_wrap_real_expr(expr.numerator)} / {_wrap_real_expr(expr.denominator)}"


@dispatch(Power)
def _real_expr_str(expr):  # noqa: F811
    def wrap(e):
        return f"({_real_expr_str(e)})" if isinstance(e, Negative) else _wrap_real_expr(e)

    return f"{wrap(expr.base)}^{wrap(expr.exponent)}"


def real_expr_to_string(expr: RealExpr) -> str:
    return _real_expr_str(expr)


# Constraints

def _wrap_constraint(c: Constraint) -> str:
    text = _constraint_str(c)
    if isinstance(c, ConstraintNegation):
        return text
    return f"({text})"


@dispatch((Equal, NotEqual, LessThan, LessThanOrEqual, GreaterThan, GreaterThanOrEqual))
def _constraint_str(c):
    op = COMPARISON_SYMBOLS[type(c)]
    return f"{real_expr_to_string(c.left)} {op} {real_expr_to_string(c.right)}"


@dispatch(ConstraintNegation)
def _constraint_str(c):  # noqa: F811
    return f"~{_wrap_constraint(c.constraint)}"


@dispatch((ConstraintConjunction, ConstraintDisjunction, ConstraintConditional, ConstraintBiconditional))
def _constraint_str(c):  # noqa: F811
    op = CONSTRAINT_CONNECTIVES[type(c)]
    return f"{_wrap_constraint(c.left)} {op} {_wrap_constraint(c.right)}"


def constraint_to_string(c: Constraint) -> str:
    return _constraint_str(c)
