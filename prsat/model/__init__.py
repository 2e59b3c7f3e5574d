"""Decoding of solver model values."""

from .assignment import (  # noqa: F401
    ModelAssignmentOutput,
    LiteralValue,
    NegativeValue,
    RationalValue,
    RootObjValue,
    UnknownValue,
    parse_to_assignment,
    parse_poly_term,
    poly_s,
    model_assignment_output_to_s,
    model_assignment_output_to_string,
)
from .numeric import assignment_to_sympy, assignment_to_float  # noqa: F401
