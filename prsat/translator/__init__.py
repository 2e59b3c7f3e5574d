"""Compile probabilistic constraints into real arithmetic over state variables."""

from .translate import translate, translate_constraint, translate_real_expr  # noqa: F401
from .variables import VariableLists, variables_in_constraints, free_variables  # noqa: F401
from .axioms import probability_axioms, division_guards, enrich_constraints  # noqa: F401
from .smtlib import (  # noqa: F401
    state_index_id,
    real_expr_to_smtlib,
    constraint_to_smtlib,
    constraints_to_smtlib_lines,
    constraints_to_smtlib_string,
)
