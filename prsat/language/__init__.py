"""Abstract syntax for probabilistic constraints.

Three immutable tree kinds are defined here:

- ``Sentence``: propositional formulas over indexed letters.
- ``RealExpr``: arithmetic expressions, possibly with probability operators.
- ``Constraint``: boolean combinations of ``RealExpr`` comparisons.
"""

from .sentence import (  # noqa: F401
    Sentence,
    Value,
    Letter,
    Negation,
    Conjunction,
    Disjunction,
    Conditional,
    Biconditional,
)
from .real_expr import (  # noqa: F401
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
from .constraint import (  # noqa: F401
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
    COMPARISONS,
)
