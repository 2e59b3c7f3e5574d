"""z3-backed solving of probabilistic constraints."""

from .result import SolverReturn, SolverStatus  # noqa: F401
from .z3_backend import PrSatSolver  # noqa: F401
from .model_eval import evaluate_against_model  # noqa: F401
