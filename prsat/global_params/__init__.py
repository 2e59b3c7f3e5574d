"""Global parameters and per-job solver options for PrSAT."""
from .config import (  # noqa: F401
    SolverOptions,
    GlobalConfig,
    global_config,
    DEFAULT_SOLVE_TIMEOUT_MS,
    CANCEL_OVERRIDE_TIMEOUT_MS,
)
