"""PrSAT: satisfiability of probabilistic constraints over propositional worlds."""
import os

__version__ = "0.1.0"

# Debug flag - can be set via environment variable PRSAT_DEBUG
PRSAT_DEBUG = os.environ.get("PRSAT_DEBUG", "False").lower() in ("true", "1", "yes")
