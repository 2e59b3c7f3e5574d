"""Solver options and process-wide defaults.

``SolverOptions`` is passed per job. ``GlobalConfig`` is a singleton that
reads its defaults from the environment once:

- ``PRSAT_TIMEOUT_MS``: solve timeout used by the command line.
- ``PRSAT_CANCEL_GRACE_MS``: how long a cancelled solve may take to stop
  before it is abandoned.
- ``PRSAT_DEBUG``: force debug logging.
"""
import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_SOLVE_TIMEOUT_MS = 60 * 1000
CANCEL_OVERRIDE_TIMEOUT_MS = 5 * 1000


@dataclass(frozen=True)
class SolverOptions:
    """Options of one solve.

    Attributes:
        regular: require every state probability to be strictly positive.
        timeout_ms: backend timeout in milliseconds, 0 for none.
        exact_validation: re-check a model on its exact algebraic values.
        validation_tolerance: absolute tolerance of a float re-check, used
            when ``exact_validation`` is off.
    """
    regular: bool = False
    timeout_ms: int = 30000
    exact_validation: bool = True
    validation_tolerance: float = 1e-14

    def __post_init__(self):
        if self.timeout_ms < 0:
            raise ValueError(f"timeout_ms must be non-negative, got {self.timeout_ms}")
        if self.validation_tolerance < 0:
            raise ValueError(
                f"validation_tolerance must be non-negative, got {self.validation_tolerance}"
            )


def _env_flag(env: Mapping[str, str], name: str) -> bool:
    return env.get(name, "False").lower() in ("true", "1", "yes")


def _env_ms(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer number of milliseconds, got {raw!r}") from e
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
    return value


class ConfigRegistry(type):
    """Metaclass implementing the singleton pattern for GlobalConfig."""
    _instance = None

    def __call__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super().__call__(*args, **kwargs)
        return cls._instance


class GlobalConfig(metaclass=ConfigRegistry):
    """Process-wide defaults read from the environment.

    Attributes:
        timeout_ms: default solve timeout for command line runs.
        cancel_grace_ms: grace period between a cancel request and abandoning the solve.
        debug: whether debug logging is forced.
    """

    def __init__(self, env: Optional[Mapping[str, str]] = None):
        self.reload(os.environ if env is None else env)

    def reload(self, env: Mapping[str, str]) -> None:
        """Re-read every setting from ``env``."""
        self.timeout_ms = _env_ms(env, "PRSAT_TIMEOUT_MS", DEFAULT_SOLVE_TIMEOUT_MS)
        self.cancel_grace_ms = _env_ms(env, "PRSAT_CANCEL_GRACE_MS", CANCEL_OVERRIDE_TIMEOUT_MS)
        self.debug = _env_flag(env, "PRSAT_DEBUG")
        logger.debug(
            "config: timeout_ms=%d cancel_grace_ms=%d debug=%s",
            self.timeout_ms, self.cancel_grace_ms, self.debug,
        )

    @property
    def cancel_grace_seconds(self) -> float:
        return self.cancel_grace_ms / 1000.0

    def solver_options(self, regular: bool = False, timeout_ms: Optional[int] = None) -> SolverOptions:
        """Options for one solve, falling back to the configured timeout."""
        return SolverOptions(
            regular=regular, timeout_ms=self.timeout_ms if timeout_ms is None else timeout_ms
        )

    def __repr__(self) -> str:
        return (
            f"GlobalConfig(timeout_ms={self.timeout_ms}, "
            f"cancel_grace_ms={self.cancel_grace_ms}, debug={self.debug})"
        )


global_config = GlobalConfig()
