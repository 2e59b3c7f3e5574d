"""Helpers for running foreign computations that cannot be preempted."""

from .drop_dead import CancelToken, RaceOutcome, RaceResult, run_with_drop_dead_timeout  # noqa: F401
