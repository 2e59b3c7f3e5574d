"""Drop-dead timeout around a computation that cannot be preempted.

Three outcomes race:

- the computation finishes on its own (``COMPLETED``);
- the token is cancelled, ``stop()`` is asked to halt the computation and
  acknowledges in time (``CANCELLED``);
- the grace period after cancellation elapses first, ``abandon()`` fires
  and the worker is left behind (``ABANDONED``).

A computation that has finished when a race is decided always wins, even
if the token was cancelled and the acknowledgement is also done.

Example:
    token = CancelToken()
    result = run_with_drop_dead_timeout(
        solve, token, stop=solver.interrupt, abandon=solver.reset, grace_seconds=5
    )
"""
from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import FIRST_COMPLETED, Future, wait
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

R = TypeVar("R")


class CancelToken:
    """One-shot cancellation signal shared between a caller and a runner."""

    def __init__(self) -> None:
        self._future: Future = Future()
        self._lock = threading.Lock()

    def cancel(self) -> None:
        with self._lock:
            if not self._future.done():
                self._future.set_result(True)

    @property
    def cancelled(self) -> bool:
        return self._future.done()

    @property
    def future(self) -> Future:
        """Resolves to True when :meth:`cancel` is first called."""
        return self._future


class RaceOutcome(str, Enum):
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    ABANDONED = "abandoned"


@dataclass(frozen=True)
class RaceResult(Generic[R]):
    """Outcome of :func:`run_with_drop_dead_timeout`.

    ``value`` is only set for ``COMPLETED``. ``aborted`` tells whether the
    token was cancelled before the race was decided.
    """

    outcome: RaceOutcome
    value: Optional[R] = None
    aborted: bool = False


def _start_daemon(fn: Callable[[], R], name: str) -> Future:
    """Run ``fn`` on a daemon thread; an abandoned run cannot hold up exit."""
    work: Future = Future()

    def run() -> None:
        if not work.set_running_or_notify_cancel():
            return
        try:
            result = fn()
        except BaseException as e:
            work.set_exception(e)
        else:
            work.set_result(result)

    threading.Thread(target=run, name=f"prsat-drop-dead-{name}", daemon=True).start()
    return work


def run_with_drop_dead_timeout(
    fn: Callable[[], R],
    token: CancelToken,
    stop: Callable[[], Optional[Future]],
    abandon: Callable[[], None],
    grace_seconds: float,
) -> RaceResult[R]:
    """Run ``fn`` on a worker thread until it finishes or is given up on.

    ``stop`` is called once on cancellation and may return a future that
    resolves when the computation acknowledges the request. ``abandon`` is
    called only when neither ``fn`` nor that acknowledgement finishes within
    ``grace_seconds`` of the cancellation.

    Raises:
        Exception: whatever ``fn`` raised, when it finished by raising.
    """
    if grace_seconds < 0:
        raise ValueError(f"grace_seconds must be non-negative, got {grace_seconds}")

    name = getattr(fn, "__name__", repr(fn))
    start = time.time()
    work = _start_daemon(fn, name)
    wait([work, token.future], return_when=FIRST_COMPLETED)
    if work.done():
        logger.debug("race.completed name=%s elapsed=%.6fs", name, time.time() - start)
        return RaceResult(RaceOutcome.COMPLETED, work.result(), aborted=token.cancelled)

    logger.info("race.abort name=%s, asking it to stop", name)
    ack = stop()
    waiting = [work] if ack is None else [work, ack]
    wait(waiting, timeout=grace_seconds, return_when=FIRST_COMPLETED)
    if work.done():
        logger.info("race.completed after abort name=%s", name)
        return RaceResult(RaceOutcome.COMPLETED, work.result(), aborted=True)
    if ack is not None and ack.done():
        logger.info("race.acknowledged name=%s elapsed=%.6fs", name, time.time() - start)
        return RaceResult(RaceOutcome.CANCELLED, aborted=True)

    logger.warning("race.abandon name=%s, no answer within %.3fs", name, grace_seconds)
    abandon()
    return RaceResult(RaceOutcome.ABANDONED, aborted=True)
