"""
Result type for evaluation.

A ``Result`` is either ``Ok(value)`` or ``Err(failure)``. Failures are
structured so the caller can tell the user exactly what went wrong;
``unwrap`` converts a failure into the matching exception.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Tuple, TypeVar, Union

from ..language.sentence import Letter
from ..state_space.letters import LetterSet
from ..utils.exceptions import DivisionByZeroError, UndeclaredVariablesError

T = TypeVar("T")
U = TypeVar("U")
V = TypeVar("V")


@dataclass(frozen=True)
class UndeclaredVariables:
    """Real variables without a value and letters outside the truth table."""

    real: Tuple[str, ...] = ()
    sentence: Tuple[Letter, ...] = ()

    def merge(self, other: "UndeclaredVariables") -> "UndeclaredVariables":
        return UndeclaredVariables(
            real=tuple(dict.fromkeys(self.real + other.real)),
            sentence=tuple(LetterSet(self.sentence + other.sentence)),
        )

    def to_exception(self) -> Exception:
        return UndeclaredVariablesError(self.real, self.sentence)


@dataclass(frozen=True)
class DivisionByZero:
    def to_exception(self) -> Exception:
        return DivisionByZeroError("Division by zero!")


Failure = Union[UndeclaredVariables, DivisionByZero]


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    def is_ok(self) -> bool:
        return True

    def map(self, f: Callable[[T], U]) -> "Result[U]":
        return Ok(f(self.value))

    def and_then(self, f: Callable[[T], "Result[U]"]) -> "Result[U]":
        return f(self.value)

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    failure: Failure

    def is_ok(self) -> bool:
        return False

    def map(self, f) -> "Err":
        return self

    def and_then(self, f) -> "Err":
        return self

    def unwrap(self):
        raise self.failure.to_exception()


Result = Union[Ok[T], Err]


def combine(
    first: Result[T], second: Result[U], f: Callable[[T, U], Result[V]]
) -> Result[V]:
    """Apply ``f`` to two successes, otherwise merge the failures.

    Two undeclared-variable failures are merged; otherwise a division by
    zero takes precedence, then the first failure.
    """
    if isinstance(first, Ok) and isinstance(second, Ok):
        return f(first.value, second.value)
    if isinstance(first, Ok):
        return second
    if isinstance(second, Ok):
        return first
    if isinstance(first.failure, UndeclaredVariables) and isinstance(second.failure, UndeclaredVariables):
        return Err(first.failure.merge(second.failure))
    if isinstance(first.failure, DivisionByZero):
        return first
    return second
