# coding: utf-8
"""
Public subclasses of different Exceptions
"""


class PrSatException(Exception):
    """Base class for PrSAT exceptions"""

    pass


class InvariantViolation(PrSatException):
    """An internal contract was broken (bad state index, arity, ...)."""

    pass


class TranslationError(InvariantViolation):
    """A probability operator reached a stage that requires translated input."""

    pass


class DecodeError(InvariantViolation):
    """A solver answer term does not follow the expected canonical form."""

    pass


class MalformedInputError(InvariantViolation):
    """Raised on unreadable s-expressions or serialized trees."""

    pass


class EvaluationError(PrSatException):
    """Base class for failures of the eager evaluator."""

    pass


class UndeclaredVariablesError(EvaluationError):
    """Raised when an expression mentions variables with no value.

    Attributes:
        real: names of unassigned real variables.
        sentence: letters missing from the truth table.
    """

    def __init__(self, real, sentence):
        self.real = list(real)
        self.sentence = list(sentence)
        names = self.real + [str(letter) for letter in self.sentence]
        super().__init__(f"undeclared variables: {', '.join(names)}")


class DivisionByZeroError(EvaluationError):
    """Raised when a denominator evaluates to zero."""

    pass


class ModelValidationError(PrSatException):
    """A solver model failed local re-validation of the original constraints.

    This means the translation or encoding is unsound; it is never
    downgraded to an "unknown" result.
    """

    def __init__(self, failed_indices):
        self.failed_indices = list(failed_indices)
        super().__init__(
            f"model does not satisfy constraint(s) at index {self.failed_indices}"
        )


class SolverError(PrSatException):
    """The backend solver reported an error."""

    pass
