"""Tests for evaluation results"""

import pytest

from prsat.evaluation.result import DivisionByZero, Err, Ok, UndeclaredVariables, combine
from prsat.language.builders import letter
from prsat.utils.exceptions import DivisionByZeroError, UndeclaredVariablesError

A, B = letter("A"), letter("B")


def add(l, r):
    return Ok(l + r)


def test_combine_ok():
    assert combine(Ok(1), Ok(2), add) == Ok(3)


def test_combine_one_failure():
    assert combine(Ok(1), Err(DivisionByZero()), add) == Err(DivisionByZero())
    assert combine(Err(DivisionByZero()), Ok(1), add) == Err(DivisionByZero())


def test_combine_merges_undeclared():
    first = Err(UndeclaredVariables(real=("x", "y"), sentence=(A,)))
    second = Err(UndeclaredVariables(real=("y", "z"), sentence=(B, A)))
    assert combine(first, second, add) == Err(
        UndeclaredVariables(real=("x", "y", "z"), sentence=(A, B))
    )


def test_division_by_zero_wins():
    undeclared = Err(UndeclaredVariables(real=("x",)))
    assert combine(undeclared, Err(DivisionByZero()), add) == Err(DivisionByZero())
    assert combine(Err(DivisionByZero()), undeclared, add) == Err(DivisionByZero())


def test_map_and_then():
    assert Ok(2).map(lambda v: v * 3) == Ok(6)
    assert Ok(2).and_then(lambda v: Err(DivisionByZero())) == Err(DivisionByZero())
    assert Err(DivisionByZero()).map(lambda v: v * 3) == Err(DivisionByZero())


def test_unwrap():
    assert Ok("v").unwrap() == "v"
    with pytest.raises(DivisionByZeroError):
        Err(DivisionByZero()).unwrap()
    with pytest.raises(UndeclaredVariablesError) as info:
        Err(UndeclaredVariables(real=("x",), sentence=(A,))).unwrap()
    assert info.value.real == ["x"]
    assert info.value.sentence == [A]
