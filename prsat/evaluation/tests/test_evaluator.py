"""Tests for the numeric evaluator"""

import math
import random
import unittest

import pytest
from sympy import CRootOf, Rational, Symbol, sqrt

from prsat.evaluation import (
    DivisionByZero,
    Err,
    Ok,
    UndeclaredVariables,
    evaluate_constraint,
    evaluate_constraint_result,
    evaluate_real_expr,
    evaluate_real_expr_result,
    validate_model,
)
from prsat.fuzz import ConstraintFuzzer, random_letters_and_assignments
from prsat.language.builders import (
    letter, val, not_, and_,
    lit, vbl, svs, pr, cpr, neg, plus, minus, mul, div, power,
    eq, neq, lt, lte, gt, gte, cnot, cand, cor, cimp, ciff,
)
from prsat.state_space import TruthTable
from prsat.translator import translate_constraint, variables_in_constraints
from prsat.utils.exceptions import (
    DivisionByZeroError,
    EvaluationError,
    InvariantViolation,
    UndeclaredVariablesError,
)

A, B, C = letter("A"), letter("B"), letter("C")


class TestEvaluateRealExpr(unittest.TestCase):
    """Evaluation over the four states of A, B"""

    def setUp(self):
        self.tt = TruthTable([A, B])
        self.values = {0: 0.1, 1: 0.2, 2: 0.3, 3: 0.4}

    def test_probability(self):
        self.assertAlmostEqual(evaluate_real_expr(self.tt, self.values, pr(A)), 0.3)
        self.assertAlmostEqual(evaluate_real_expr(self.tt, self.values, pr(B)), 0.4)

    def test_conditional_probability(self):
        self.assertAlmostEqual(evaluate_real_expr(self.tt, self.values, cpr(A, B)), 0.25)

    def test_tautology_is_one(self):
        self.assertEqual(evaluate_real_expr(self.tt, self.values, pr(val(True))), 1.0)

    def test_arithmetic(self):
        expr = minus(mul(lit(3), svs([3])), div(plus(lit(1), neg(svs([0]))), lit(2)))
        self.assertAlmostEqual(evaluate_real_expr(self.tt, self.values, expr), 1.2 - 0.45)

    def test_empty_state_sum(self):
        self.assertEqual(evaluate_real_expr(self.tt, self.values, svs([])), 0.0)

    def test_variable_values(self):
        expr = mul(vbl("x"), pr(A))
        value = evaluate_real_expr(self.tt, self.values, expr, variable_values={"x": 2})
        self.assertAlmostEqual(value, 0.6)

    def test_missing_state_value(self):
        with self.assertRaises(InvariantViolation):
            evaluate_real_expr(self.tt, {0: 1.0}, svs([0, 3]))

    def test_conditional_on_impossible_event(self):
        """Pr(A | B) with Pr(B) = 0 divides by zero"""
        values = {0: 0.0, 1: 0.5, 2: 0.0, 3: 0.5}
        self.assertEqual(
            evaluate_real_expr_result(self.tt, values, cpr(A, B)), Err(DivisionByZero())
        )
        with self.assertRaises(DivisionByZeroError):
            evaluate_real_expr(self.tt, values, cpr(A, B))


class TestUndeclared(unittest.TestCase):

    def setUp(self):
        self.tt = TruthTable([A, B])
        self.values = {0: 0.25, 1: 0.25, 2: 0.25, 3: 0.25}

    def test_reports_every_missing_name(self):
        expr = plus(vbl("x"), mul(pr(and_(A, C)), vbl("y")))
        result = evaluate_real_expr_result(self.tt, self.values, expr)
        self.assertEqual(result, Err(UndeclaredVariables(real=("x", "y"), sentence=(C,))))

    def test_eager_raises_with_names(self):
        with self.assertRaises(UndeclaredVariablesError) as ctx:
            evaluate_real_expr(self.tt, self.values, plus(vbl("x"), pr(C)))
        self.assertEqual(ctx.exception.real, ["x"])
        self.assertEqual(ctx.exception.sentence, [C])
        self.assertIsInstance(ctx.exception, EvaluationError)

    def test_undeclared_before_division(self):
        """Missing variables are reported even when a division by zero is also present"""
        expr = div(vbl("x"), lit(0))
        result = evaluate_real_expr_result(self.tt, self.values, expr)
        self.assertEqual(result, Err(UndeclaredVariables(real=("x",))))

    def test_constraint(self):
        result = evaluate_constraint_result(self.tt, self.values, lt(pr(C), vbl("z")))
        self.assertEqual(result, Err(UndeclaredVariables(real=("z",), sentence=(C,))))


class TestComparisons(unittest.TestCase):
    """Tolerance-aware comparisons"""

    def setUp(self):
        self.tt = TruthTable([])
        self.values = {0: 1.0}

    def holds(self, c, tol=1e-14):
        return evaluate_constraint(self.tt, self.values, c, tol=tol)

    def test_equal_within_tolerance(self):
        self.assertTrue(self.holds(eq(plus(lit(0.1), lit(0.2)), lit(0.3))))
        self.assertFalse(self.holds(neq(plus(lit(0.1), lit(0.2)), lit(0.3))))

    def test_equal_outside_tolerance(self):
        self.assertFalse(self.holds(eq(lit(1), lit(1.001))))
        self.assertTrue(self.holds(eq(lit(1), lit(1.001)), tol=0.01))

    def test_relaxed_non_strict(self):
        self.assertTrue(self.holds(lte(lit(1 + 1e-15), lit(1))))
        self.assertTrue(self.holds(gte(lit(1), lit(1 + 1e-15))))
        self.assertFalse(self.holds(lte(lit(1.1), lit(1))))

    def test_strict(self):
        self.assertFalse(self.holds(lt(lit(1), lit(1))))
        self.assertFalse(self.holds(gt(lit(1), lit(1))))
        self.assertTrue(self.holds(gt(lit(2), lit(1))))

    def test_connectives(self):
        t, f = eq(lit(1), lit(1)), eq(lit(1), lit(2))
        self.assertFalse(self.holds(cnot(t)))
        self.assertFalse(self.holds(cand(t, f)))
        self.assertTrue(self.holds(cor(f, t)))
        self.assertTrue(self.holds(cimp(f, f)))
        self.assertFalse(self.holds(cimp(t, f)))
        self.assertTrue(self.holds(ciff(f, f)))
        self.assertFalse(self.holds(ciff(t, f)))


@pytest.mark.parametrize(
    "expr, expected",
    [
        (power(lit(2), lit(10)), 1024.0),
        (power(lit(0), neg(lit(1))), math.inf),
        (power(lit(10), lit(400)), math.inf),
        (power(neg(lit(10)), lit(401)), -math.inf),
        (power(neg(lit(10)), lit(400)), math.inf),
    ],
)
def test_power(expr, expected):
    assert evaluate_real_expr(TruthTable([]), {0: 1.0}, expr) == expected


def test_power_domain_error_is_nan():
    value = evaluate_real_expr(TruthTable([]), {0: 1.0}, power(neg(lit(8)), lit(0.5)))
    assert math.isnan(value)


def test_validate_model():
    tt = TruthTable([A])
    values = {0: 0.75, 1: 0.25}
    constraints = [
        eq(pr(A), lit(0.75)),
        gt(pr(A), lit(0.9)),
        eq(cpr(A, val(False)), lit(1)),
        lt(vbl("x"), lit(1)),
    ]
    assert validate_model(constraints, values, tt) == [True, False, False, False]
    assert validate_model(constraints, values, tt, {"x": 0}) == [True, False, False, True]


def test_division_by_zero_propagates_through_connectives():
    tt = TruthTable([A])
    c = cor(eq(lit(1), lit(1)), eq(div(lit(1), lit(0)), lit(1)))
    assert evaluate_constraint_result(tt, {0: 0.5, 1: 0.5}, c) == Err(DivisionByZero())


def test_ok_value():
    tt = TruthTable([A])
    assert evaluate_constraint_result(tt, {0: 0.5, 1: 0.5}, eq(pr(A), lit(0.5))) == Ok(True)


def _random_state_values(rng, tt):
    weights = [rng.random() for _ in tt.state_indices()]
    total = sum(weights)
    return {i: w / total for i, w in zip(tt.state_indices(), weights)}


def test_fuzz_eager_matches_diagnostic():
    """Eager evaluation raises exactly when the diagnostic evaluator fails"""
    rng = random.Random(5)
    for _ in range(200):
        letters, _valuation = random_letters_and_assignments(rng, rng.randint(1, 4))
        tt = TruthTable(letters)
        c = ConstraintFuzzer(rng, max_depth=3).generate(letters)
        variables = {v: rng.uniform(0, 10) for v in variables_in_constraints([c]).real}
        values = _random_state_values(rng, tt)
        result = evaluate_constraint_result(tt, values, c, variables)
        if result.is_ok():
            assert evaluate_constraint(tt, values, c, variables) == result.value
        else:
            with pytest.raises(EvaluationError):
                evaluate_constraint(tt, values, c, variables)
            assert result == Err(DivisionByZero())


def test_fuzz_translation_preserves_value():
    rng = random.Random(8)
    for _ in range(200):
        letters, _valuation = random_letters_and_assignments(rng, rng.randint(1, 4))
        tt = TruthTable(letters)
        c = ConstraintFuzzer(rng, max_depth=3).generate(letters)
        variables = {v: rng.uniform(0, 10) for v in variables_in_constraints([c]).real}
        values = _random_state_values(rng, tt)
        assert evaluate_constraint_result(tt, values, c, variables) == evaluate_constraint_result(
            tt, values, translate_constraint(tt, c), variables
        )


class TestExactEvaluation(unittest.TestCase):
    """Exact mode decides comparisons on sympy numbers"""

    def setUp(self):
        self.tt = TruthTable([A])
        eps = Rational(1, 10**20)
        self.values = {0: Rational(1, 2) + eps, 1: Rational(1, 2) - eps}

    def test_not_equal_beyond_float_precision(self):
        c = neq(pr(A), lit(0.5))
        self.assertTrue(evaluate_constraint(self.tt, self.values, c, exact=True))
        floats = {i: float(v) for i, v in self.values.items()}
        self.assertFalse(evaluate_constraint(self.tt, floats, c))

    def test_exact_value(self):
        value = evaluate_real_expr(self.tt, self.values, pr(A), exact=True)
        self.assertEqual(value, Rational(1, 2) + Rational(1, 10**20))
        self.assertEqual(evaluate_real_expr(self.tt, self.values, lit(0.1), exact=True), Rational(1, 10))

    def test_radicals(self):
        x = {"x": sqrt(2)}
        self.assertTrue(evaluate_constraint(self.tt, self.values, eq(power(vbl("x"), lit(2)), lit(2)), x, exact=True))
        self.assertTrue(evaluate_constraint(self.tt, self.values, gt(vbl("x"), lit(1.4142135623)), x, exact=True))
        self.assertFalse(evaluate_constraint(self.tt, self.values, lte(vbl("x"), lit(1.4142135623)), x, exact=True))

    def test_root_object(self):
        """r is the real root of r^5 - r - 1, which has no radical form"""
        r = {"r": CRootOf(Symbol("y") ** 5 - Symbol("y") - 1, 0)}
        c = eq(power(vbl("r"), lit(5)), plus(vbl("r"), lit(1)))
        self.assertTrue(evaluate_constraint(self.tt, self.values, c, r, exact=True))
        self.assertFalse(evaluate_constraint(self.tt, self.values, neq(c.left, c.right), r, exact=True))

    def test_exact_zero_denominator(self):
        expr = div(lit(1), minus(power(vbl("x"), lit(2)), lit(2)))
        x = {"x": sqrt(2)}
        result = evaluate_real_expr_result(self.tt, self.values, expr, x, exact=True)
        self.assertEqual(result, Err(DivisionByZero()))

    def test_nan_only_satisfies_not_equal(self):
        nan = power(neg(lit(8)), lit(0.5))
        self.assertTrue(evaluate_constraint(self.tt, self.values, neq(nan, lit(1)), exact=True))
        self.assertFalse(evaluate_constraint(self.tt, self.values, eq(nan, nan), exact=True))
        self.assertFalse(evaluate_constraint(self.tt, self.values, lt(nan, lit(1)), exact=True))


def test_validate_model_exact():
    tt = TruthTable([A])
    values = {0: Rational(3, 4), 1: Rational(1, 4)}
    constraints = [
        eq(pr(A), lit(0.75)),
        neq(pr(A), lit(0.75)),
        gte(pr(A), mul(lit(3), pr(not_(A)))),
    ]
    assert validate_model(constraints, values, tt, exact=True) == [True, False, True]
