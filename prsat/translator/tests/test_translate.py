"""Tests for probability translation"""

import random
import unittest

from prsat.fuzz import ConstraintFuzzer, RealExprFuzzer, random_letters_and_assignments
from prsat.language.builders import (
    letter, val, not_, and_, or_, iff,
    lit, vbl, svs, pr, cpr, neg, plus, minus, mul, div, power,
    eq, neq, lt, gte, cnot, cand, cor, cimp,
)
from prsat.state_space import TruthTable
from prsat.translator import translate, translate_constraint, translate_real_expr

A, B, C = letter("A"), letter("B"), letter("C")


class TestTranslateThreeLetters(unittest.TestCase):
    """Translation against the 8-state table over A, B, C"""

    def setUp(self):
        self.tt = TruthTable([A, B, C])

    def test_pr_a(self):
        self.assertEqual(translate_real_expr(self.tt, pr(A)), svs([0, 1, 2, 3]))

    def test_pr_b_and_not_c(self):
        self.assertEqual(translate_real_expr(self.tt, pr(and_(B, not_(C)))), svs([1, 5]))

    def test_pr_a_or_b_iff_c(self):
        self.assertEqual(translate_real_expr(self.tt, pr(or_(A, iff(B, C)))), svs([0, 1, 2, 3, 4, 7]))

    def test_independence_a_b(self):
        """Pr(A & B) = Pr(A) * Pr(B)"""
        actual = translate_constraint(self.tt, eq(pr(and_(A, B)), mul(pr(A), pr(B))))
        expected = eq(svs([0, 1]), mul(svs([0, 1, 2, 3]), svs([0, 1, 4, 5])))
        self.assertEqual(actual, expected)

    def test_independence_a_c(self):
        actual = translate_constraint(self.tt, eq(pr(and_(A, C)), mul(pr(A), pr(C))))
        expected = eq(svs([0, 2]), mul(svs([0, 1, 2, 3]), svs([0, 2, 4, 6])))
        self.assertEqual(actual, expected)

    def test_independence_b_c(self):
        actual = translate_constraint(self.tt, eq(pr(and_(B, C)), mul(pr(B), pr(C))))
        expected = eq(svs([0, 4]), mul(svs([0, 1, 4, 5]), svs([0, 2, 4, 6])))
        self.assertEqual(actual, expected)

    def test_independence_a_b_c(self):
        actual = translate_constraint(
            self.tt, eq(pr(and_(A, and_(B, C))), mul(mul(pr(A), pr(B)), pr(C)))
        )
        expected = eq(
            svs([0]),
            mul(mul(svs([0, 1, 2, 3]), svs([0, 1, 4, 5])), svs([0, 2, 4, 6])),
        )
        self.assertEqual(actual, expected)

    def test_conditional_probability(self):
        """Pr(A | C & B) = 1"""
        actual = translate_constraint(self.tt, eq(cpr(A, and_(C, B)), lit(1)))
        self.assertEqual(actual, eq(div(svs([0]), svs([0, 4])), lit(1)))

    def test_not_equal_is_kept(self):
        actual = translate_constraint(self.tt, neq(pr(A), lit(0.5)))
        self.assertEqual(actual, neq(svs([0, 1, 2, 3]), lit(0.5)))

    def test_tautology_and_contradiction(self):
        self.assertEqual(translate_real_expr(self.tt, pr(val(True))), lit(1))
        self.assertEqual(translate_real_expr(self.tt, pr(or_(A, not_(A)))), lit(1))
        self.assertEqual(translate_real_expr(self.tt, pr(val(False))), svs([]))

    def test_conditional_on_tautology(self):
        self.assertEqual(
            translate_real_expr(self.tt, cpr(val(True), val(True))),
            div(lit(1), lit(1)),
        )

    def test_homomorphic_nodes(self):
        expr = power(minus(neg(pr(A)), vbl("x")), plus(lit(2), pr(C)))
        expected = power(minus(neg(svs([0, 1, 2, 3])), vbl("x")), plus(lit(2), svs([0, 2, 4, 6])))
        self.assertEqual(translate_real_expr(self.tt, expr), expected)

    def test_connectives(self):
        c = cimp(cand(lt(pr(A), lit(1)), cnot(gte(pr(B), lit(0)))), cor(eq(vbl("x"), lit(1)), neq(lit(1), lit(2))))
        expected = cimp(
            cand(lt(svs([0, 1, 2, 3]), lit(1)), cnot(gte(svs([0, 1, 4, 5]), lit(0)))),
            cor(eq(vbl("x"), lit(1)), neq(lit(1), lit(2))),
        )
        self.assertEqual(translate_constraint(self.tt, c), expected)


class TestTranslateEmptyTable(unittest.TestCase):
    def test_zero_letters(self):
        tt = TruthTable([])
        self.assertEqual(translate_real_expr(tt, pr(val(True))), lit(1))
        self.assertEqual(translate_real_expr(tt, pr(val(False))), svs([]))


def _fuzz_setup(seed):
    rng = random.Random(seed)
    letters, _ = random_letters_and_assignments(rng, rng.randint(1, 4))
    return rng, letters, TruthTable(letters)


def test_sentence_free_trees_translate_to_themselves():
    rng, letters, tt = _fuzz_setup(1)
    exprs = RealExprFuzzer(rng, max_depth=5, exclude=["probability", "given_probability"])
    for _ in range(100):
        expr = exprs.generate(letters)
        assert translate_real_expr(tt, expr) == expr


def test_sentence_free_constraints_translate_to_themselves():
    for seed in range(10):
        rng, letters, tt = _fuzz_setup(seed)
        exprs = RealExprFuzzer(rng, max_depth=3, exclude=["probability", "given_probability"])
        constraints = ConstraintFuzzer(rng, real_expr=exprs, max_depth=3)
        for _ in range(20):
            c = constraints.generate(letters)
            assert translate_constraint(tt, c) == c


def test_not_equal_without_probabilities_is_unchanged():
    c = neq(vbl("x"), lit(1))
    assert translate_constraint(TruthTable([A]), c) == c


def test_translation_is_idempotent():
    for seed in range(20):
        rng, letters, tt = _fuzz_setup(seed)
        fuzzer = ConstraintFuzzer(rng, max_depth=3)
        once = translate(tt, [fuzzer.generate(letters) for _ in range(5)])
        assert translate(tt, once) == once
