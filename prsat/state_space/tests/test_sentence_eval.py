import random

import pytest

from prsat.fuzz import SentenceFuzzer, random_letters_and_assignments
from prsat.language.builders import val, not_, and_, or_, imp, iff, letter
from prsat.state_space import (
    LetterSet,
    TruthTable,
    evaluate_sentence,
    evaluate_sentence_recursive,
    letters_in_sentence,
)

T, F = val(True), val(False)


def eval_id(_letter):
    raise AssertionError("no letters expected")


@pytest.mark.parametrize(
    "sentence, expected",
    [
        (T, True),
        (F, False),
        (not_(T), False),
        (not_(F), True),
        (and_(T, T), True),
        (and_(T, F), False),
        (and_(F, T), False),
        (and_(F, F), False),
        (or_(T, T), True),
        (or_(T, F), True),
        (or_(F, T), True),
        (or_(F, F), False),
        (imp(T, T), True),
        (imp(T, F), False),
        (imp(F, T), True),
        (imp(F, F), True),
        (iff(T, T), True),
        (iff(T, F), False),
        (iff(F, T), False),
        (iff(F, F), True),
        (not_(not_(F)), False),
    ],
)
def test_constant_sentences(sentence, expected):
    assert evaluate_sentence(eval_id, sentence) is expected
    assert evaluate_sentence_recursive(eval_id, sentence) is expected


def test_iterative_matches_recursive_on_fuzzed_sentences():
    rng = random.Random(7)
    fuzzer = SentenceFuzzer(rng, max_depth=8)
    for _ in range(200):
        letters, valuation = random_letters_and_assignments(rng, rng.randint(1, 5))
        sentence = fuzzer.generate(letters)
        assert evaluate_sentence(valuation, sentence) == evaluate_sentence_recursive(valuation, sentence)


def test_iterative_handles_deep_sentences():
    sentence = letter("A")
    for _ in range(20000):
        sentence = not_(sentence)
    assert evaluate_sentence(lambda l: True, sentence) is True


def test_dnf_membership_matches_evaluation():
    rng = random.Random(11)
    fuzzer = SentenceFuzzer(rng, max_depth=6)
    for _ in range(100):
        letters, _ = random_letters_and_assignments(rng, rng.randint(1, 4))
        tt = TruthTable(letters)
        sentence = fuzzer.generate(letters)
        dnf = set(tt.compute_dnf(sentence))
        for index in tt.state_indices():
            value = evaluate_sentence(lambda l, i=index: tt.letter_value_from_index(l, i), sentence)
            assert value == (index in dnf)


def test_dnf_dual_check_against_external_valuation():
    rng = random.Random(3)
    fuzzer = SentenceFuzzer(rng, max_depth=6)
    for _ in range(100):
        letters, valuation = random_letters_and_assignments(rng, rng.randint(1, 4))
        tt = TruthTable(letters)
        sentence = fuzzer.generate(letters)
        assert tt.evaluate_dnf(valuation, tt.compute_dnf(sentence)) == evaluate_sentence(valuation, sentence)


def test_letter_set_keeps_insertion_order():
    A, B = letter("A"), letter("B")
    letters = LetterSet([B, A, B, letter("A", 1)])
    assert list(letters) == [B, A, letter("A", 1)]
    assert A in letters and letter("A", 2) not in letters
    assert list(letters.difference(LetterSet([A]))) == [B, letter("A", 1)]
    assert letters_in_sentence(and_(A, or_(B, A))) == [A, B, A]
