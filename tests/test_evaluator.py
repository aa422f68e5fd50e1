from collections import Counter

import pytest

from wordrally.models.errors import InvalidGuessLength
from wordrally.models.game import LetterStatus
from wordrally.services.evaluator import evaluate, is_solved

C, M, W = LetterStatus.CORRECT, LetterStatus.MISPLACED, LetterStatus.WRONG


def statuses(attempt):
    return [result.status for result in attempt]


def test_repeated_target_letter_is_attributed_once():
    attempt = evaluate("peach", "apple", 5)
    assert [r.letter for r in attempt] == list("peach")
    assert statuses(attempt) == [M, M, M, W, W]


def test_exact_match_consumes_before_misplaced():
    assert statuses(evaluate("speed", "apple", 5)) == [W, C, M, W, W]
    # The exact 'b' at index 1 must win over the misplaced 'b' at index 0
    assert statuses(evaluate("bbxxx", "abcab", 5)) == [M, C, W, W, W]


def test_extra_guess_letters_are_wrong():
    assert statuses(evaluate("eeeee", "kerze", 5)) == [W, C, W, W, C]


def test_identical_guess_is_all_correct():
    for word in ("apfel", "banane", "fenster", "flugzeug"):
        attempt = evaluate(word, word, len(word))
        assert statuses(attempt) == [C] * len(word)
        assert is_solved(attempt)


def test_no_common_letters():
    attempt = evaluate("quick", "lampe", 5)
    assert statuses(attempt) == [W, W, W, W, W]
    assert not is_solved(attempt)


@pytest.mark.parametrize("guess,target", [
    ("peach", "apple"),
    ("eeeee", "kerze"),
    ("llama", "hello"),
    ("annnan", "banane"),
    ("ssssssss", "sunshine"),
    ("reeeeee", "weather"),
])
def test_letter_counts_never_exceed_target(guess, target):
    attempt = evaluate(guess, target, len(target))
    assert len(attempt) == len(target)

    hits = Counter(r.letter for r in attempt if r.status in (C, M))
    available = Counter(target)
    for letter, count in hits.items():
        assert count <= available[letter]


def test_evaluation_is_pure():
    first = evaluate("llama", "hello", 5)
    second = evaluate("llama", "hello", 5)
    assert first == second
    assert statuses(first) == [M, M, W, W, W]


def test_wrong_guess_length_is_rejected():
    with pytest.raises(InvalidGuessLength) as excinfo:
        evaluate("apfe", "apfel", 5)
    assert excinfo.value.expected == 5
    assert excinfo.value.actual == 4


def test_wrong_target_length_is_rejected():
    with pytest.raises(ValueError):
        evaluate("apfel", "apfe", 5)
