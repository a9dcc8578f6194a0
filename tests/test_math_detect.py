import pytest

from math_detect import KEYWORD_THRESHOLD, STRONG_HIT_THRESHOLD, is_likely_math, keyword_hits


@pytest.mark.parametrize(
    "text",
    [
        "what is 2+2",
        "x^2 = 9",
        r"\frac{1}{2}",
        "solve for x",
        "find the area of the garden",
        "two plus three",
        "7 times 8",
        "quadratic",
        "derivitive",
        "calc: half of forty",
        "$x$",
    ],
)
def test_likely_math(text):
    assert is_likely_math(text) is True


@pytest.mark.parametrize("text", ["hello how are you", "", None, "good morning miss"])
def test_not_math(text):
    assert is_likely_math(text) is False


def test_keyword_hits_best_first():
    hits = keyword_hits("quadratc")
    assert hits, "expected a fuzzy hit"
    assert hits[0].keyword == "quadratic"
    assert hits[0].category == "algebra"
    assert hits[0].distance < STRONG_HIT_THRESHOLD
    assert [h.distance for h in hits] == sorted(h.distance for h in hits)


def test_keyword_hits_empty_for_chit_chat():
    assert keyword_hits("hello how are you") == []


def test_weak_keyword_hit_is_not_math():
    # "sad" is one edit from "add": a keyword hit, but not a strong one
    hits = keyword_hits("sad")
    assert hits
    best = hits[0]
    assert (best.keyword, best.category) == ("add", "arithmetic")
    assert STRONG_HIT_THRESHOLD <= best.distance <= KEYWORD_THRESHOLD
    assert is_likely_math("sad") is False


def test_threshold_bounds_keyword_hits():
    assert keyword_hits("sad", threshold=0.1) == []
