# services/tutor/math_detect.py
from __future__ import annotations

import re
from typing import List, NamedTuple

from rapidfuzz import fuzz
from rapidfuzz.utils import default_process

from math_phrases import (
    MATH_SYMBOLS,
    NUMBER_WORDS_RE,
    OPERATION_WORDS_RE,
    PHRASES,
    WORDY_MATH_PATTERNS,
)

# Normalized distances: 0.0 is an exact match, 1.0 nothing in common.
KEYWORD_THRESHOLD = 0.35  # typo tolerance
STRONG_HIT_THRESHOLD = 0.2

# Shorter inputs only match whole keywords ("a" would hit every phrase containing an "a").
_MIN_PARTIAL_LEN = 3

_CALC_PREFIX_RE = re.compile(r"^\s*(=|calc:)", re.IGNORECASE)
_DOLLAR_WRAPPED_RE = re.compile(r"^\s*\$.+\$\s*$")
_DIGIT_RE = re.compile(r"\d")


class KeywordHit(NamedTuple):
    keyword: str
    category: str
    distance: float


_KEYWORDS = [(kw, cat) for cat, words in PHRASES.items() for kw in words]


def _distance(query: str, keyword: str) -> float:
    if not query:
        return 1.0
    if _MIN_PARTIAL_LEN <= len(query) <= len(keyword):
        sim = fuzz.partial_ratio(query, keyword)
    else:
        sim = fuzz.ratio(query, keyword)
    return round(1.0 - sim / 100.0, 4)


def keyword_hits(text: str, threshold: float = KEYWORD_THRESHOLD) -> List[KeywordHit]:
    """Curated keywords within `threshold` of the text, best first."""
    query = default_process(text or "")
    hits = []
    for kw, cat in _KEYWORDS:
        d = _distance(query, kw)
        if d <= threshold:
            hits.append(KeywordHit(kw, cat, d))
    hits.sort(key=lambda h: h.distance)
    return hits


def is_likely_math(text: str) -> bool:
    if not text or not isinstance(text, str):
        return False
    if MATH_SYMBOLS.search(text):
        return True
    if any(rx.search(text) for rx in WORDY_MATH_PATTERNS):
        return True

    has_numbers = bool(_DIGIT_RE.search(text) or NUMBER_WORDS_RE.search(text))
    has_op_words = bool(OPERATION_WORDS_RE.search(text))
    if has_numbers and has_op_words:
        return True

    if any(h.distance < STRONG_HIT_THRESHOLD for h in keyword_hits(text)):
        return True

    if _CALC_PREFIX_RE.match(text):
        return True
    if _DOLLAR_WRAPPED_RE.match(text):
        return True

    return False
