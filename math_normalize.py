# services/tutor/math_normalize.py
from __future__ import annotations

import re
from typing import List, NamedTuple, Optional

from rapidfuzz.distance import Levenshtein

from math_phrases import LATEX_REPLACERS, NOT_NUMBERS, SCALES, TENS, UNITS

_VOCAB = {**UNITS, **TENS, **SCALES}
_FUZZY_MIN_LEN = 5

_WORD_SPLIT_RE = re.compile(r"([A-Za-z]+)")
_JOINER_RE = re.compile(r"[\s-]+")
_OPERATOR_SPACE_RE = re.compile(r"\s*([+\-*/^=])\s*")
_BRACE_SPACE_RE = re.compile(r"\{\s+")
_FRACTION_RE = re.compile(r"(?<![A-Za-z0-9])([A-Za-z0-9.]+)\s*/\s*([A-Za-z0-9.]+)(?![A-Za-z0-9])")


class NormalizeResult(NamedTuple):
    latex: str
    notes: List[str]


# --- Number words -----------------------------------------------------------------


def _number_word(token: str) -> Optional[str]:
    """Canonical number word for `token`; longer words may carry one typo."""
    w = token.lower()
    if w in _VOCAB:
        return w
    if len(w) < _FUZZY_MIN_LEN or w in NOT_NUMBERS:
        return None
    for cand in _VOCAB:
        if cand[0] == w[0] and Levenshtein.distance(w, cand, score_cutoff=1) <= 1:
            return cand
    return None


def _continues(prev: str, cur: str) -> bool:
    """Whether `cur` extends the number ending in `prev` ("twenty" "one") or starts a new one."""
    if cur in SCALES or prev in SCALES:
        return True
    if prev in TENS:
        return cur in UNITS and 0 < UNITS[cur] < 10
    return False


def _compose(words: List[str], decimals: List[str]) -> str:
    total = 0
    current = 0
    for w in words:
        if w == "hundred":
            current = (current or 1) * 100
        elif w in SCALES:
            total += (current or 1) * SCALES[w]
            current = 0
        else:
            current += _VOCAB[w]
    out = str(total + current)
    if decimals:
        out += "." + "".join(str(UNITS[d]) for d in decimals)
    return out


def _consume(parts: List[str], i: int) -> tuple[int, str]:
    """
    Read a run of number words starting at word index `i` of `parts`.
    Returns (index after the run, digits).
    """
    words = [_number_word(parts[i])]
    decimals: List[str] = []
    last = i
    k = i + 2
    n = len(parts)
    while k < n and _JOINER_RE.fullmatch(parts[k - 1]):
        raw = parts[k].lower()
        canon = _number_word(parts[k])
        nxt = None
        if k + 2 < n and _JOINER_RE.fullmatch(parts[k + 1]):
            nxt = _number_word(parts[k + 2])

        if decimals:
            if canon in UNITS and UNITS[canon] < 10:
                decimals.append(canon)
                last = k
                k += 2
                continue
            break

        if canon and _continues(words[-1], canon):
            words.append(canon)
            last = k
            k += 2
            continue

        if raw == "and" and words[-1] in SCALES and nxt and nxt not in SCALES:
            k += 2
            continue

        if raw == "point" and nxt in UNITS and UNITS[nxt] < 10:
            decimals.append(nxt)
            last = k + 2
            k += 4
            continue

        break

    return last + 1, _compose(words, decimals)


def words_to_numbers(text: str) -> str:
    """Replace runs of English number words with digits; other text is untouched."""
    parts = _WORD_SPLIT_RE.split(text)
    out: List[str] = []
    i = 0
    while i < len(parts):
        # odd indices hold the words
        if i % 2 == 1 and _number_word(parts[i]):
            i, digits = _consume(parts, i)
            out.append(digits)
            continue
        out.append(parts[i])
        i += 1
    return "".join(out)


# --- LaTeX ------------------------------------------------------------------------


def _close_braces(s: str) -> str:
    missing = s.count("{") - s.count("}")
    return s + "}" * missing if missing > 0 else s


def normalize_to_latex(raw: str) -> NormalizeResult:
    s = (raw or "").strip()
    notes: List[str] = []

    s = words_to_numbers(s)

    for rx, rep in LATEX_REPLACERS:
        s = rx.sub(rep, s)

    s = _OPERATOR_SPACE_RE.sub(r"\1", s)
    s = _BRACE_SPACE_RE.sub("{", s)
    s = _FRACTION_RE.sub(r"\\frac{\1}{\2}", s)
    s = _close_braces(s)

    return NormalizeResult(latex=s, notes=notes)
