# services/tutor/math_check.py
from __future__ import annotations

import math
import re
from typing import Any, Optional

from sympy import nan, oo, preorder_traversal, zoo
from sympy.core.power import Pow
from sympy.parsing.sympy_parser import (
    convert_xor,
    implicit_multiplication_application,
    parse_expr,
    standard_transformations,
)

# --- Parsing / validation helpers ------------------------------------------------
LEN_LIMIT = 100
DEFAULT_TOLERANCE = 0.01

INVALID_CHARS_MSG = (
    "Only numeric expressions using digits, spaces, + - * / ^ . and parentheses are allowed."
)
NON_FINITE_MSG = "Expression is not finite (e.g., division by zero)."
TOO_COMPLEX_MSG = "Expression is too complex."
_ALLOWED_RE = re.compile(r"^[0-9+\-*/^().\s]{1,100}$")

# Learners type these; the parser only knows the ASCII forms.
_ASCII_OPS = str.maketrans({"×": "*", "÷": "/", "−": "-"})

TRANSFORMS = standard_transformations + (
    convert_xor,
    implicit_multiplication_application,
)

# Hard-stops that won't affect normal use
_MAX_OPS = 200
_MAX_INT_DIGITS = 200
_MAX_EXPONENT_ABS = 2000


def validate_expression_text(s: Any) -> Optional[str]:
    """Feedback message when `s` can't be evaluated, else None."""
    if s is None or not isinstance(s, str) or not s.strip():
        return "Answer required."
    if len(s) > LEN_LIMIT:
        return f"Answer too long (> {LEN_LIMIT})."
    if _ALLOWED_RE.fullmatch(s) is None:
        return INVALID_CHARS_MSG
    return None


# --- Finite & complexity guards ---------------------------------------------------


def _assert_finite(val: Any) -> None:
    if getattr(val, "is_finite", None) is False or val in (oo, -oo, zoo, nan):
        raise ValueError(NON_FINITE_MSG)


def _assert_complexity(sym: Any) -> None:
    if getattr(sym, "is_Number", False):
        return
    if sym.count_ops() > _MAX_OPS:
        raise ValueError(TOO_COMPLEX_MSG)

    for node in preorder_traversal(sym):
        if getattr(node, "is_Integer", False) and len(str(abs(int(node)))) > _MAX_INT_DIGITS:
            raise ValueError(TOO_COMPLEX_MSG)
        if isinstance(node, Pow) and getattr(node.exp, "is_number", False):
            try:
                e = float(node.exp)
            except (TypeError, OverflowError):
                raise ValueError(TOO_COMPLEX_MSG)
            if not math.isfinite(e) or abs(e) > _MAX_EXPONENT_ABS:
                raise ValueError(TOO_COMPLEX_MSG)


# --- Public API -------------------------------------------------------------------


def evaluate_expression(expr: str) -> float:
    """
    Evaluate a plain numeric expression ("3^2 + 4^2", "(1/2)(4)").
    Raises ValueError carrying learner-facing feedback.
    """
    if isinstance(expr, str):
        expr = expr.translate(_ASCII_OPS)
    msg = validate_expression_text(expr)
    if msg:
        raise ValueError(msg)

    try:
        sym = parse_expr(expr, transformations=TRANSFORMS, evaluate=False)
    except Exception:
        # tokenizer and parser errors vary by sympy version
        raise ValueError(INVALID_CHARS_MSG)
    _assert_complexity(sym)

    try:
        sym = sym.doit()
        _assert_finite(sym)
        val = float(sym.evalf())
    except (TypeError, OverflowError, ZeroDivisionError):
        raise ValueError(NON_FINITE_MSG)
    if not math.isfinite(val):
        raise ValueError(NON_FINITE_MSG)
    return val


def are_equivalent(
    expected: str, answer: str, tolerance: float = DEFAULT_TOLERANCE
) -> Optional[bool]:
    """
    True when both sides evaluate to values within `tolerance` of each other
    (so "0.75", "3/4" and "6/8" agree). None when either side can't be evaluated.
    """
    try:
        want = evaluate_expression(expected)
        got = evaluate_expression(answer)
    except ValueError:
        return None
    return math.isclose(want, got, rel_tol=0, abs_tol=max(tolerance, 0.0))
