# services/tutor/visual_eval.py
"""
Grading of interactive visual questions.

Answer shape per subtype:
  pie            list of selected segment ids
  grid           list of selected cell ids like "r1c2"
  shape_select   list of selected shape ids
  line_relation  list of selected pair ids
  angle          number of degrees, or list of ids when the question is multi
"""

from __future__ import annotations

import math
from typing import Any, FrozenSet, Optional

from schemas.quiz import (
    LinePair,
    Segment,
    VisualAngle,
    VisualGrid,
    VisualLineRelation,
    VisualPie,
    VisualShapeSelect,
)

# Angle tolerance used to classify a pair that carries no explicit relation.
RELATION_TOLERANCE_DEG = 2.0

BASE_ID = "base"


# --- Geometry helpers -------------------------------------------------------------


def normalize_angle(angle: float) -> float:
    return angle % 360.0


def angle_difference_deg(a: float, b: float) -> float:
    diff = normalize_angle(a) - normalize_angle(b)
    wrapped = ((diff + 180.0) % 360.0) - 180.0
    return abs(wrapped)


def segment_angle_deg(seg: Segment) -> float:
    # y axis upward for math
    dx = seg.x2 - seg.x1
    dy = -(seg.y2 - seg.y1)
    return normalize_angle(math.degrees(math.atan2(dy, dx)))


def classify_relation(pair: LinePair, tolerance: float = RELATION_TOLERANCE_DEG) -> Optional[str]:
    diff = angle_difference_deg(segment_angle_deg(pair.a), segment_angle_deg(pair.b))
    if min(diff, abs(diff - 180.0)) <= tolerance:
        return "parallel"
    if abs(diff - 90.0) <= tolerance:
        return "perpendicular"
    return None


# --- Answer coercion --------------------------------------------------------------


def _id_set(answer: Any) -> Optional[FrozenSet[str]]:
    """Selected ids as a set, or None when the answer is not a list of strings."""
    if not isinstance(answer, (list, tuple)):
        return None
    if not all(isinstance(x, str) for x in answer):
        return None
    return frozenset(answer)


def _degrees(answer: Any) -> Optional[float]:
    if isinstance(answer, bool) or not isinstance(answer, (int, float)):
        return None
    try:
        val = float(answer)
    except OverflowError:
        return None
    if math.isnan(val):
        return None
    return val


# --- Per-subtype rules ------------------------------------------------------------


def _eval_pie(v: VisualPie, answer: Any) -> bool:
    selected = _id_set(answer)
    if selected is None:
        return False
    return selected == {s.id for s in v.segments if s.correct}


def _eval_grid(v: VisualGrid, answer: Any) -> bool:
    selected = _id_set(answer)
    if selected is None:
        return False
    if v.correct_cells:
        return selected == set(v.correct_cells)
    if v.required_count is not None:
        # count mode: any N cells
        return len(selected) == v.required_count
    return False


def _eval_shape_select(v: VisualShapeSelect, answer: Any) -> bool:
    selected = _id_set(answer)
    if selected is None:
        return False
    return selected == {s.id for s in v.shapes if s.correct}


def _eval_line_relation(v: VisualLineRelation, answer: Any) -> bool:
    selected = _id_set(answer)
    if selected is None:
        return False
    correct_ids = {p.id for p in v.pairs if (p.relation or classify_relation(p)) == v.target}
    return selected == correct_ids


def _eval_angle(v: VisualAngle, answer: Any) -> bool:
    variants = v.variants or []
    if v.multi:
        selected = _id_set(answer)
        if selected is None:
            return False
        correct_ids = {var.id for var in variants if var.correct}
        if v.base_correct:
            correct_ids.add(BASE_ID)
        return selected == correct_ids

    deg = _degrees(answer)
    if deg is None:
        return False
    targets = [(v.target_deg, v.tolerance_deg)]
    targets += [(var.target_deg, var.tolerance_deg) for var in variants]
    return any(abs(deg - target) <= tol for target, tol in targets)


_EVALUATORS = {
    "pie": _eval_pie,
    "grid": _eval_grid,
    "shape_select": _eval_shape_select,
    "line_relation": _eval_line_relation,
    "angle": _eval_angle,
}


def evaluate_visual(visual: Any, answer: Any) -> bool:
    fn = _EVALUATORS.get(getattr(visual, "subtype", None))
    if fn is None:
        return False
    return fn(visual, answer)
