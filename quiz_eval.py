# services/tutor/quiz_eval.py
from __future__ import annotations

import math
import random
from typing import Any, Dict, List, Mapping, Optional, Sequence, TypeVar

from schemas.grading import GradeResult, QuestionResult
from schemas.quiz import (
    MultiQuestion,
    NumericQuestion,
    OrderingQuestion,
    SingleQuestion,
    VisualQuestion,
)
from visual_eval import evaluate_visual

T = TypeVar("T")

DEFAULT_POINTS = 1


def _as_number(answer: Any) -> Optional[float]:
    """
    Accept ints/floats and numeric strings ("12", " 3.5 "); anything else is None.
    Booleans are not numbers here.
    """
    if isinstance(answer, bool):
        return None
    if isinstance(answer, str):
        answer = answer.strip()
    if not isinstance(answer, (int, float, str)) or answer == "":
        return None
    try:
        val = float(answer)
    except (ValueError, OverflowError):
        return None
    if math.isnan(val):
        return None
    return val


def _as_str_list(answer: Any) -> Optional[List[str]]:
    if not isinstance(answer, (list, tuple)):
        return None
    if not all(isinstance(x, str) for x in answer):
        return None
    return list(answer)


def evaluate_question(q: Any, answer: Any) -> bool:
    """Return True when `answer` is the correct answer for question `q`; never raises."""
    if isinstance(q, SingleQuestion):
        correct_id = next((c.id for c in q.choices if c.correct), None)
        return correct_id is not None and isinstance(answer, str) and answer == correct_id

    if isinstance(q, MultiQuestion):
        yours = _as_str_list(answer)
        if yours is None:
            return False
        return sorted(yours) == sorted(c.id for c in q.choices if c.correct)

    if isinstance(q, NumericQuestion):
        val = _as_number(answer)
        return val is not None and val == q.answer

    if isinstance(q, OrderingQuestion):
        yours = _as_str_list(answer)
        return yours is not None and yours == list(q.correct_order)

    if isinstance(q, VisualQuestion):
        return evaluate_visual(q.visual, answer)

    return False


def grade_quiz(questions: Sequence[Any], answers: Mapping[str, Any]) -> GradeResult:
    score = 0.0
    max_score = 0.0
    details: List[QuestionResult] = []

    for q in questions:
        pts = q.points if q.points is not None else DEFAULT_POINTS
        max_score += pts
        user_answer = answers.get(q.id)
        correct = evaluate_question(q, user_answer)
        if correct:
            score += pts
        details.append(
            QuestionResult(
                question_id=q.id, correct=correct, points=pts, user_answer=user_answer
            )
        )

    return GradeResult(score=score, max_score=max_score, details=details)


def shuffle(items: Sequence[T], rng: Optional[random.Random] = None) -> List[T]:
    result = list(items)
    (rng or random).shuffle(result)
    return result


def details_as_items(result: GradeResult) -> List[Dict[str, Any]]:
    """Per-question results as plain JSON for the attempts table."""
    return [d.model_dump(by_alias=True) for d in result.details]
