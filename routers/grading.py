from __future__ import annotations

import logging
import math
import time
from typing import Optional

from fastapi import APIRouter, HTTPException

from bank import get_bank
from quiz_eval import details_as_items, evaluate_question, grade_quiz
from schemas.grading import (
    EvaluateQuestionRequest,
    EvaluateQuestionResponse,
    GradeRequest,
    GradeResponse,
)

logger = logging.getLogger("mathtutor.quiz")

router = APIRouter(tags=["grading"])


@router.post("/quiz/evaluate", response_model=EvaluateQuestionResponse)
def evaluate_one(req: EvaluateQuestionRequest):
    return {"ok": True, "correct": evaluate_question(req.question, req.answer)}


@router.post("/quiz-banks/{bank_id}/grade", response_model=GradeResponse)
def grade_bank(bank_id: str, req: GradeRequest):
    t0 = time.perf_counter()

    bank = get_bank(bank_id)
    if bank is None:
        raise HTTPException(status_code=404, detail="quiz bank not found")

    result = grade_quiz(bank.questions, req.answers)

    measured = int(math.ceil(time.perf_counter() - t0))
    took_seconds = req.took_seconds if req.took_seconds is not None else measured

    attempt_id: Optional[int] = None
    try:
        from db import SessionLocal
        from models import QuizAttempt

        with SessionLocal() as db:
            attempt = QuizAttempt(
                bank_id=bank_id,
                user_id=req.user_id,
                score=result.score,
                max_score=result.max_score,
                items=details_as_items(result),
                took_seconds=took_seconds,
            )
            db.add(attempt)
            db.commit()
            db.refresh(attempt)
            attempt_id = attempt.id
    except Exception:
        # grading result is still returned; the attempt just isn't stored
        logger.exception("Failed to record attempt for bank %s", bank_id)
        attempt_id = None

    logger.info(
        "Graded bank=%s user=%s score=%s/%s attempt=%s",
        bank_id,
        req.user_id,
        result.score,
        result.max_score,
        attempt_id,
    )
    return GradeResponse(
        bank_id=bank_id,
        score=result.score,
        max_score=result.max_score,
        details=result.details,
        attempt_id=attempt_id,
    )
