from __future__ import annotations

import random as _rnd

from fastapi import APIRouter, HTTPException, Query

from bank import bank_progress, get_bank, list_banks, visible_banks
from quiz_eval import shuffle as shuffle_items
from schemas.grading import BankProgressResponse, BankVisibilityRequest, VisibleBanksResponse
from schemas.quiz import QuizBank

router = APIRouter(prefix="/quiz-banks", tags=["quiz-banks"])


@router.get("")
def list_quiz_banks():
    # summaries only; questions are fetched per bank
    return [
        {"quizBankId": b.quiz_bank_id, "title": b.title, "questionCount": len(b.questions)}
        for b in list_banks()
    ]


@router.post("/visible", response_model=VisibleBanksResponse)
def quiz_banks_visible(req: BankVisibilityRequest):
    if not req.topic_id:
        raise HTTPException(status_code=400, detail="Topic ID required")
    return {"visible": visible_banks(req.topic_id, req.completed_video_ids)}


@router.post("/all", response_model=BankProgressResponse)
def quiz_banks_all(req: BankVisibilityRequest):
    if not req.topic_id:
        raise HTTPException(status_code=400, detail="Topic ID required")
    return {"banks": bank_progress(req.topic_id, req.completed_video_ids)}


@router.get("/{bank_id}", response_model=QuizBank)
def get_quiz_bank(
    bank_id: str,
    shuffle: bool | None = Query(
        default=None, description="Shuffle question order; defaults to the bank's own setting"
    ),
    seed: int | None = Query(default=None, description="Seed for a reproducible shuffle"),
):
    bank = get_bank(bank_id)
    if bank is None:
        raise HTTPException(status_code=404, detail="quiz bank not found")

    want_shuffle = bank.shuffle if shuffle is None else shuffle
    if want_shuffle:
        rng = _rnd.Random(seed) if seed is not None else None
        bank = bank.model_copy(update={"questions": shuffle_items(bank.questions, rng)})
    return bank
