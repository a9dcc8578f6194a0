# tutor/routers/attempts.py

from fastapi import APIRouter, Depends, HTTPException, Query

from db import SessionLocal
from deps.auth import require_client
from models import QuizAttempt
from schemas.attempts import AttemptOut

router = APIRouter(prefix="/attempts", tags=["attempts"])


@router.get("/recent-list", dependencies=[Depends(require_client)])
def attempts_recent(
    limit: int = 20,
    bank_id: str | None = Query(default=None, alias="bankId"),
    user_id: str | None = Query(default=None, alias="userId"),
):
    limit = max(1, min(limit, 100))

    with SessionLocal() as db:
        q = db.query(QuizAttempt)
        if bank_id:
            q = q.filter(QuizAttempt.bank_id == bank_id)
        if user_id:
            q = q.filter(QuizAttempt.user_id == user_id)
        items = q.order_by(QuizAttempt.created_at.desc(), QuizAttempt.id.desc()).limit(limit).all()

    # Reuse schema; exclude potentially large JSON "items"
    rows = [AttemptOut.model_validate(a).model_dump(exclude={"items"}) for a in items]
    return {"ok": True, "items": rows, "count": len(rows)}


@router.get("/{attempt_id}", response_model=AttemptOut)
def get_attempt(attempt_id: int):
    # Public endpoint: attempt ids are handed back to the learner who took the quiz
    with SessionLocal() as db:
        a = db.get(QuizAttempt, attempt_id)
        if not a:
            raise HTTPException(status_code=404, detail="Attempt not found")
        return AttemptOut.model_validate(a)
