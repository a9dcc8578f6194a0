from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from db import SessionLocal
from deps.auth import require_client
from mastery import list_mastery, update_mastery_from_task_result
from schemas.mastery import MasteryOut, MasteryUpdateRequest

router = APIRouter(prefix="/mastery", tags=["mastery"], dependencies=[Depends(require_client)])


@router.post("/update", response_model=MasteryOut)
def update_mastery(req: MasteryUpdateRequest):
    # store errors surface as 500s; the caller decides what the learner sees
    with SessionLocal() as db:
        record = update_mastery_from_task_result(
            db,
            student_id=req.student_id,
            topic_id=req.topic_id,
            objective_id=req.objective_id,
            score_percent=req.score_percent,
            country_code=req.country_code,
            level_code=req.level_code,
        )
        return MasteryOut.model_validate(record)


@router.get("/{student_id}", response_model=List[MasteryOut])
def get_student_mastery(student_id: str, topic_id: Optional[str] = Query(default=None)):
    with SessionLocal() as db:
        return [MasteryOut.model_validate(m) for m in list_mastery(db, student_id, topic_id)]
