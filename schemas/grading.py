# services/tutor/schemas/grading.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from schemas.quiz import CamelModel, Question

# ---------- Evaluate one question ----------


class EvaluateQuestionRequest(BaseModel):
    question: Question
    answer: Any = None


class EvaluateQuestionResponse(BaseModel):
    ok: bool
    correct: bool


# ---------- Grade a bank ----------


class GradeRequest(CamelModel):
    user_id: Optional[str] = None
    # question id -> submitted answer (shape depends on the question kind)
    answers: Dict[str, Any] = Field(default_factory=dict)
    # Client may send it; otherwise the server measures grading time.
    took_seconds: Optional[int] = None


class QuestionResult(CamelModel):
    question_id: str
    correct: bool
    points: float
    user_answer: Any = None


class GradeResult(CamelModel):
    score: float
    max_score: float
    details: List[QuestionResult]


class GradeResponse(GradeResult):
    ok: bool = True
    bank_id: str
    attempt_id: Optional[int] = None


# ---------- Bank visibility ----------


class BankVisibilityRequest(CamelModel):
    topic_id: Optional[str] = None
    video_id: Optional[str] = None
    completed_video_ids: List[str] = Field(default_factory=list)
    user_id: Optional[str] = None


class VisibleBank(CamelModel):
    id: str
    bank_id: str


class VisibleBanksResponse(CamelModel):
    visible: List[VisibleBank]


class BankProgress(CamelModel):
    id: str
    bank_id: str
    is_unlocked: bool
    progress_message: str
    completed_count: int
    required_count: int
    video_ids: List[str] = Field(default_factory=list)
    topic_id: Optional[str] = None


class BankProgressResponse(CamelModel):
    banks: List[BankProgress]
