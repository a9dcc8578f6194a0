# services/tutor/schemas/mastery.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class MasteryUpdateRequest(BaseModel):
    student_id: str
    topic_id: str
    objective_id: str
    score_percent: float = Field(allow_inf_nan=False)
    country_code: Optional[str] = None
    level_code: Optional[str] = None


class MasteryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    student_id: str
    topic_id: str
    objective_id: str
    score_percent: float
    status: str
    attempts_count: int
    last_attempt_at: datetime | None = None
    country_code: str | None = None
    level_code: str | None = None
