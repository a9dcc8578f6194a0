from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict


class AttemptOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    created_at: datetime | None
    bank_id: str
    user_id: str | None = None
    score: float
    max_score: float
    took_seconds: int | None = None
    # keep items optional; usually excluded in list views
    items: list[Any] | dict | None = None
