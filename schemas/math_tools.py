# services/tutor/schemas/math.py
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel

# ---------- Detect ----------


class DetectRequest(BaseModel):
    text: str


class KeywordHit(BaseModel):
    keyword: str
    category: str
    distance: float


class DetectResponse(BaseModel):
    likely_math: bool
    keyword_hits: List[KeywordHit] = []


# ---------- Normalize ----------


class NormalizeRequest(BaseModel):
    text: str


class NormalizeResponse(BaseModel):
    latex: str
    notes: List[str] = []


# ---------- Evaluate / equivalence ----------


class EvaluateRequest(BaseModel):
    expr: str


class EvaluateResponse(BaseModel):
    ok: bool
    value: Optional[float] = None
    feedback: Optional[str] = None


class EquivalentRequest(BaseModel):
    expected: str
    answer: str
    tolerance: float = 0.01


class EquivalentResponse(BaseModel):
    ok: bool
    # None when either side could not be evaluated
    equivalent: Optional[bool] = None
