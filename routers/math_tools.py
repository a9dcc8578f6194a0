from __future__ import annotations

from fastapi import APIRouter

from math_check import INVALID_CHARS_MSG, are_equivalent, evaluate_expression
from math_detect import is_likely_math, keyword_hits
from math_normalize import normalize_to_latex
from schemas.math_tools import (
    DetectRequest,
    DetectResponse,
    EquivalentRequest,
    EquivalentResponse,
    EvaluateRequest,
    EvaluateResponse,
    NormalizeRequest,
    NormalizeResponse,
)

router = APIRouter(prefix="/math", tags=["math"])


@router.post("/detect", response_model=DetectResponse)
def detect(req: DetectRequest):
    hits = [h._asdict() for h in keyword_hits(req.text)]
    return {"likely_math": is_likely_math(req.text), "keyword_hits": hits}


@router.post("/normalize", response_model=NormalizeResponse)
def normalize(req: NormalizeRequest):
    result = normalize_to_latex(req.text)
    return {"latex": result.latex, "notes": result.notes}


@router.post("/evaluate", response_model=EvaluateResponse)
def evaluate(req: EvaluateRequest):
    try:
        return {"ok": True, "value": evaluate_expression(req.expr)}
    except ValueError as e:
        return {"ok": False, "value": None, "feedback": str(e) or INVALID_CHARS_MSG}


@router.post("/equivalent", response_model=EquivalentResponse)
def equivalent(req: EquivalentRequest):
    eq = are_equivalent(req.expected, req.answer, req.tolerance)
    return {"ok": eq is not None, "equivalent": eq}
