# services/tutor/schemas/quiz.py
from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Bank documents are camelCase JSON; attributes stay snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


# ---------- Visual subtypes ----------


class PieSegment(CamelModel):
    id: str
    value: float
    label: Optional[str] = None
    colored: Optional[bool] = None
    correct: bool = False


class PieVariant(CamelModel):
    id: str
    segments: List[PieSegment] = []
    correct: bool = False


class VisualPie(CamelModel):
    subtype: Literal["pie"]
    multi: bool = False
    base_correct: bool = False
    show_fraction_label: bool = False
    segments: List[PieSegment]
    variants: Optional[List[PieVariant]] = None


class VisualGrid(CamelModel):
    subtype: Literal["grid"]
    rows: int
    cols: int
    correct_cells: Optional[List[str]] = None  # pattern mode
    required_count: Optional[int] = None  # count mode
    multi: bool = True


class Rect(CamelModel):
    x: float
    y: float
    w: float
    h: float
    rx: Optional[float] = None


class Circle(CamelModel):
    cx: float
    cy: float
    r: float


class Triangle(CamelModel):
    points: Tuple[float, float, float, float, float, float]


class Polygon(CamelModel):
    points: List[Tuple[float, float]]


class Shape(CamelModel):
    id: str
    type: Literal["rect", "circle", "triangle", "polygon"]
    rect: Optional[Rect] = None
    circle: Optional[Circle] = None
    triangle: Optional[Triangle] = None
    polygon: Optional[Polygon] = None
    label: Optional[str] = None
    correct: bool = False


class VisualShapeSelect(CamelModel):
    subtype: Literal["shape_select"]
    multi: bool = False
    shapes: List[Shape]


class Segment(CamelModel):
    x1: float
    y1: float
    x2: float
    y2: float


Relation = Literal["parallel", "perpendicular"]


class LinePair(CamelModel):
    id: str
    a: Segment
    b: Segment
    relation: Optional[Relation] = None


class VisualLineRelation(CamelModel):
    subtype: Literal["line_relation"]
    target: Relation
    multi: bool = True
    pairs: List[LinePair]


class AngleVariant(CamelModel):
    id: str
    a_deg: float
    b_deg: float
    target_deg: float
    tolerance_deg: float
    correct: bool = False


class VisualAngle(CamelModel):
    subtype: Literal["angle"]
    multi: bool = False
    base_correct: bool = False
    a_deg: float  # authoring preview only
    b_deg: float  # authoring preview only
    target_deg: float
    tolerance_deg: float
    variants: Optional[List[AngleVariant]] = None


VisualUnion = Annotated[
    Union[VisualPie, VisualGrid, VisualShapeSelect, VisualLineRelation, VisualAngle],
    Field(discriminator="subtype"),
]


# ---------- Questions ----------


class Choice(CamelModel):
    id: str
    label: str
    correct: bool = False


class NumericRange(CamelModel):
    min: float
    max: float


class BaseQuestion(CamelModel):
    id: str
    prompt: str
    hint: Optional[str] = None
    points: Optional[float] = None
    tags: Optional[List[str]] = None


class SingleQuestion(BaseQuestion):
    kind: Literal["single"]
    choices: List[Choice]


class MultiQuestion(BaseQuestion):
    kind: Literal["multi"]
    choices: List[Choice]


class NumericQuestion(BaseQuestion):
    kind: Literal["numeric"]
    answer: float
    range: Optional[NumericRange] = None


class OrderingQuestion(BaseQuestion):
    kind: Literal["ordering"]
    items: List[str]
    correct_order: List[str]


class VisualQuestion(BaseQuestion):
    kind: Literal["visual"]
    visual: VisualUnion


Question = Annotated[
    Union[SingleQuestion, MultiQuestion, NumericQuestion, OrderingQuestion, VisualQuestion],
    Field(discriminator="kind"),
]


# ---------- Banks ----------


class QuizBank(CamelModel):
    quiz_bank_id: str
    title: str
    description: Optional[str] = ""
    time_limit_sec: Optional[int] = 0
    shuffle: Optional[bool] = False
    questions: List[Question] = []


class BankAssignment(CamelModel):
    id: str
    bank_id: str
    topic_id: Optional[str] = None
    trigger_after_n_videos: Optional[int] = None
    video_ids: Optional[List[str]] = None
    min_completed_in_set: Optional[int] = None
    is_active: bool = True


DEFAULT_BANK = QuizBank(
    quiz_bank_id="__empty__",
    title="Quiz unavailable",
    description="",
    time_limit_sec=0,
    shuffle=False,
    questions=[],
)


def ensure_quiz_bank(raw: Optional[Dict[str, Any]]) -> QuizBank:
    """
    Fill bank defaults; a missing bank becomes DEFAULT_BANK.
    A non-list "questions" value is treated as an empty bank.
    """
    if not raw:
        return DEFAULT_BANK
    data = dict(raw)
    if not isinstance(data.get("questions"), list):
        data["questions"] = []
    defaults = DEFAULT_BANK.model_dump(by_alias=True, exclude={"questions"})
    for key, value in defaults.items():
        if data.get(key) is None:
            data[key] = value
    return QuizBank.model_validate(data)
