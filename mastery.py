# services/tutor/mastery.py
"""
Objective mastery tracking.

A mastery record is keyed by (student, topic, objective). Scores only ever go
up: a new result is merged with the stored one by taking the maximum, the
status is recomputed from the merged score and the attempt counter grows by one.

    >= 80   mastered
    <  80   in_progress  (a low first score is still "in_progress", never "not_started")
"""

from __future__ import annotations

import logging
import math
from datetime import UTC, datetime
from typing import Any, Iterable, List, Optional

import sqlalchemy as sa
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from models import ObjectiveMastery

logger = logging.getLogger("mathtutor.mastery")

MASTERED_THRESHOLD = 80
IN_PROGRESS_THRESHOLD = 30

NOT_STARTED = "not_started"
IN_PROGRESS = "in_progress"
MASTERED = "mastered"


def clamp_score(score_percent: float) -> float:
    score = float(score_percent)
    if not math.isfinite(score):
        raise ValueError(f"score_percent must be a finite number, got {score_percent!r}")
    return max(0.0, min(100.0, score))


def status_for_score(score: float) -> str:
    if score >= MASTERED_THRESHOLD:
        return MASTERED
    # below IN_PROGRESS_THRESHOLD is still in_progress
    return IN_PROGRESS


def calculate_score_from_tasks(task_results: Iterable[Any]) -> int:
    """Percentage of correct task results, rounded half up; 0 when there are none."""
    results = list(task_results)
    if not results:
        return 0
    correct = sum(1 for r in results if _is_correct(r))
    return int(math.floor(correct / len(results) * 100 + 0.5))


def _is_correct(result: Any) -> bool:
    if isinstance(result, dict):
        return bool(result.get("is_correct"))
    return bool(getattr(result, "is_correct", False))


def _upsert_dialect(db: Session):
    """(insert construct, two-argument max function) for the bound database."""
    name = db.get_bind().dialect.name
    if name == "postgresql":
        from sqlalchemy.dialects.postgresql import insert

        return insert, func.greatest
    if name == "sqlite":
        from sqlalchemy.dialects.sqlite import insert

        # SQLite's max() with two arguments is the scalar maximum
        return insert, func.max
    raise RuntimeError(
        f"mastery tracking needs PostgreSQL or SQLite; the configured database is {name!r}"
    )


def update_mastery_from_task_result(
    db: Session,
    *,
    student_id: str,
    topic_id: str,
    objective_id: str,
    score_percent: float,
    country_code: Optional[str] = None,
    level_code: Optional[str] = None,
) -> ObjectiveMastery:
    """
    Create or merge the mastery record for (student_id, topic_id, objective_id).

    Runs as a single INSERT ... ON CONFLICT DO UPDATE so concurrent updates for the
    same key cannot lose the maximum. A non-finite score raises
    ValueError before anything is written; database errors propagate to the caller.
    """
    clamped = clamp_score(score_percent)
    now = datetime.now(UTC)
    insert, greatest = _upsert_dialect(db)

    table = ObjectiveMastery.__table__
    stmt = insert(table).values(
        student_id=student_id,
        topic_id=topic_id,
        objective_id=objective_id,
        score_percent=clamped,
        status=status_for_score(clamped),
        attempts_count=1,
        last_attempt_at=now,
        country_code=country_code or None,
        level_code=level_code or None,
    )
    merged = greatest(table.c.score_percent, stmt.excluded.score_percent, type_=sa.Float)
    stmt = stmt.on_conflict_do_update(
        index_elements=[table.c.student_id, table.c.topic_id, table.c.objective_id],
        set_={
            "score_percent": merged,
            "status": sa.case((merged >= MASTERED_THRESHOLD, MASTERED), else_=IN_PROGRESS),
            "attempts_count": table.c.attempts_count + 1,
            "last_attempt_at": stmt.excluded.last_attempt_at,
        },
    )
    db.execute(stmt)
    db.commit()

    record = db.execute(
        select(ObjectiveMastery).where(
            ObjectiveMastery.student_id == student_id,
            ObjectiveMastery.topic_id == topic_id,
            ObjectiveMastery.objective_id == objective_id,
        )
    ).scalar_one()

    logger.info(
        "%s objective mastery: student=%s topic=%s objective=%s score=%s status=%s attempts=%s",
        "Created" if record.attempts_count == 1 else "Updated",
        student_id,
        topic_id,
        objective_id,
        record.score_percent,
        record.status,
        record.attempts_count,
    )
    return record


def list_mastery(
    db: Session, student_id: str, topic_id: Optional[str] = None
) -> List[ObjectiveMastery]:
    q = select(ObjectiveMastery).where(ObjectiveMastery.student_id == student_id)
    if topic_id:
        q = q.where(ObjectiveMastery.topic_id == topic_id)
    q = q.order_by(ObjectiveMastery.topic_id, ObjectiveMastery.objective_id)
    return list(db.execute(q).scalars())
