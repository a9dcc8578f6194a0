from __future__ import annotations

from datetime import UTC, datetime

import sqlalchemy as sa
from sqlalchemy import JSON, DateTime, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from db import Base


def _now() -> datetime:
    return datetime.now(UTC)


class QuizAttempt(Base):
    __tablename__ = "quiz_attempts"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now, index=True)
    bank_id: Mapped[str] = mapped_column(String(64), index=True)
    user_id: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)
    score: Mapped[float] = mapped_column(Float)
    max_score: Mapped[float] = mapped_column(Float)
    items: Mapped[list] = mapped_column(JSON)  # per-question results
    took_seconds: Mapped[int | None] = mapped_column(sa.Integer, nullable=True)


class ObjectiveMastery(Base):
    __tablename__ = "objective_mastery"
    __table_args__ = (sa.UniqueConstraint("student_id", "topic_id", "objective_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    student_id: Mapped[str] = mapped_column(String(64), index=True)
    topic_id: Mapped[str] = mapped_column(String(64))
    objective_id: Mapped[str] = mapped_column(String(64))
    score_percent: Mapped[float] = mapped_column(Float, default=0)
    # not_started | in_progress | mastered
    status: Mapped[str] = mapped_column(String(16), default="not_started")
    attempts_count: Mapped[int] = mapped_column(Integer, default=0)
    last_attempt_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    country_code: Mapped[str | None] = mapped_column(String(8), nullable=True)
    level_code: Mapped[str | None] = mapped_column(String(16), nullable=True)
