"""quiz attempts and objective mastery

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 10:12:44.310025

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001_initial"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "quiz_attempts",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("bank_id", sa.String(length=64), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=True),
        sa.Column("score", sa.Float(), nullable=False),
        sa.Column("max_score", sa.Float(), nullable=False),
        sa.Column("items", sa.JSON(), nullable=False),
        sa.Column("took_seconds", sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_quiz_attempts"),
    )
    op.create_index("ix_quiz_attempts_created_at", "quiz_attempts", ["created_at"])
    op.create_index("ix_quiz_attempts_bank_id", "quiz_attempts", ["bank_id"])
    op.create_index("ix_quiz_attempts_user_id", "quiz_attempts", ["user_id"])

    op.create_table(
        "objective_mastery",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("student_id", sa.String(length=64), nullable=False),
        sa.Column("topic_id", sa.String(length=64), nullable=False),
        sa.Column("objective_id", sa.String(length=64), nullable=False),
        sa.Column("score_percent", sa.Float(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("attempts_count", sa.Integer(), nullable=False),
        sa.Column("last_attempt_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("country_code", sa.String(length=8), nullable=True),
        sa.Column("level_code", sa.String(length=16), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_objective_mastery"),
        sa.UniqueConstraint(
            "student_id", "topic_id", "objective_id", name="uq_objective_mastery_student_id"
        ),
    )
    op.create_index("ix_objective_mastery_student_id", "objective_mastery", ["student_id"])


def downgrade() -> None:
    op.drop_index("ix_objective_mastery_student_id", table_name="objective_mastery")
    op.drop_table("objective_mastery")
    op.drop_index("ix_quiz_attempts_user_id", table_name="quiz_attempts")
    op.drop_index("ix_quiz_attempts_bank_id", table_name="quiz_attempts")
    op.drop_index("ix_quiz_attempts_created_at", table_name="quiz_attempts")
    op.drop_table("quiz_attempts")
