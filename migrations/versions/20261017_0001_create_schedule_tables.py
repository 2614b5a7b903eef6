"""Create schedule and review history tables."""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "20261017_0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "schedules",
        sa.Column("problem_id", sa.String(length=64), primary_key=True, nullable=False),
        sa.Column("next_review_date", sa.Date(), nullable=False),
        sa.Column("current_interval", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column("review_count", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column("last_review_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            server_onupdate=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("ix_schedules_next_review_date", "schedules", ["next_review_date"])

    op.create_table(
        "review_history",
        sa.Column("seq", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("problem_id", sa.String(length=64), nullable=False),
        sa.Column("reviewed_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("is_correct", sa.Boolean(), nullable=False),
        sa.Column("understanding_level", sa.String(length=16), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("id", name="uq_review_history_id"),
    )
    op.create_index(
        "ix_review_history_problem_id_reviewed_at",
        "review_history",
        ("problem_id", "reviewed_at"),
    )


def downgrade() -> None:
    op.drop_index("ix_review_history_problem_id_reviewed_at", table_name="review_history")
    op.drop_table("review_history")
    op.drop_index("ix_schedules_next_review_date", table_name="schedules")
    op.drop_table("schedules")
