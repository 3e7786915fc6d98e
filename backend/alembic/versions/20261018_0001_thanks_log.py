"""add thanks log table

Revision ID: 20261018_0001
Revises:
Create Date: 2026-10-18 00:00:01
"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "20261018_0001"
down_revision: str | None = None
branch_labels: Sequence[str] | None = None
depends_on: Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "thanks_log",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("actor_id", sa.Integer(), nullable=False),
        sa.Column("actor_name", sa.String(length=255), nullable=False),
        sa.Column("thanks_key", sa.String(length=64), nullable=False),
        sa.Column("recipient_id", sa.Integer(), nullable=False),
        sa.Column("recipient_name", sa.String(length=255), nullable=False),
        sa.Column("source", sa.String(length=64), nullable=True),
        sa.Column("recorded_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("actor_id", "thanks_key", name="uq_thanks_log_actor_key"),
    )
    op.create_index("ix_thanks_log_actor_id", "thanks_log", ["actor_id"], unique=False)
    op.create_index("ix_thanks_log_recipient_id", "thanks_log", ["recipient_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_thanks_log_recipient_id", table_name="thanks_log")
    op.drop_index("ix_thanks_log_actor_id", table_name="thanks_log")
    op.drop_table("thanks_log")
