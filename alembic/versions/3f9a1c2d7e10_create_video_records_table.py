"""Create video_records table.

Revision ID: 3f9a1c2d7e10
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "3f9a1c2d7e10"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "video_records",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("video_id", sa.String(64), nullable=False),
        sa.Column("original_title", sa.Text, nullable=False),
        sa.Column("current_title", sa.Text, nullable=False),
        sa.Column("channel_title", sa.Text, nullable=True),
        sa.Column("view_count", sa.BigInteger, nullable=True),
        sa.Column(
            "comments",
            sa.JSON().with_variant(postgresql.JSONB(), "postgresql"),
            nullable=False,
        ),
        sa.Column(
            "action_history",
            sa.JSON().with_variant(postgresql.JSONB(), "postgresql"),
            nullable=False,
        ),
        sa.Column("version", sa.Integer, nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id", name="pk_video_records"),
        sa.UniqueConstraint("video_id", name="uq_video_records_video_id"),
    )


def downgrade() -> None:
    op.drop_table("video_records")
