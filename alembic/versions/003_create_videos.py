"""create videos table

Revision ID: 003
Revises: 002
Create Date: 2026-10-19

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "videos",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("creator_id", sa.String(36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True),
        sa.Column("project_id", sa.String(36), sa.ForeignKey("projects.id", ondelete="SET NULL"), nullable=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("format", sa.String(20), nullable=True),
        sa.Column("genres", sa.JSON(), nullable=False),
        sa.Column("duration_minutes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("monthly_cost", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("alternative_title", sa.String(255), nullable=True),
        sa.Column("long_description", sa.Text(), nullable=True),
        sa.Column("release_year", sa.Integer(), nullable=True),
        sa.Column("original_language", sa.String(50), nullable=True),
        sa.Column("age_rating", sa.String(20), nullable=True),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("banner_url", sa.String(1024), nullable=True),
        sa.Column("thumbnail_url", sa.String(1024), nullable=True),
        sa.Column("trailer_url", sa.String(1024), nullable=True),
        sa.Column("cover_url", sa.String(1024), nullable=True),
        sa.Column("cover_path", sa.String(512), nullable=True),
        sa.Column("bucket", sa.String(100), nullable=True),
        sa.Column("video_path", sa.String(512), nullable=True),
        sa.Column("video_url", sa.String(1024), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="uploading"),
        sa.Column("approved", sa.Boolean(), nullable=False, server_default=sa.false(), index=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table("videos")
