"""add credits, technical and rights columns to videos

Revision ID: 005
Revises: 004
Create Date: 2026-10-19

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "005"
down_revision: Union[str, None] = "004"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

COLUMNS = [
    ("screenshot_urls", sa.JSON(), False, "[]"),
    ("directors", sa.Text(), True, None),
    ("producers", sa.Text(), True, None),
    ("cast", sa.Text(), True, None),
    ("subtitle_languages", sa.String(255), True, None),
    ("video_codec", sa.String(50), True, None),
    ("framerate", sa.String(20), True, None),
    ("bitrate", sa.String(50), True, None),
    ("resolution", sa.String(50), True, None),
    ("copyright_holder", sa.String(255), True, None),
    ("access_type", sa.String(20), True, None),
    ("release_date", sa.Date(), True, None),
    ("geo_restriction", sa.String(255), True, None),
    ("bonus_content", sa.Text(), True, None),
]


def upgrade() -> None:
    with op.batch_alter_table("videos") as batch:
        for name, type_, nullable, default in COLUMNS:
            batch.add_column(sa.Column(name, type_, nullable=nullable, server_default=default))


def downgrade() -> None:
    with op.batch_alter_table("videos") as batch:
        for name, *_ in reversed(COLUMNS):
            batch.drop_column(name)
