"""add club details and tags

Revision ID: 8e41c0a7d2f5
Revises: 3b7d2e91c4a0
Create Date: 2026-10-20 09:41:18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '8e41c0a7d2f5'
down_revision: Union[str, Sequence[str], None] = '3b7d2e91c4a0'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade():
    op.add_column("clubs", sa.Column("category", sa.String(length=100), nullable=True))
    op.add_column("clubs", sa.Column("image_url", sa.String(length=1024), nullable=True))
    op.add_column("clubs", sa.Column("meeting_time", sa.String(length=255), nullable=True))
    op.add_column("clubs", sa.Column("location", sa.String(length=255), nullable=True))

    # 일괄 등록 시 이름 중복 확인에 사용
    op.create_index("ix_clubs_name", "clubs", ["name"])

    op.create_table(
        "club_tags",
        sa.Column("club_id", sa.Uuid(), nullable=False),
        sa.Column("tag", sa.String(length=64), nullable=False),
        sa.ForeignKeyConstraint(["club_id"], ["clubs.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("club_id", "tag"),
    )


def downgrade():
    op.drop_table("club_tags")
    op.drop_index("ix_clubs_name", table_name="clubs")
    op.drop_column("clubs", "location")
    op.drop_column("clubs", "meeting_time")
    op.drop_column("clubs", "image_url")
    op.drop_column("clubs", "category")
