"""Articles table — indexed raw records for the database store backend.

Revision ID: 001_articles
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_articles"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "articles",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("position", sa.Integer, nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("encrypted_holder", sa.Text, nullable=False),
        sa.Column("amount", sa.Float, nullable=False),
        sa.Column("country", sa.String(100), nullable=False),
        sa.Column("agent", sa.String(100), nullable=False),
    )
    op.create_index("ix_articles_position", "articles", ["position"])


def downgrade() -> None:
    op.drop_index("ix_articles_position", table_name="articles")
    op.drop_table("articles")
