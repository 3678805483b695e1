"""Initial schema: students table.

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "students",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("surname", sa.String(50), nullable=False),
        sa.Column("birth_date", sa.DateTime, nullable=False),
        sa.Column("overall_grade", sa.Numeric(5, 2), nullable=True),
        sa.Column("is_graduated", sa.Boolean, nullable=False),
        # Nullable until the service assigns it at creation.
        sa.Column("guid", sa.String(36), nullable=True),
        sa.UniqueConstraint("guid"),
        sa.UniqueConstraint("name", "surname", name="uq_students_name_surname"),
    )


def downgrade() -> None:
    op.drop_table("students")
