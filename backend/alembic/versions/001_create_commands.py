"""Create commands table with unique line and how_to.

Revision ID: 001_create_commands
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_create_commands"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "commands",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("how_to", sa.String(250), nullable=False),
        sa.Column("line", sa.Text, nullable=False),
        sa.Column("platform", sa.Text, nullable=False),
        sa.UniqueConstraint("line", name="uq_commands_line"),
        sa.UniqueConstraint("how_to", name="uq_commands_how_to"),
    )
    op.create_index("ix_commands_platform", "commands", ["platform"])


def downgrade() -> None:
    op.drop_index("ix_commands_platform", table_name="commands")
    op.drop_table("commands")
