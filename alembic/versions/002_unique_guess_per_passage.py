"""One guess per passage per session.

Revision ID: 002
Revises: 001
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Keep the earliest guess where duplicates already exist
    op.execute(
        "DELETE FROM guesses WHERE id NOT IN ("
        "SELECT MIN(id) FROM guesses GROUP BY session_id, passage_id)"
    )
    op.create_index(
        "uq_guesses_session_passage",
        "guesses",
        ["session_id", "passage_id"],
        unique=True,
    )


def downgrade() -> None:
    op.drop_index("uq_guesses_session_passage", table_name="guesses")
