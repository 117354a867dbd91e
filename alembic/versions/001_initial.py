"""Initial tables: categories, passages, game_sessions, guesses, user_stats.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

source_type = sa.Enum("human", "ai", name="source_type")
session_status = sa.Enum("open", "closed", name="session_status")


def upgrade() -> None:
    op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(128), nullable=False),
        sa.Column("css_category", sa.String(64), nullable=False),
        sa.Column("theme_tokens", sa.JSON(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    op.create_table(
        "passages",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("category_id", sa.Integer(), nullable=False),
        sa.Column("source_type", source_type, nullable=False),
        sa.Column("rand_key", sa.Float(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.ForeignKeyConstraint(["category_id"], ["categories.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_passages_category_id"), "passages", ["category_id"], unique=False)
    op.create_index(op.f("ix_passages_rand_key"), "passages", ["rand_key"], unique=False)

    op.create_table(
        "game_sessions",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("user_id", sa.String(255), nullable=True),
        sa.Column("status", session_status, nullable=False, server_default="open"),
        sa.Column("score", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("streak", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("questions_answered", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("category_filter", sa.JSON(), nullable=False),
        sa.Column("started_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column("ended_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_game_sessions_user_id"), "game_sessions", ["user_id"], unique=False)

    op.create_table(
        "guesses",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("session_id", sa.String(36), nullable=False),
        sa.Column("user_id", sa.String(255), nullable=True),
        sa.Column("passage_id", sa.Integer(), nullable=False),
        sa.Column("guess_source", source_type, nullable=False),
        sa.Column("is_correct", sa.Boolean(), nullable=False),
        sa.Column("time_ms", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.ForeignKeyConstraint(["session_id"], ["game_sessions.id"]),
        sa.ForeignKeyConstraint(["passage_id"], ["passages.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_guesses_session_id"), "guesses", ["session_id"], unique=False)
    op.create_index(op.f("ix_guesses_user_id"), "guesses", ["user_id"], unique=False)
    op.create_index(op.f("ix_guesses_passage_id"), "guesses", ["passage_id"], unique=False)

    op.create_table(
        "user_stats",
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("games_played", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("total_questions", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("correct", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("streak_best", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("last_played_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("user_id"),
    )


def downgrade() -> None:
    op.drop_table("user_stats")
    op.drop_index(op.f("ix_guesses_passage_id"), table_name="guesses")
    op.drop_index(op.f("ix_guesses_user_id"), table_name="guesses")
    op.drop_index(op.f("ix_guesses_session_id"), table_name="guesses")
    op.drop_table("guesses")
    op.drop_index(op.f("ix_game_sessions_user_id"), table_name="game_sessions")
    op.drop_table("game_sessions")
    op.drop_index(op.f("ix_passages_rand_key"), table_name="passages")
    op.drop_index(op.f("ix_passages_category_id"), table_name="passages")
    op.drop_table("passages")
    op.drop_table("categories")
    session_status.drop(op.get_bind(), checkfirst=True)
    source_type.drop(op.get_bind(), checkfirst=True)
