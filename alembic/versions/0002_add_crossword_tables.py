"""Add crossword puzzles, word placements and per-user progress.

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-19 09:30:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0002"
down_revision: Union[str, None] = "0001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "crossword_puzzles",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("difficulty", sa.String(length=20), nullable=False),
        sa.Column("grid_size", sa.Integer(), nullable=False),
        sa.Column("is_published", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("crossword_puzzles_pkey")),
    )

    op.create_table(
        "puzzle_words",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("puzzle_id", sa.Integer(), nullable=False),
        sa.Column("word_text", sa.String(length=50), nullable=False),
        sa.Column("start_row", sa.Integer(), nullable=False),
        sa.Column("start_col", sa.Integer(), nullable=False),
        sa.Column("direction", sa.String(length=10), nullable=False),
        sa.Column("clue_number", sa.Integer(), nullable=False),
        sa.Column("clue_text", sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(
            ["puzzle_id"],
            ["crossword_puzzles.id"],
            name=op.f("puzzle_words_puzzle_id_fkey"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("puzzle_words_pkey")),
    )
    op.create_index(op.f("ix_puzzle_words_puzzle_id"), "puzzle_words", ["puzzle_id"], unique=False)

    op.create_table(
        "user_puzzle_progress",
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("puzzle_id", sa.Integer(), nullable=False),
        sa.Column("current_grid", sa.JSON(), nullable=True),
        sa.Column("is_completed", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("time_spent", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("hints_used", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("score", sa.Integer(), nullable=True),
        sa.Column("started_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["users.id"],
            name=op.f("user_puzzle_progress_user_id_fkey"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["puzzle_id"],
            ["crossword_puzzles.id"],
            name=op.f("user_puzzle_progress_puzzle_id_fkey"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("user_id", "puzzle_id", name=op.f("user_puzzle_progress_pkey")),
    )


def downgrade() -> None:
    op.drop_table("user_puzzle_progress")
    op.drop_index(op.f("ix_puzzle_words_puzzle_id"), table_name="puzzle_words")
    op.drop_table("puzzle_words")
    op.drop_table("crossword_puzzles")
