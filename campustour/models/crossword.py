"""Crossword puzzle and progress models."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text, false, func
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import JSON

from campustour.db.base import Base


class CrosswordPuzzle(Base):
    """A crossword; authored by content managers and read-only here."""

    __tablename__ = "crossword_puzzles"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    difficulty: Mapped[str] = mapped_column(String(20), nullable=False, default="Easy")
    grid_size: Mapped[int] = mapped_column(Integer, nullable=False, default=10)
    is_published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )


class PuzzleWord(Base):
    """Placement of one answer on a puzzle grid."""

    __tablename__ = "puzzle_words"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    puzzle_id: Mapped[int] = mapped_column(
        ForeignKey("crossword_puzzles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    word_text: Mapped[str] = mapped_column(String(50), nullable=False)
    start_row: Mapped[int] = mapped_column(Integer, nullable=False)
    start_col: Mapped[int] = mapped_column(Integer, nullable=False)
    direction: Mapped[str] = mapped_column(String(10), nullable=False)
    clue_number: Mapped[int] = mapped_column(Integer, nullable=False)
    clue_text: Mapped[str | None] = mapped_column(Text, nullable=True)


class UserPuzzleProgress(Base):
    """One user's attempt at one puzzle. The composite key allows a single row per pair."""

    __tablename__ = "user_puzzle_progress"

    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    puzzle_id: Mapped[int] = mapped_column(
        ForeignKey("crossword_puzzles.id", ondelete="CASCADE"),
        primary_key=True,
    )
    current_grid: Mapped[list[Any] | None] = mapped_column(JSON, nullable=True)
    is_completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    time_spent: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    hints_used: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    started_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
