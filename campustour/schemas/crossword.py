"""Crossword schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, Field

from campustour.schemas.common import CamelModel


class PuzzleSummaryOut(CamelModel):
    puzzle_id: int
    title: str
    difficulty: str
    grid_size: int
    created_at: datetime


class PuzzleWordOut(CamelModel):
    start_row: int
    start_col: int
    direction: str
    clue_number: int
    word_text: str
    word_length: int
    clue_text: str | None


class PuzzleDetailOut(PuzzleSummaryOut):
    puzzle_words: list[PuzzleWordOut] = Field(default_factory=list)


class ProgressOut(CamelModel):
    user_id: int
    puzzle_id: int
    current_grid: list[Any] | None
    is_completed: bool
    completed_at: datetime | None
    time_spent: int
    hints_used: int
    score: int | None
    started_at: datetime
    updated_at: datetime


class ProgressUpdateRequest(CamelModel):
    """Partial snapshot; omitted fields are left as stored."""

    current_grid: list[Any] | None = Field(
        default=None,
        validation_alias=AliasChoices("currentGrid", "grid", "current_grid"),
    )
    time_spent: int | None = Field(default=None, ge=0)
    hints_used: int | None = Field(default=None, ge=0)
    score: int | None = Field(default=None, ge=0)
    is_completed: bool | None = Field(
        default=None,
        validation_alias=AliasChoices("isCompleted", "completed", "is_completed"),
    )
