"""Crossword puzzle progress tracking."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from campustour.core.config import settings
from campustour.core.errors import AlreadyStartedError, NotFoundError, NotStartedError, ValidationError
from campustour.core.reward_policies import (
    BASE_SCORE,
    CROSSWORD_ACTIVITY_DESCRIPTION,
    CROSSWORD_ACTIVITY_NAME,
    DEFAULT_DIFFICULTY_POINTS,
    DIFFICULTY_POINTS,
    HINT_PENALTY,
    MAX_TIME_BONUS,
)
from campustour.models.crossword import CrosswordPuzzle, PuzzleWord, UserPuzzleProgress
from campustour.models.user import User
from campustour.services.activity_service import get_or_create_activity, record_activity_points

logger = logging.getLogger(__name__)

_UNSET: Any = object()


def compute_score(time_spent: int, hints_used: int) -> int:
    """Score for a finished puzzle: base plus a per-minute time bonus, minus hints."""
    time_bonus = max(0, MAX_TIME_BONUS - time_spent // 60)
    hint_penalty = HINT_PENALTY * hints_used
    return max(0, BASE_SCORE + time_bonus - hint_penalty)


def difficulty_points(difficulty: str | None) -> int:
    return DIFFICULTY_POINTS.get((difficulty or "").lower(), DEFAULT_DIFFICULTY_POINTS)


def _cell_letter(cell: Any) -> str:
    if isinstance(cell, dict):
        cell = cell.get("letter")
    if not isinstance(cell, str):
        return ""
    return cell.strip().upper()


def grid_solves_puzzle(grid: list[Any] | None, words: list[PuzzleWord]) -> bool:
    """True when every placed word reads correctly on ``grid``.

    Cells may be plain strings or ``{"letter": ...}`` objects; comparison is
    case-insensitive.
    """
    if not grid or not words:
        return False
    for word in words:
        text = word.word_text.upper()
        down = word.direction.lower() == "down"
        for i, expected in enumerate(text):
            row = word.start_row + i if down else word.start_row
            col = word.start_col if down else word.start_col + i
            try:
                cell = grid[row][col]
            except (IndexError, KeyError, TypeError):
                return False
            if _cell_letter(cell) != expected:
                return False
    return True


def list_published_puzzles(db: Session) -> list[CrosswordPuzzle]:
    result = db.execute(
        select(CrosswordPuzzle)
        .where(CrosswordPuzzle.is_published.is_(True))
        .order_by(CrosswordPuzzle.created_at.desc(), CrosswordPuzzle.id.desc())
    )
    return list(result.scalars().all())


def get_published_puzzle(db: Session, puzzle_id: int) -> CrosswordPuzzle:
    puzzle = db.get(CrosswordPuzzle, puzzle_id)
    if not puzzle or not puzzle.is_published:
        raise NotFoundError(f"Puzzle with ID {puzzle_id} not found")
    return puzzle


def list_puzzle_words(db: Session, puzzle_id: int) -> list[PuzzleWord]:
    result = db.execute(
        select(PuzzleWord)
        .where(PuzzleWord.puzzle_id == puzzle_id)
        .order_by(PuzzleWord.clue_number.asc(), PuzzleWord.id.asc())
    )
    return list(result.scalars().all())


def get_progress(db: Session, user_id: int, puzzle_id: int) -> UserPuzzleProgress | None:
    return db.get(UserPuzzleProgress, (user_id, puzzle_id))


def start_puzzle(db: Session, user_id: int, puzzle_id: int) -> UserPuzzleProgress:
    """Create the progress row. The composite key turns a second start into a conflict."""
    get_published_puzzle(db, puzzle_id)

    progress = UserPuzzleProgress(
        user_id=user_id,
        puzzle_id=puzzle_id,
        is_completed=False,
        time_spent=0,
        hints_used=0,
    )
    db.add(progress)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("crossword_start_conflict user_id=%s puzzle_id=%s", user_id, puzzle_id)
        raise AlreadyStartedError("Puzzle already started", {"user_id": user_id, "puzzle_id": puzzle_id})

    db.refresh(progress)
    logger.info("crossword_started user_id=%s puzzle_id=%s", user_id, puzzle_id)
    return progress


def _award_completion_points(db: Session, user_id: int, puzzle: CrosswordPuzzle) -> int:
    points = difficulty_points(puzzle.difficulty)
    activity = get_or_create_activity(
        db,
        CROSSWORD_ACTIVITY_NAME,
        CROSSWORD_ACTIVITY_DESCRIPTION,
        counts_toward_reward=False,
    )
    record_activity_points(db, user_id, activity.id, points)
    user = db.get(User, user_id)
    if user:
        user.points += points
    db.flush()
    return points


def update_progress(
    db: Session,
    user_id: int,
    puzzle_id: int,
    *,
    current_grid: list[Any] | None = _UNSET,
    time_spent: int | None = None,
    hints_used: int | None = None,
    score: int | None = None,
    completed: bool | None = None,
) -> UserPuzzleProgress:
    """Apply a partial snapshot. Only supplied fields are written.

    ``completed=True`` finishes the puzzle once: ``completed_at`` is stamped,
    a score is computed when none was sent, and difficulty points are
    credited. Repeating the claim later leaves those untouched.
    """
    progress = get_progress(db, user_id, puzzle_id)
    if progress is None:
        raise NotStartedError("Puzzle progress not found", {"user_id": user_id, "puzzle_id": puzzle_id})

    now = datetime.now(timezone.utc)
    values: dict[str, Any] = {"updated_at": now}
    if current_grid is not _UNSET:
        values["current_grid"] = current_grid
    if time_spent is not None:
        values["time_spent"] = time_spent
    if hints_used is not None:
        values["hints_used"] = hints_used
    if score is not None:
        values["score"] = score

    grid = values.get("current_grid", progress.current_grid)
    effective_time = values.get("time_spent", progress.time_spent)
    effective_hints = values.get("hints_used", progress.hints_used)

    first_completion = False
    if completed and not progress.is_completed:
        if settings.crossword_verify_completion:
            words = list_puzzle_words(db, puzzle_id)
            if not grid_solves_puzzle(grid, words):
                logger.warning("crossword_completion_rejected user_id=%s puzzle_id=%s", user_id, puzzle_id)
                raise ValidationError("Submitted grid does not solve the puzzle")

        # Only the request that flips is_completed gets to award points.
        flipped = db.execute(
            update(UserPuzzleProgress)
            .where(
                UserPuzzleProgress.user_id == user_id,
                UserPuzzleProgress.puzzle_id == puzzle_id,
                UserPuzzleProgress.is_completed.is_(False),
            )
            .values(is_completed=True, completed_at=now)
            .execution_options(synchronize_session=False)
        )
        first_completion = flipped.rowcount == 1
        if first_completion and score is None:
            values["score"] = compute_score(effective_time, effective_hints)

    db.execute(
        update(UserPuzzleProgress)
        .where(
            UserPuzzleProgress.user_id == user_id,
            UserPuzzleProgress.puzzle_id == puzzle_id,
        )
        .values(**values)
        .execution_options(synchronize_session=False)
    )

    if first_completion:
        puzzle = db.get(CrosswordPuzzle, puzzle_id)
        points = _award_completion_points(db, user_id, puzzle) if puzzle else 0
        logger.info(
            "crossword_completed user_id=%s puzzle_id=%s score=%s points=%s",
            user_id,
            puzzle_id,
            values.get("score"),
            points,
        )

    db.commit()
    db.refresh(progress)
    return progress
