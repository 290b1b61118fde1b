"""Crossword API: published puzzles and the caller's progress on them."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from campustour.core.deps import get_current_user
from campustour.db.session import get_db
from campustour.models.crossword import CrosswordPuzzle, PuzzleWord
from campustour.models.user import User
from campustour.schemas.common import Envelope
from campustour.schemas.crossword import (
    ProgressOut,
    ProgressUpdateRequest,
    PuzzleDetailOut,
    PuzzleSummaryOut,
    PuzzleWordOut,
)
from campustour.services.crossword_service import (
    get_progress,
    get_published_puzzle,
    list_published_puzzles,
    list_puzzle_words,
    start_puzzle,
    update_progress,
)

router = APIRouter(prefix="/api/crossword", tags=["crossword"])


def _summary(puzzle: CrosswordPuzzle) -> PuzzleSummaryOut:
    return PuzzleSummaryOut(
        puzzle_id=puzzle.id,
        title=puzzle.title,
        difficulty=puzzle.difficulty,
        grid_size=puzzle.grid_size,
        created_at=puzzle.created_at,
    )


def _word(word: PuzzleWord) -> PuzzleWordOut:
    return PuzzleWordOut(
        start_row=word.start_row,
        start_col=word.start_col,
        direction=word.direction,
        clue_number=word.clue_number,
        word_text=word.word_text,
        word_length=len(word.word_text),
        clue_text=word.clue_text,
    )


@router.get("", response_model=Envelope[list[PuzzleSummaryOut]])
def list_puzzles(db: Session = Depends(get_db)):
    return Envelope(data=[_summary(p) for p in list_published_puzzles(db)])


@router.get("/{puzzle_id}", response_model=Envelope[PuzzleDetailOut])
def puzzle_detail(puzzle_id: int, db: Session = Depends(get_db)):
    puzzle = get_published_puzzle(db, puzzle_id)
    words = [_word(w) for w in list_puzzle_words(db, puzzle_id)]
    return Envelope(data=PuzzleDetailOut(**_summary(puzzle).model_dump(), puzzle_words=words))


@router.get("/{puzzle_id}/progress", response_model=Envelope[ProgressOut | None])
def read_progress(
    puzzle_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """The caller's progress, or ``data: null`` when the puzzle was never started."""
    progress = get_progress(db, current_user.id, puzzle_id)
    return Envelope(data=ProgressOut.model_validate(progress) if progress else None)


@router.post(
    "/{puzzle_id}/start",
    response_model=Envelope[ProgressOut],
    status_code=status.HTTP_201_CREATED,
)
def start(
    puzzle_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    progress = start_puzzle(db, current_user.id, puzzle_id)
    return Envelope(message="Puzzle started successfully", data=ProgressOut.model_validate(progress))


@router.put("/{puzzle_id}/progress", response_model=Envelope[ProgressOut])
def save_progress(
    puzzle_id: int,
    data: ProgressUpdateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    grid_kwargs = {}
    if "current_grid" in data.model_fields_set:
        grid_kwargs["current_grid"] = data.current_grid
    progress = update_progress(
        db,
        current_user.id,
        puzzle_id,
        time_spent=data.time_spent,
        hints_used=data.hints_used,
        score=data.score,
        completed=data.is_completed,
        **grid_kwargs,
    )
    return Envelope(message="Progress updated successfully", data=ProgressOut.model_validate(progress))
