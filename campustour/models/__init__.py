"""SQLAlchemy models."""

from __future__ import annotations

from campustour.models.activity import Activity, UserActivity
from campustour.models.crossword import CrosswordPuzzle, PuzzleWord, UserPuzzleProgress
from campustour.models.reward import Reward
from campustour.models.user import User

__all__ = [
    "User",
    "Activity",
    "UserActivity",
    "CrosswordPuzzle",
    "PuzzleWord",
    "Reward",
    "UserPuzzleProgress",
]
