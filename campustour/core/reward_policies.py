"""Reward and crossword policy constants."""

from __future__ import annotations

# Roles allowed to see reward listings and statistics
STAFF_ROLES = frozenset({"content_manager", "moderator", "admin", "super_admin"})

# Default role for self-registered players
PLAYER_ROLE = "player"

# Path on the client that handles a scanned QR code
REDEEM_PATH = "/redeem"

# Crossword scoring
BASE_SCORE = 1000
MAX_TIME_BONUS = 300
HINT_PENALTY = 50

# Points credited on first completion of a puzzle, keyed by lowercase difficulty
DIFFICULTY_POINTS = {
    "easy": 5,
    "medium": 10,
    "hard": 15,
}
DEFAULT_DIFFICULTY_POINTS = 5

# Activity that accumulates crossword points
CROSSWORD_ACTIVITY_NAME = "Crossword Puzzle"
CROSSWORD_ACTIVITY_DESCRIPTION = "Complete crossword puzzles to earn points"
