"""Pytest fixtures."""

import os
import uuid

os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from campustour.core.security import create_access_token
from campustour.db.base import Base
from campustour.db.session import get_db
from campustour.main import app
from campustour.models import (  # noqa: F401 - register for create_all
    Activity,
    CrosswordPuzzle,
    PuzzleWord,
    Reward,
    User,
    UserActivity,
    UserPuzzleProgress,
)
from campustour.services.activity_service import record_activity_points

TEST_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def setup_db():
    """Fresh tables per test; activity counts are global so tests must not share them."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session(setup_db):
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(setup_db):
    """Test client with overridden DB."""
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session):
    def _make(role: str = "player") -> User:
        uid = uuid.uuid4().hex[:8]
        user = User(username=f"player_{uid}", email=f"{uid}@test.com", role=role)
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make


@pytest.fixture
def auth_headers():
    def _headers(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}

    return _headers


@pytest.fixture
def make_activities(db_session):
    def _make(count: int = 5) -> list[Activity]:
        activities = [
            Activity(name=f"Stop {i + 1}", description=f"Tour stop {i + 1}", order=i)
            for i in range(count)
        ]
        db_session.add_all(activities)
        db_session.commit()
        for activity in activities:
            db_session.refresh(activity)
        return activities

    return _make


@pytest.fixture
def complete_activities(db_session):
    def _complete(user: User, activities: list[Activity]) -> None:
        for activity in activities:
            record_activity_points(db_session, user.id, activity.id, 10)
        db_session.commit()

    return _complete


@pytest.fixture
def make_puzzle(db_session):
    """Puzzle with CAT across and COW down sharing the top-left cell."""

    def _make(difficulty: str = "Easy", published: bool = True) -> CrosswordPuzzle:
        puzzle = CrosswordPuzzle(title="Campus Basics", difficulty=difficulty, grid_size=5, is_published=published)
        db_session.add(puzzle)
        db_session.flush()
        db_session.add_all(
            [
                PuzzleWord(
                    puzzle_id=puzzle.id,
                    word_text="CAT",
                    start_row=0,
                    start_col=0,
                    direction="across",
                    clue_number=1,
                    clue_text="Library mascot",
                ),
                PuzzleWord(
                    puzzle_id=puzzle.id,
                    word_text="COW",
                    start_row=0,
                    start_col=0,
                    direction="down",
                    clue_number=2,
                    clue_text="Farm behind the science block",
                ),
            ]
        )
        db_session.commit()
        db_session.refresh(puzzle)
        return puzzle

    return _make


def solved_grid() -> list[list[dict[str, str]]]:
    grid = [[{"letter": ""} for _ in range(5)] for _ in range(5)]
    for col, letter in enumerate("CAT"):
        grid[0][col] = {"letter": letter}
    for row, letter in enumerate("COW"):
        grid[row][0] = {"letter": letter}
    return grid


@pytest.fixture
def solved():
    return solved_grid()


@pytest.fixture
def session_factory(setup_db):
    """Independent sessions, e.g. to act as two concurrent scanners."""
    return TestingSessionLocal
