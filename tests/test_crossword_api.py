"""Crossword API tests."""


def test_list_shows_only_published_puzzles(client, make_puzzle):
    published = make_puzzle(difficulty="Medium")
    make_puzzle(published=False)

    r = client.get("/api/crossword")
    assert r.status_code == 200
    puzzles = r.json()["data"]
    assert [p["puzzleId"] for p in puzzles] == [published.id]
    assert puzzles[0]["difficulty"] == "Medium"
    assert puzzles[0]["gridSize"] == 5


def test_puzzle_detail_includes_words(client, make_puzzle):
    puzzle = make_puzzle()
    r = client.get(f"/api/crossword/{puzzle.id}")
    assert r.status_code == 200
    words = r.json()["data"]["puzzleWords"]
    assert [(w["clueNumber"], w["direction"], w["wordLength"]) for w in words] == [
        (1, "across", 3),
        (2, "down", 3),
    ]


def test_unknown_or_unpublished_puzzle_is_404(client, make_puzzle):
    hidden = make_puzzle(published=False)
    assert client.get("/api/crossword/424242").status_code == 404
    r = client.get(f"/api/crossword/{hidden.id}")
    assert r.status_code == 404
    assert r.json()["status"] == "fail"


def test_progress_requires_auth(client, make_puzzle):
    puzzle = make_puzzle()
    assert client.get(f"/api/crossword/{puzzle.id}/progress").status_code == 401
    assert client.post(f"/api/crossword/{puzzle.id}/start").status_code == 401


def test_start_then_start_again_conflicts(client, make_user, make_puzzle, auth_headers):
    user = make_user()
    puzzle = make_puzzle()
    headers = auth_headers(user)

    assert client.get(f"/api/crossword/{puzzle.id}/progress", headers=headers).json()["data"] is None

    r = client.post(f"/api/crossword/{puzzle.id}/start", headers=headers)
    assert r.status_code == 201
    assert r.json()["message"] == "Puzzle started successfully"
    data = r.json()["data"]
    assert data["userId"] == user.id
    assert data["isCompleted"] is False
    assert data["timeSpent"] == 0
    assert data["hintsUsed"] == 0

    again = client.post(f"/api/crossword/{puzzle.id}/start", headers=headers)
    assert again.status_code == 409
    assert again.json()["message"] == "Puzzle already started"


def test_update_before_start_is_404(client, make_user, make_puzzle, auth_headers):
    user = make_user()
    puzzle = make_puzzle()
    r = client.put(
        f"/api/crossword/{puzzle.id}/progress",
        json={"timeSpent": 12},
        headers=auth_headers(user),
    )
    assert r.status_code == 404
    assert r.json()["message"] == "Puzzle progress not found"


def test_save_and_complete_with_either_field_name(client, make_user, make_puzzle, auth_headers, solved):
    user = make_user()
    puzzle = make_puzzle(difficulty="Hard")
    headers = auth_headers(user)
    client.post(f"/api/crossword/{puzzle.id}/start", headers=headers)

    saved = client.put(
        f"/api/crossword/{puzzle.id}/progress",
        json={"grid": solved, "timeSpent": 300, "hintsUsed": 1},
        headers=headers,
    )
    assert saved.status_code == 200
    assert saved.json()["message"] == "Progress updated successfully"
    assert saved.json()["data"]["currentGrid"] == solved
    assert saved.json()["data"]["isCompleted"] is False

    done = client.put(
        f"/api/crossword/{puzzle.id}/progress",
        json={"timeSpent": 600, "hintsUsed": 3, "completed": True},
        headers=headers,
    )
    data = done.json()["data"]
    assert data["isCompleted"] is True
    assert data["score"] == 1140
    assert data["completedAt"] is not None
    assert data["currentGrid"] == solved

    again = client.put(
        f"/api/crossword/{puzzle.id}/progress",
        json={"isCompleted": True},
        headers=headers,
    )
    assert again.json()["data"]["completedAt"] == data["completedAt"]

    progress = client.get(f"/api/crossword/{puzzle.id}/progress", headers=headers).json()["data"]
    assert progress["isCompleted"] is True
    assert progress["score"] == 1140


def test_negative_counters_are_rejected(client, make_user, make_puzzle, auth_headers):
    user = make_user()
    puzzle = make_puzzle()
    headers = auth_headers(user)
    client.post(f"/api/crossword/{puzzle.id}/start", headers=headers)

    r = client.put(f"/api/crossword/{puzzle.id}/progress", json={"hintsUsed": -1}, headers=headers)
    assert r.status_code == 400
    assert r.json()["status"] == "fail"
    assert "hintsUsed" in r.json()["message"]
