"""Activity completion API tests."""


def test_check_completion_counts(client, make_user, make_activities, complete_activities, auth_headers):
    user = make_user()
    activities = make_activities(4)
    complete_activities(user, activities[:3])

    r = client.get("/api/activities/check-completion", headers=auth_headers(user))
    assert r.status_code == 200
    assert r.json()["data"] == {"allCompleted": False, "completedCount": 3, "totalCount": 4}

    complete_activities(user, activities[3:])
    r = client.get("/api/activities/check-completion", headers=auth_headers(user))
    assert r.json()["data"]["allCompleted"] is True


def test_other_players_progress_does_not_count(
    client, make_user, make_activities, complete_activities, auth_headers
):
    me = make_user()
    other = make_user()
    activities = make_activities(2)
    complete_activities(other, activities)

    data = client.get("/api/activities/check-completion", headers=auth_headers(me)).json()["data"]
    assert data["completedCount"] == 0


def test_check_completion_without_activities_is_404(client, make_user, auth_headers):
    user = make_user()
    r = client.get("/api/activities/check-completion", headers=auth_headers(user))
    assert r.status_code == 404
    assert r.json() == {"status": "fail", "message": "No activities found in the system"}


def test_bad_token_is_rejected(client):
    r = client.get("/api/activities/check-completion", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401
    assert r.headers["www-authenticate"] == "Bearer"
