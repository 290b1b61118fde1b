"""Tour walkthrough: finish every stop, claim the reward, scan it at the desk."""


def test_full_tour_reward_flow(client, make_user, make_activities, complete_activities, auth_headers):
    user = make_user()
    activities = make_activities(5)
    headers = auth_headers(user)

    complete_activities(user, activities[:4])
    assert client.post("/api/rewards/generate", headers=headers).status_code == 403

    complete_activities(user, activities[4:])
    completion = client.get("/api/activities/check-completion", headers=headers).json()["data"]
    assert completion == {"allCompleted": True, "completedCount": 5, "totalCount": 5}

    generated = client.post("/api/rewards/generate", headers=headers)
    assert generated.status_code == 201
    token = generated.json()["data"]["qrToken"]

    # Desk scanner is unauthenticated.
    redeemed = client.post("/api/rewards/redeem", json={"qrToken": token})
    assert redeemed.status_code == 200

    status = client.get("/api/rewards/status", params={"qrToken": token}).json()["data"]
    assert status["isRedeemed"] is True

    retry = client.post("/api/rewards/redeem", json={"qrToken": token})
    assert retry.status_code == 409
    assert retry.json()["message"] == "Reward already redeemed"
