import pytest


def _submit(client, **overrides):
    payload = {"studentId": "STU-1", "challenge": "Lab computers are too slow"}
    payload.update(overrides)
    return client.post("/api/challenges", json=payload)


def test_submit_challenge_fills_defaults(client):
    response = _submit(client)

    assert response.status_code == 201
    challenge = response.json()["challenge"]
    assert challenge["studentName"] == "Anonymous Student"
    for field in ("program", "level", "semester", "course", "lecturer"):
        assert challenge[field] == "Not specified"
    assert challenge["status"] == "submitted"
    assert challenge["priority"] == "medium"
    assert challenge["submittedDate"]
    assert challenge["_id"]


@pytest.mark.parametrize("missing", ["studentId", "challenge"])
def test_submit_challenge_requires_text_and_student(client, missing):
    payload = {"studentId": "STU-1", "challenge": "Something"}
    del payload[missing]

    response = client.post("/api/challenges", json=payload)

    assert response.status_code == 400
    assert response.json() == {"error": "Challenge description and student ID are required"}


def test_list_challenges_filters_and_orders_newest_first(client, db, timestamps):
    db["challenge"].insert_many([
        {"studentId": "1", "challenge": "a", "status": "submitted", "priority": "high",
         "lecturer": "Mr. Molao", "submittedDate": timestamps[0]},
        {"studentId": "2", "challenge": "b", "status": "resolved", "priority": "low",
         "lecturer": "Mr. Makheka", "submittedDate": timestamps[1]},
        {"studentId": "3", "challenge": "c", "status": "submitted", "priority": "high",
         "lecturer": "MR. MOLAO", "submittedDate": timestamps[2]},
    ])

    everything = client.get("/api/challenges").json()
    assert [c["challenge"] for c in everything] == ["c", "b", "a"]

    molao = client.get("/api/challenges", params={"lecturer": "molao"}).json()
    assert [c["challenge"] for c in molao] == ["c", "a"]

    resolved = client.get("/api/challenges", params={"status": "resolved"}).json()
    assert [c["challenge"] for c in resolved] == ["b"]

    high_submitted = client.get("/api/challenges", params={"status": "submitted", "priority": "high"}).json()
    assert len(high_submitted) == 2


def test_update_challenge_stamps_review_date(client):
    challenge_id = _submit(client).json()["challenge"]["_id"]

    response = client.put(
        f"/api/challenges/{challenge_id}",
        json={"status": "reviewed", "response": "We are ordering new machines", "reviewedBy": "Dr. Principal"},
    )

    assert response.status_code == 200
    updated = response.json()["challenge"]
    assert updated["status"] == "reviewed"
    assert updated["response"] == "We are ordering new machines"
    assert updated["reviewedBy"] == "Dr. Principal"
    assert updated["reviewedDate"] is not None
    assert updated["priority"] == "medium"


def test_update_without_reviewer_leaves_review_date_unset(client):
    challenge_id = _submit(client).json()["challenge"]["_id"]

    updated = client.put(f"/api/challenges/{challenge_id}", json={"priority": "high"}).json()["challenge"]

    assert updated["priority"] == "high"
    assert updated["reviewedDate"] is None


def test_update_rejects_unknown_status(client):
    challenge_id = _submit(client).json()["challenge"]["_id"]

    response = client.put(f"/api/challenges/{challenge_id}", json={"status": "archived"})

    assert response.status_code == 400


def test_update_missing_challenge(client):
    response = client.put("/api/challenges/65a000000000000000000000", json={"status": "resolved"})

    assert response.status_code == 404
    assert response.json() == {"error": "Challenge not found"}


def test_stats_partition_by_status_and_priority(client):
    ids = [
        _submit(client, lecturer="Mr. Molao", priority="high").json()["challenge"]["_id"],
        _submit(client, lecturer="Mr. Molao").json()["challenge"]["_id"],
        _submit(client, lecturer="Mr. Makheka", priority="low").json()["challenge"]["_id"],
        _submit(client).json()["challenge"]["_id"],
    ]
    client.put(f"/api/challenges/{ids[0]}", json={"status": "resolved"})
    client.put(f"/api/challenges/{ids[2]}", json={"status": "reviewed"})

    stats = client.get("/api/challenges/stats").json()

    assert stats["totalChallenges"] == 4
    assert stats["byStatus"] == {"submitted": 2, "reviewed": 1, "resolved": 1}
    assert stats["byPriority"] == {"high": 1, "medium": 2, "low": 1}
    assert sum(stats["byStatus"].values()) == sum(stats["byPriority"].values()) == 4
    assert stats["byLecturer"] == {"Mr. Molao": 2, "Mr. Makheka": 1, "Not specified": 1}
    assert len(stats["recentChallenges"]) == 4


def test_stats_recent_challenges_capped_at_ten(client):
    for i in range(12):
        _submit(client, challenge=f"issue {i}")

    stats = client.get("/api/challenges/stats").json()

    assert stats["totalChallenges"] == 12
    assert len(stats["recentChallenges"]) == 10
