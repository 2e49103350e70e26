import pytest


def test_lecturer_report_submission(client):
    response = client.post(
        "/api/lecturer-reports",
        json={"lecturerName": "Mr. Molao", "course": "Programming Principles", "report": "Covered loops", "week": 4},
    )

    assert response.status_code == 201
    report = response.json()["report"]
    assert report["status"] == "submitted"
    assert report["week"] == 4
    assert report["topic"] is None
    assert report["createdAt"]


def test_lecturer_report_requires_sender_and_content(client):
    response = client.post("/api/lecturer-reports", json={"course": "Programming Principles"})

    assert response.status_code == 400
    assert "lecturerName" in response.json()["error"]
    assert "report" in response.json()["error"]


def test_lecturer_reports_filtered_by_equality(client):
    for lecturer, program in (("Mr. Molao", "DIT"), ("Mr. Molao", "BIT"), ("Mr. Makheka", "DIT")):
        client.post(
            "/api/lecturer-reports",
            json={"lecturerName": lecturer, "program": program, "course": "X", "report": "ok"},
        )

    body = client.get("/api/lecturer-reports", params={"lecturerName": "Mr. Molao", "program": "DIT"}).json()

    assert body["count"] == 1
    assert body["reports"][0]["program"] == "DIT"
    assert client.get("/api/lecturer-reports").json()["count"] == 3
    # Equality, not substring
    assert client.get("/api/lecturer-reports", params={"lecturerName": "molao"}).json()["count"] == 0


@pytest.mark.parametrize(
    "path, payload, recipient_field",
    [
        ("/api/program-leader-feedback",
         {"programLeader": "Ms. Leader", "lecturer": "Mr. Molao", "feedback": "Good pacing"}, "lecturer"),
        ("/api/principal-lecturer-feedback",
         {"principalLecturer": "Dr. PL", "recipient": "Mr. Makheka", "feedback": "Update notes"}, "recipient"),
    ],
)
def test_feedback_channels(client, path, payload, recipient_field):
    response = client.post(path, json={**payload, "priority": "high"})

    assert response.status_code == 201
    feedback = response.json()["feedback"]
    assert feedback["status"] == "sent"
    assert feedback["priority"] == "high"

    listing = client.get(path, params={recipient_field: payload[recipient_field]}).json()
    assert listing["count"] == 1
    assert listing["feedback"][0]["feedback"] == payload["feedback"]

    assert client.get(path, params={"status": "read"}).json() == {"feedback": [], "count": 0}
