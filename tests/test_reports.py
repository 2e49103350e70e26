import re

from seed import seed_defaults


def test_compile_report(client):
    response = client.post(
        "/api/reports",
        json={"type": "attendance", "program": "Diploma in IT", "period": "Week 3", "data": {"present": 42}},
    )

    assert response.status_code == 201
    report = response.json()["report"]
    assert report["status"] == "Compiled"
    assert report["data"] == {"present": 42}
    assert re.fullmatch(r"\d{1,2}/\d{1,2}/\d{4}", report["date"])


def test_compile_report_defaults_payload(client):
    report = client.post(
        "/api/reports", json={"type": "performance", "program": "BIT", "period": "Q1"}
    ).json()["report"]

    assert report["data"] == {}


def test_compile_report_requires_fields(client):
    response = client.post("/api/reports", json={"type": "performance", "program": "BIT"})

    assert response.status_code == 400
    assert response.json() == {"error": "Report type, program, and period are required"}


def test_delete_report(client, db):
    report_id = client.post(
        "/api/reports", json={"type": "performance", "program": "BIT", "period": "Q1"}
    ).json()["report"]["_id"]

    assert client.delete(f"/api/reports/{report_id}").status_code == 200
    assert client.get("/api/reports").json() == []


def test_delete_missing_report(client, db):
    client.post("/api/reports", json={"type": "performance", "program": "BIT", "period": "Q1"})

    response = client.delete("/api/reports/65a000000000000000000000")

    assert response.status_code == 404
    assert response.json() == {"error": "Report not found"}
    assert db["report"].count_documents({}) == 1


def test_principal_reports_listed_newest_date_first(client, db):
    seed_defaults(db)

    reports = client.get("/api/principal-reports").json()

    assert [r["date"] for r in reports] == ["2024-01-20", "2024-01-18"]
    assert all(r["status"] == "pending" for r in reports)


def test_create_principal_report(client):
    response = client.post(
        "/api/principal-reports",
        json={"title": "Exam Moderation", "priority": "high", "from": "Principal Office", "keyPoints": ["Moderate"]},
    )

    assert response.status_code == 201
    report = response.json()["report"]
    assert report["from"] == "Principal Office"
    assert report["status"] == "pending"
    assert report["keyPoints"] == ["Moderate"]
    assert report["responseDate"] is None


def test_create_principal_report_requires_sender(client):
    response = client.post("/api/principal-reports", json={"title": "Exam Moderation", "priority": "high"})

    assert response.status_code == 400


def test_principal_report_submission_stamps_response_date(client, db):
    seed_defaults(db)
    report_id = client.get("/api/principal-reports").json()[0]["_id"]

    pending = client.put(f"/api/principal-reports/{report_id}", json={"response": "Draft plan"}).json()["report"]
    assert pending["status"] == "pending"
    assert pending["responseDate"] is None

    submitted = client.put(
        f"/api/principal-reports/{report_id}", json={"response": "Final plan", "status": "submitted"}
    ).json()["report"]
    assert submitted["status"] == "submitted"
    assert submitted["response"] == "Final plan"
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}", submitted["responseDate"])


def test_principal_report_rejects_unknown_status(client, db):
    seed_defaults(db)
    report_id = client.get("/api/principal-reports").json()[0]["_id"]

    assert client.put(f"/api/principal-reports/{report_id}", json={"status": "closed"}).status_code == 400


def test_principal_report_update_missing(client):
    response = client.put("/api/principal-reports/65a000000000000000000000", json={"status": "submitted"})

    assert response.status_code == 404
