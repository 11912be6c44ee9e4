"""Tests for submission review, dashboard stats, error boundary and seeding."""

from fastapi.testclient import TestClient

from conftest import API
from assessment_platform.crud.submission import SubmissionCRUD
from assessment_platform.db import database
from assessment_platform.db.database import get_db
from assessment_platform.main import app
from assessment_platform.scripts.seed_questions import seed_questions


def test_list_submissions_joins_assessment(client, make_question, make_assessment):
    q1 = make_question()
    assessment = make_assessment(title="Math Quiz", description="Numbers", selectedChallenges=[q1["id"]])
    orphan = make_assessment(title="Removed")

    client.post(
        f"{API}/assessments/{assessment['id']}/submit",
        json={"candidateEmail": "a@example.com", "answers": {q1["id"]: 1}},
    )
    client.post(
        f"{API}/assessments/{orphan['id']}/submit",
        json={"candidateEmail": "b@example.com", "answers": {}},
    )
    client.delete(f"{API}/assessments/{orphan['id']}")

    response = client.get(f"{API}/submissions")
    assert response.status_code == 200
    items = response.json()["items"]
    assert [i["candidateEmail"] for i in items] == ["a@example.com", "b@example.com"]
    assert items[0]["assessmentTitle"] == "Math Quiz"
    assert items[0]["assessmentDescription"] == "Numbers"
    assert items[1]["assessmentTitle"] == "Unknown Assessment"


def test_submission_detail(client, make_question, make_assessment):
    q1 = make_question(question="Q1", options=["a", "b", "c"], correctAnswer=2)
    q2 = make_question(question="Q2", options=["a", "b"], correctAnswer=0)
    assessment = make_assessment(selectedChallenges=[q1["id"], q2["id"]])
    submission = client.post(
        f"{API}/assessments/{assessment['id']}/submit",
        json={"candidateEmail": "a@example.com", "answers": {q1["id"]: 2}},
    ).json()["submission"]

    response = client.get(f"{API}/submissions/{submission['id']}")
    assert response.status_code == 200
    body = response.json()
    assert body["item"]["id"] == submission["id"]
    assert body["item"]["assessmentTitle"] == assessment["title"]
    assert body["detail"][q1["id"]] == {
        "question": "Q1",
        "options": ["a", "b", "c"],
        "correctAnswer": 2,
        "candidateAnswer": 2,
        "isCorrect": True,
    }
    assert body["detail"][q2["id"]]["candidateAnswer"] is None
    assert body["detail"][q2["id"]]["isCorrect"] is False


def test_submission_detail_skips_deleted_questions(client, make_question, make_assessment):
    q1 = make_question()
    q2 = make_question()
    assessment = make_assessment(selectedChallenges=[q1["id"], q2["id"]])
    submission = client.post(
        f"{API}/assessments/{assessment['id']}/submit",
        json={"candidateEmail": "a@example.com", "answers": {}},
    ).json()["submission"]
    client.delete(f"{API}/questions/{q2['id']}")

    body = client.get(f"{API}/submissions/{submission['id']}").json()
    assert list(body["detail"]) == [q1["id"]]
    assert body["item"]["totalQuestions"] == 2


def test_missing_submission_is_404(client):
    response = client.get(f"{API}/submissions/missing")
    assert response.status_code == 404
    assert response.json() == {"error": "Submission not found"}


def test_submissions_are_read_only(client):
    assert client.put(f"{API}/submissions/any", json={}).status_code == 405
    assert client.delete(f"{API}/submissions/any").status_code == 405
    assert not hasattr(SubmissionCRUD, "update_submission")
    assert not hasattr(SubmissionCRUD, "delete_submission")


def test_dashboard_stats(client, make_question, make_assessment):
    q1 = make_question()
    assessment = make_assessment(selectedChallenges=[q1["id"]], passingScore=50)
    for answer in (1, 0):
        client.post(
            f"{API}/assessments/{assessment['id']}/submit",
            json={"candidateEmail": "a@example.com", "answers": {q1["id"]: answer}},
        )

    response = client.get(f"{API}/stats")
    assert response.status_code == 200
    assert response.json()["stats"] == {
        "totalQuestions": 1,
        "totalAssessments": 1,
        "totalSubmissions": 2,
        "averageScore": 50,
        "passRate": 50,
    }


def test_storage_failure_is_500(client, db, monkeypatch):
    def fail_replace(src, dst):
        raise OSError("read-only file system")

    monkeypatch.setattr(database.os, "replace", fail_replace)

    response = client.post(
        f"{API}/questions", json={"question": "Q", "options": ["a", "b"], "correctAnswer": 0}
    )
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to save questions"}
    assert db.collection("questions").count() == 0


def test_unhandled_error_is_generic_500(db):
    def broken_db():
        raise RuntimeError("secret internals")

    app.dependency_overrides[get_db] = broken_db
    try:
        response = TestClient(app, raise_server_exceptions=False).get(f"{API}/questions")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"error": "Something went wrong!"}
    assert "internals" not in response.text


def test_seed_questions(db):
    assert seed_questions(db=db) is True
    counts = db.counts()
    assert counts["questions"] > 0
    assert counts["assessments"] == 1

    assert seed_questions(db=db) is True
    assert db.counts() == counts

    assert seed_questions(reset=True, secret="abc123", db=db) is True
    assert db.counts() == counts
    assert db.collection("assessments").all()[0]["secret"] == "abc123"
