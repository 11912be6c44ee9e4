"""Tests for the question endpoints."""

from conftest import API


def test_health(client):
    response = client.get(f"{API}/health")
    assert response.status_code == 200
    assert response.json()["status"] == "OK"


def test_create_and_get_question(client, make_question):
    created = make_question()

    assert created["question"] == "What is 2 + 2?"
    assert created["options"] == ["3", "4", "5", "6"]
    assert created["correctAnswer"] == 1
    assert created["difficulty"] == "easy"
    assert created["category"] == "Math"
    assert created["id"]
    assert created["createdAt"]

    response = client.get(f"{API}/questions/{created['id']}")
    assert response.status_code == 200
    item = response.json()["item"]
    assert item == created
    assert 0 <= item["correctAnswer"] < len(item["options"])


def test_create_applies_defaults(client):
    response = client.post(f"{API}/questions", json={"options": ["yes", "no"]})
    assert response.status_code == 201
    item = response.json()["item"]
    assert item["question"] == ""
    assert item["correctAnswer"] == 0
    assert item["difficulty"] == "medium"
    assert item["category"] == "General"


def test_create_rejects_out_of_range_answer(client):
    response = client.post(
        f"{API}/questions",
        json={"question": "Q", "options": ["a", "b"], "correctAnswer": 2},
    )
    assert response.status_code == 400
    assert "correctAnswer" in response.json()["error"]
    assert client.get(f"{API}/questions").json()["items"] == []


def test_create_with_empty_body_is_rejected(client):
    response = client.post(f"{API}/questions")
    assert response.status_code == 400
    assert "options" in response.json()["error"]


def test_create_rejects_too_many_options(client):
    response = client.post(
        f"{API}/questions",
        json={"question": "Q", "options": list("abcdefg"), "correctAnswer": 0},
    )
    assert response.status_code == 400
    assert "options" in response.json()["error"]


def test_create_rejects_unknown_difficulty(client):
    response = client.post(
        f"{API}/questions",
        json={"question": "Q", "options": ["a", "b"], "difficulty": "impossible"},
    )
    assert response.status_code == 400
    assert "difficulty" in response.json()["error"]


def test_create_rejects_non_integer_answer_index(client):
    for value in (True, "1", 1.0):
        response = client.post(
            f"{API}/questions",
            json={"question": "Q", "options": ["a", "b"], "correctAnswer": value},
        )
        assert response.status_code == 400
        assert "correctAnswer" in response.json()["error"]
    assert client.get(f"{API}/questions").json()["items"] == []


def test_create_rejects_text_that_cannot_be_encoded(client):
    response = client.post(
        f"{API}/questions",
        content=b'{"question": "\\ud800", "options": ["a", "b"], "correctAnswer": 0}',
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert "question" in response.json()["error"]
    assert client.get(f"{API}/questions").json()["items"] == []


def test_list_questions(client, make_question):
    first = make_question(question="first")
    second = make_question(question="second")

    response = client.get(f"{API}/questions")
    assert response.status_code == 200
    assert response.json()["items"] == [first, second]
    assert client.get(f"{API}/questions").json() == response.json()


def test_partial_update(client, make_question):
    created = make_question()

    response = client.put(f"{API}/questions/{created['id']}", json={"category": "Arithmetic"})
    assert response.status_code == 200
    item = response.json()["item"]
    assert item["category"] == "Arithmetic"
    assert item["question"] == created["question"]
    assert item["options"] == created["options"]
    assert item["updatedAt"]


def test_update_without_body_keeps_question(client, make_question):
    created = make_question()

    response = client.put(f"{API}/questions/{created['id']}")
    assert response.status_code == 200
    item = response.json()["item"]
    assert item["question"] == created["question"]
    assert item["correctAnswer"] == created["correctAnswer"]

    response = client.put(f"{API}/questions/{created['id']}", json={"correctAnswer": True})
    assert response.status_code == 400
    assert "correctAnswer" in response.json()["error"]


def test_update_must_keep_valid_answer_key(client, make_question):
    created = make_question(correctAnswer=3)

    response = client.put(f"{API}/questions/{created['id']}", json={"options": ["a", "b"]})
    assert response.status_code == 400
    assert client.get(f"{API}/questions/{created['id']}").json()["item"]["options"] == created["options"]

    response = client.put(
        f"{API}/questions/{created['id']}",
        json={"options": ["a", "b"], "correctAnswer": 1},
    )
    assert response.status_code == 200
    assert response.json()["item"]["correctAnswer"] == 1


def test_missing_question_is_404(client):
    assert client.get(f"{API}/questions/missing").status_code == 404
    assert client.put(f"{API}/questions/missing", json={"category": "X"}).status_code == 404

    response = client.delete(f"{API}/questions/missing")
    assert response.status_code == 404
    assert response.json() == {"error": "Question not found"}


def test_delete_question(client, make_question):
    created = make_question()

    response = client.delete(f"{API}/questions/{created['id']}")
    assert response.status_code == 200
    assert client.get(f"{API}/questions/{created['id']}").status_code == 404


def test_unknown_route(client):
    response = client.get(f"{API}/nothing-here")
    assert response.status_code == 404
    assert response.json() == {"error": "Route not found"}
