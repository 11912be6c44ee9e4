"""Shared fixtures: an isolated data store per test and an API client bound to it."""

import pytest
from fastapi.testclient import TestClient

from assessment_platform.db.database import JSONDatabase, get_db
from assessment_platform.main import app

API = "/api"


@pytest.fixture
def db(tmp_path) -> JSONDatabase:
    return JSONDatabase(str(tmp_path / "data"))


@pytest.fixture
def client(db):
    app.dependency_overrides[get_db] = lambda: db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_question(client):
    """Create a question through the API and return its JSON body."""

    def _make(**overrides):
        payload = {
            "question": "What is 2 + 2?",
            "options": ["3", "4", "5", "6"],
            "correctAnswer": 1,
            "difficulty": "easy",
            "category": "Math",
        }
        payload.update(overrides)
        response = client.post(f"{API}/questions", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["item"]

    return _make


@pytest.fixture
def make_assessment(client):
    """Create an assessment through the API and return its JSON body."""

    def _make(**overrides):
        payload = {
            "title": "Math Quiz",
            "description": "Basic math questions",
            "selectedChallenges": [],
            "timeLimit": 15,
            "passingScore": 50,
        }
        payload.update(overrides)
        response = client.post(f"{API}/assessments", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["item"]

    return _make
