"""
Test the assessment API endpoints.
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from guidance.routes import get_runner, router


@pytest.fixture
def client(runner):
    app = FastAPI()
    app.include_router(router)
    app.dependency_overrides[get_runner] = lambda: runner
    with TestClient(app) as test_client:
        yield test_client


def test_questions_for_path(client):
    response = client.get("/assessment/questions", params={"path": "exploring"})
    assert response.status_code == 200

    ids = [q["id"] for q in response.json()["questions"]]
    assert ids[0] == "grade"
    assert "undecided_personal_traits" in ids


def test_questions_for_unknown_path(client):
    response = client.get("/assessment/questions", params={"path": "moon"})
    assert response.status_code == 400


def test_determine_path(client):
    assert client.post("/assessment/path", json={"answer": "hard_hat"}).json() == {"path": "hands_on"}
    assert client.post("/assessment/path", json={"answer": None}).json() == {"path": "exploring"}


def test_validate_reports_missing_answers(client):
    response = client.post("/assessment/validate", json={"responses": {"grade": "10"}, "path": "hands_on"})
    assert response.status_code == 200

    body = response.json()
    assert body["is_valid"] is False
    assert "zip_code" in {e["question_id"] for e in body["errors"]}


def test_progress(client, hands_on_responses):
    response = client.post("/assessment/progress", json={"responses": hands_on_responses, "path": "hands_on"})
    assert response.status_code == 200
    assert response.json()["percent"] == 100


def test_submit(client, other_work_responses):
    response = client.post(
        "/assessment/submit",
        json={"responses": other_work_responses, "path": "other_work", "limit": 5},
    )
    assert response.status_code == 200

    body = response.json()
    assert len(body["matches"]) == 5
    assert body["matches"][0]["career"]["sector"] == "healthcare"
    assert len(body["explanations"]) == 5
    assert body["explanations"][0].endswith(".")
    assert len(body["recommendations"]) == 3
    assert body["academic_plan"]["courses"]


def test_submit_invalid_responses(client):
    response = client.post("/assessment/submit", json={"responses": {}, "path": "exploring"})
    assert response.status_code == 422
    assert response.json()["validation"]["is_valid"] is False


def test_submit_unknown_path(client, other_work_responses):
    response = client.post("/assessment/submit", json={"responses": other_work_responses, "path": "moon"})
    assert response.status_code == 400


def test_session_endpoints(client, hands_on_responses):
    session_id = client.post("/assessment/sessions").json()["session_id"]

    response = client.put(f"/assessment/sessions/{session_id}/answers", json={"answers": hands_on_responses})
    assert response.status_code == 200
    assert response.json()["path"] == "hands_on"

    assert client.get(f"/assessment/sessions/{session_id}/progress").json()["percent"] == 100

    response = client.post(f"/assessment/sessions/{session_id}/complete")
    assert response.status_code == 200
    assert response.json()["session_id"] == session_id

    assert client.get(f"/assessment/sessions/{session_id}").json()["status"] == "completed"


def test_session_path_change_rejected(client):
    session_id = client.post("/assessment/sessions").json()["session_id"]
    client.put(f"/assessment/sessions/{session_id}/answers", json={"answers": {"work_preference_main": "hard_hat"}})

    response = client.put(
        f"/assessment/sessions/{session_id}/answers",
        json={"answers": {"work_preference_main": "non_hard_hat"}},
    )
    assert response.status_code == 400


def test_session_typo_in_branching_answer_rejected(client):
    session_id = client.post("/assessment/sessions").json()["session_id"]
    response = client.put(
        f"/assessment/sessions/{session_id}/answers",
        json={"answers": {"work_preference_main": "hardhat"}},
    )
    assert response.status_code == 400
    assert client.get(f"/assessment/sessions/{session_id}").json()["path"] is None

    response = client.put(
        f"/assessment/sessions/{session_id}/answers",
        json={"answers": {"work_preference_main": "non_hard_hat"}},
    )
    assert response.status_code == 200
    assert response.json()["path"] == "other_work"


def test_complete_incomplete_session(client):
    session_id = client.post("/assessment/sessions").json()["session_id"]
    response = client.post(f"/assessment/sessions/{session_id}/complete")
    assert response.status_code == 422


def test_unknown_session(client):
    assert client.get("/assessment/sessions/nope").status_code == 404
    assert client.get("/assessment/sessions/nope/progress").status_code == 404


def test_health(client):
    body = client.get("/assessment/health").json()
    assert body["status"] == "healthy"
    assert body["careers_loaded"] == 36
    assert body["generative_provider"] is False
