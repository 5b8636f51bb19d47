"""Tests for the FastAPI server."""
from fastapi.testclient import TestClient
import pytest

from quizdeck.core.services.quiz_session import SessionAction
from quizdeck.server.api_server import create_api_app


@pytest.fixture
def client(manager):
    return TestClient(create_api_app(manager))


def act(client, session_id, action, answer_id=None):
    response = client.post(
        f"/sessions/{session_id}/actions",
        json={"action": action.value, "answer_id": answer_id},
    )
    assert response.status_code == 200
    return response.json()


def test_list_and_get_sets(client):
    cards = client.get("/sets").json()
    assert [card["id"] for card in cards] == ["SET-1"]
    assert cards[0]["question_count"] == 2
    assert cards[0]["completion_percentage"] == 0

    detail = client.get("/sets/SET-1").json()
    assert detail["name"] == "Sample"
    assert len(detail["questions"]) == 2


def test_unknown_set_is_404(client):
    assert client.get("/sets/missing").status_code == 404
    assert client.get("/sets/missing/summary").status_code == 404
    assert client.delete("/sets/missing").status_code == 404
    assert client.post("/sessions", json={"set_id": "missing"}).status_code == 404


def test_full_session_flow(client):
    response = client.post("/sessions", json={"set_id": "SET-1"})
    assert response.status_code == 201
    session_id = response.json()["session_id"]
    state = response.json()["state"]
    assert state["progress_text"] == "Question 1 of 2"
    assert state["question"]["answers"][0]["is_correct"] is None

    act(client, session_id, SessionAction.SELECT_ANSWER, "A1")
    state = act(client, session_id, SessionAction.SUBMIT_ANSWER)
    assert state["answer_checked"]
    assert state["question"]["answers"][0]["is_correct"] is True

    act(client, session_id, SessionAction.NEXT_QUESTION)
    act(client, session_id, SessionAction.SELECT_ANSWER, "A3")
    act(client, session_id, SessionAction.SUBMIT_ANSWER)
    state = act(client, session_id, SessionAction.FINISH_SET)

    assert state["phase"] == "summary"
    assert state["question"] is None
    assert state["summary"] == {"correct_count": 1, "incorrect_count": 1, "total_count": 2, "percentage": 50}

    state = act(client, session_id, SessionAction.REVIEW_INCORRECT)
    assert state["question_count"] == 1
    assert state["question"]["id"] == "Q2"
    assert state["question"]["allows_multiple_selection"]

    assert client.get("/sets/SET-1/summary").json()["correct_count"] == 1
    assert client.delete(f"/sessions/{session_id}").status_code == 204
    assert client.get(f"/sessions/{session_id}").status_code == 404


def test_invalid_actions_are_422(client):
    session_id = client.post("/sessions", json={"set_id": "SET-1"}).json()["session_id"]
    response = client.post(f"/sessions/{session_id}/actions", json={"action": "select_answer"})
    assert response.status_code == 422
    response = client.post(f"/sessions/{session_id}/actions", json={"action": "jump"})
    assert response.status_code == 422


def test_export_and_import(client):
    exported = client.get("/sets/SET-1/export")
    assert exported.status_code == 200
    document = exported.json()
    assert "progress" not in document

    document["name"] = "Renamed"
    response = client.post("/sets/import", json=document)
    assert response.status_code == 201
    assert response.json()["name"] == "Renamed"

    response = client.post("/sets/import", json={"name": "Broken"})
    assert response.status_code == 422


def test_delete_set(client):
    assert client.delete("/sets/SET-1").status_code == 204
    assert client.get("/sets").json() == []
