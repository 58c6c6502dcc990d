import pytest
from fastapi.testclient import TestClient

from projector.web import create_app


@pytest.fixture
def client(db_path):
    with TestClient(create_app(db_path)) as c:
        yield c


def _create(client, **body):
    resp = client.post("/api/occurrences", json=body)
    assert resp.status_code == 201, resp.text
    return resp.json()["occurrence_id"]


def test_health(client):
    assert client.get("/health").json()["status"] == "healthy"


def test_create_and_fetch(client):
    occurrence_id = _create(client, name="Pay rent", due_date="2025-01-01")

    body = client.get(f"/api/occurrences/{occurrence_id}").json()

    assert body["occurrence"]["name"] == "Pay rent"
    assert body["occurrence"]["status"] == "pending"


def test_done_returns_both_outcomes(client):
    occurrence_id = _create(
        client, name="Gym", due_date="2024-12-30", repeat_count=10,
        repeat_interval="week", repeat_pattern="mon,wed,fri",
    )

    resp = client.put(f"/api/occurrences/{occurrence_id}", json={"action": "done"})

    assert resp.status_code == 200
    result = resp.json()["trace"]["result"]
    assert result["transition"]["status"] == "done"
    assert result["chain"]["outcome"] == "created"
    assert result["chain"]["next_due_date"] == "2025-01-01"

    chain = client.get(f"/api/occurrences/{result['chain']['next_id']}/chain").json()
    assert [o["id"] for o in chain["chain"]] == [occurrence_id, result["chain"]["next_id"]]


def test_done_succeeds_when_chain_fails(client):
    occurrence_id = _create(client, name="No anchor", repeat_count=2, repeat_interval="day")

    resp = client.put(f"/api/occurrences/{occurrence_id}", json={"action": "done"})

    assert resp.status_code == 200
    assert resp.json()["trace"]["result"]["chain"]["outcome"] == "failed"


def test_list_with_status(client):
    first = _create(client, name="First")
    _create(client, name="Second")
    client.put(f"/api/occurrences/{first}", json={"action": "done"})

    body = client.get("/api/occurrences", params={"status": "pending"}).json()

    assert body["count"] == 1
    assert body["occurrences"][0]["name"] == "Second"


def test_not_found(client):
    assert client.get("/api/occurrences/99").status_code == 404
    assert client.put("/api/occurrences/99", json={"action": "done"}).status_code == 404
    assert client.delete("/api/occurrences/99").status_code == 404
    assert client.get("/api/projects/99").status_code == 404


def test_validation_errors(client):
    resp = client.post("/api/occurrences", json={"name": "x", "repeat_count": 1, "repeat_interval": "fortnight"})
    assert resp.status_code == 400
    assert "fortnight" in resp.json()["error"]

    resp = client.post("/api/occurrences", json={"name": "x", "due_date": "tomorrow"})
    assert resp.status_code == 400


def test_unknown_action(client):
    occurrence_id = _create(client, name="Pay rent")
    resp = client.put(f"/api/occurrences/{occurrence_id}", json={"action": "archive"})
    assert resp.status_code == 400


def test_delete(client):
    occurrence_id = _create(client, name="Pay rent")
    assert client.delete(f"/api/occurrences/{occurrence_id}").status_code == 200
    assert client.get(f"/api/occurrences/{occurrence_id}").status_code == 404


def test_projects(client):
    resp = client.post("/api/projects", json={"name": "Home"})
    assert resp.status_code == 201
    project_id = resp.json()["project_id"]

    _create(client, name="Water plants", project_id=project_id)

    assert client.get("/api/projects").json()["count"] == 1
    assert client.get(f"/api/projects/{project_id}").json()["project"]["name"] == "Home"


def test_delete_project(client):
    project_id = client.post("/api/projects", json={"name": "Home"}).json()["project_id"]
    occurrence_id = _create(client, name="Water plants", project_id=project_id)

    assert client.delete(f"/api/projects/{project_id}").status_code == 200
    assert client.get(f"/api/projects/{project_id}").status_code == 404
    assert client.delete(f"/api/projects/{project_id}").status_code == 404
    assert client.get(f"/api/occurrences/{occurrence_id}").json()["occurrence"]["project_id"] is None
