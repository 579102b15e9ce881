"""Route tests with authentication, storage and Gemini replaced by in-memory fakes."""

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).parent.parent))

from conftest import FakeDatabase, FakeWriter
from ideor import deps
from ideor.app import app
from ideor.auth import UserInfo, require_auth
from ideor.document_service import DocumentService
from ideor.errors import InsufficientResultsError
from ideor.pdf_export import PdfExporter
from ideor.project_service import ProjectService
from ideor.stage_service import StageService


class FakeIdeator:
    def __init__(self):
        self.calls = []

    async def suggest_ideas(self, seed_idea, segment_description, count=3):
        self.calls.append(("suggest", seed_idea, segment_description, count))
        if segment_description == "curto":
            raise InsufficientResultsError(count, 1)
        return [f"Ideia {i}" for i in range(1, count + 1)]

    async def segment_ideas(self, segment_description, count=3):
        self.calls.append(("segment", segment_description, count))
        return ["Pet Táxi — Transporte de animais"]

    async def generate_content(self, prompt):
        return f"eco: {prompt}"


@pytest.fixture
def client():
    db = FakeDatabase()
    ideator = FakeIdeator()
    writer = FakeWriter()

    app.dependency_overrides[require_auth] = lambda: UserInfo(uid="u1", email="u1@example.com")
    app.dependency_overrides[deps.get_project_service] = lambda: ProjectService(db)
    app.dependency_overrides[deps.get_stage_service] = lambda: StageService(db)
    app.dependency_overrides[deps.get_document_service] = lambda: DocumentService(writer, StageService(db), db)
    app.dependency_overrides[deps.get_pdf_exporter] = lambda: PdfExporter(db)
    app.dependency_overrides[deps.get_ideator] = lambda: ideator

    test_client = TestClient(app)
    test_client.db = db
    test_client.ideator = ideator
    yield test_client
    app.dependency_overrides.clear()


def create_project(client, name="Frete Fácil"):
    response = client.post("/api/projects", json={"name": name, "targetAudience": "PMEs"})
    assert response.status_code == 201
    return response.json()


def test_health_echoes_request_id(client):
    response = client.get("/api/health", headers={"x-request-id": "abc-123"})
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.headers["x-request-id"] == "abc-123"


def test_routes_require_auth():
    app.dependency_overrides.clear()
    response = TestClient(app).get("/api/projects")
    assert response.status_code == 401
    assert response.json() == {"error": "Não autenticado", "detail": "Authentication required"}


def test_project_crud(client):
    project = create_project(client)
    assert project["currentPhase"] == "fase1"
    assert project["targetAudience"] == "PMEs"
    assert project["valuation"] == 250

    response = client.put(f"/api/projects/{project['id']}", json={"description": "Fretes sob demanda"})
    assert response.json()["description"] == "Fretes sob demanda"

    assert [p["id"] for p in client.get("/api/projects").json()] == [project["id"]]

    assert client.delete(f"/api/projects/{project['id']}").status_code == 204
    response = client.get(f"/api/projects/{project['id']}")
    assert response.status_code == 404
    assert response.json() == {"error": "Project not found or access denied"}


def test_phase_and_stage_queries(client):
    project = create_project(client)
    pid = project["id"]

    assert client.get(f"/api/projects/{pid}/can-advance").json() == {"canAdvance": True, "projectId": pid}
    assert client.get(f"/api/projects/{pid}/next-stage").json() == {
        "nextStage": "etapa1", "message": "Next available stage: etapa1",
    }

    response = client.put(f"/api/projects/{pid}/phase", json={"newPhase": "fase2"})
    assert response.json()["currentPhase"] == "fase2"
    assert client.get(f"/api/projects/{pid}/can-advance").json()["canAdvance"] is False


def test_task_routes(client):
    pid = create_project(client)["id"]
    response = client.post(f"/api/projects/{pid}/tasks", json={"title": "Rascunho", "phase": "etapa1"})
    assert response.status_code == 201
    task = response.json()
    assert task["status"] == "draft"

    response = client.put(f"/api/tasks/{task['id']}/status", json={"newStatus": "submitted"})
    assert response.json()["status"] == "submitted"

    response = client.put(f"/api/tasks/{task['id']}/status", json={"newStatus": "done"})
    assert response.status_code == 400

    assert client.get("/api/tasks/missing").status_code == 404


def test_generate_document_and_history(client):
    pid = create_project(client)["id"]
    response = client.post(f"/api/projects/{pid}/documents/generate",
                           json={"phase": "etapa1", "inputs": {"ideia": "Fretes"}})
    assert response.status_code == 200
    body = response.json()
    assert body["phase"] == "etapa1"
    assert body["status"] == "evaluated"
    assert body["generatedContent"] == '{"resumo": "ok"}'
    assert body["modelUsed"] == "gemini-test"

    history = client.get(f"/api/documents/{body['taskId']}/evaluations").json()
    assert len(history["evaluations"]) == 1


def test_generate_document_unknown_stage(client):
    pid = create_project(client)["id"]
    response = client.post(f"/api/projects/{pid}/documents/generate", json={"phase": "etapa9"})
    assert response.status_code == 400
    assert "etapa9" in response.json()["detail"]


def test_export_pdf(client):
    pid = create_project(client)["id"]
    assert client.get(f"/api/projects/{pid}/export/pdf").status_code == 404

    client.post(f"/api/projects/{pid}/documents/generate", json={"phase": "etapa1", "inputs": {}})
    response = client.get(f"/api/projects/{pid}/export/pdf")
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.content.startswith(b"%PDF-1.4")


def test_ideas_require_segment(client):
    response = client.post("/api/ideas/suggest", json={"seedIdea": "x", "segmentDescription": "   "})
    assert response.status_code == 400
    assert response.json() == {"error": "SegmentDescription é obrigatório."}


def test_suggest_ideas_clamps_count_and_stores_options(client):
    pid = create_project(client)["id"]
    response = client.post("/api/ideas/suggest", json={
        "seedIdea": "delivery", "segmentDescription": "alimentação", "count": 10, "projectId": pid,
    })
    assert response.status_code == 200
    assert len(response.json()["ideas"]) == 6
    assert client.ideator.calls[-1] == ("suggest", "delivery", "alimentação", 6)

    stored = client.get(f"/api/projects/{pid}").json()
    assert stored["generatedOptions"] == response.json()["ideas"]


def test_segment_ideas_may_return_fewer(client):
    response = client.post("/api/ideas/segment", json={"segmentDescription": "pets"})
    assert response.status_code == 200
    assert response.json() == {"ideas": ["Pet Táxi — Transporte de animais"]}
    assert client.ideator.calls[-1] == ("segment", "pets", 3)


def test_insufficient_ideas_maps_to_502(client):
    response = client.post("/api/ideas/suggest", json={"segmentDescription": "curto", "count": 3})
    assert response.status_code == 502
    assert response.json()["detail"] == "expected 3 ideas, received 1"


def test_generate_content_passthrough(client):
    response = client.post("/api/ideas/generate", json={"prompt": "olá"})
    assert response.json() == {"text": "eco: olá"}


def test_metrics_endpoint(client):
    client.get("/api/health")
    snapshot = client.get("/metrics").json()
    assert any(key.startswith("http_server_duration_seconds") for key in snapshot["distributions"])


def test_project_response_counts_tasks(client):
    pid = create_project(client)["id"]
    assert client.get(f"/api/projects/{pid}").json()["tasksCount"] == 0

    client.post(f"/api/projects/{pid}/tasks", json={"title": "Rascunho", "phase": "etapa1"})
    client.post(f"/api/projects/{pid}/documents/generate", json={"phase": "etapa2", "inputs": {}})

    assert client.get(f"/api/projects/{pid}").json()["tasksCount"] == 2
    assert client.get("/api/projects").json()[0]["tasksCount"] == 2


def test_task_response_counts_evaluations(client):
    pid = create_project(client)["id"]
    draft = client.post(f"/api/projects/{pid}/tasks", json={"title": "Rascunho", "phase": "etapa1"}).json()
    assert draft["evaluationsCount"] == 0

    task_id = client.post(f"/api/projects/{pid}/documents/generate",
                          json={"phase": "etapa1", "inputs": {}}).json()["taskId"]
    client.post(f"/api/documents/{task_id}/refine", json={"feedback": "mais curto"})

    assert client.get(f"/api/tasks/{task_id}").json()["evaluationsCount"] == 2
    listed = {t["id"]: t["evaluationsCount"] for t in client.get(f"/api/projects/{pid}/tasks").json()}
    assert listed == {draft["id"]: 0, task_id: 2}
