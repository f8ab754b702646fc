"""
HTTP surface tests. The service is replaced through FastAPI dependency overrides, so no database
or model access happens here.
"""
import pytest
from starlette.testclient import TestClient

from app.api.routes import get_generate_service
from app.errors import GenerationFailed
from app.schemas.generate import GenerateSequenceResponse
from main import app

VALID_BODY = {
    "prospect_url": "https://linkedin.com/in/sam-rivera",
    "tov_config": {"formality": 0.5, "warmth": 0.7, "directness": 0.6},
    "company_context": "We help sales teams qualify prospects so fewer security reviews are triggered",
    "sequence_length": 3,
}


class StubService:
    def __init__(self, outcome):
        self.outcome = outcome
        self.bodies = []

    async def run(self, body):
        self.bodies.append(body)
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


def _use(service):
    app.dependency_overrides[get_generate_service] = lambda: service
    return service


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_generate_sequence_success(client, payload):
    service = _use(StubService(GenerateSequenceResponse.model_validate(payload)))
    response = client.post("/api/generate-sequence", json=VALID_BODY)

    assert response.status_code == 200
    data = response.json()
    assert set(data) == {"analysis", "messages", "confidence"}
    assert [m["step"] for m in data["messages"]] == [1, 2, 3]
    assert service.bodies[0].sequence_length == 3


def test_generation_failure_is_opaque(client):
    _use(StubService(GenerationFailed("message count mismatch: expected 3, got 4")))
    response = client.post("/api/generate-sequence", json=VALID_BODY)

    assert response.status_code == 500
    assert response.json() == {"error": "AI generation failed", "message": "Please retry later"}


@pytest.mark.parametrize(
    "override",
    [
        {"prospect_url": "https://example.com/people/sam"},
        {"sequence_length": 0},
        {"sequence_length": 11},
        {"company_context": ""},
        {"company_context": "   "},
        {"tov_config": {"formality": 1.5, "warmth": 0.5, "directness": 0.5}},
    ],
)
def test_invalid_requests_rejected(client, override):
    service = _use(StubService(None))
    response = client.post("/api/generate-sequence", json={**VALID_BODY, **override})

    assert response.status_code == 400
    assert response.json()["error"] == "Validation error"
    assert service.bodies == []


def test_url_without_scheme_is_normalized(client, payload):
    service = _use(StubService(GenerateSequenceResponse.model_validate(payload)))
    response = client.post("/api/generate-sequence", json={**VALID_BODY, "prospect_url": "linkedin.com/in/sam-rivera/"})

    assert response.status_code == 200
    assert service.bodies[0].prospect_url == "https://linkedin.com/in/sam-rivera"
