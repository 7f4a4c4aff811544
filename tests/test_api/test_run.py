"""Tests for PyPush API endpoints."""
import pytest
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

try:
    from fastapi.testclient import TestClient
    from api.main import app
    HAS_FASTAPI = True
except ImportError:
    HAS_FASTAPI = False


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.mark.skipif(not HAS_FASTAPI, reason="FastAPI not available")
class TestHealthEndpoint:
    """Tests for /health and the root endpoint."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "pypush-api"

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["health"] == "/health"


@pytest.mark.skipif(not HAS_FASTAPI, reason="FastAPI not available")
class TestRunEndpoint:
    """Tests for /api/v1/run endpoint."""

    def test_run_simple_program(self, client):
        response = client.post("/api/v1/run", json={"program": "1 2 integer.+"})
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "completed"
        assert data["success"] is True
        assert data["stacks"]["integer"] == [3]
        assert data["stacks"]["code"] == ["(1 2 integer.+)"]
        assert data["steps"] == 4
        assert data["error"] is None

    def test_run_with_options(self, client):
        response = client.post("/api/v1/run", json={
            "program": "1 2 integer.+",
            "options": {"top_level_push_code": False, "allowed_types": ["integer"]},
        })
        assert response.status_code == 200
        data = response.json()
        assert set(data["stacks"]) == {"integer", "exec"}
        assert data["stacks"]["integer"] == [3]

    def test_definitions_are_reported(self, client):
        response = client.post("/api/v1/run", json={"program": "sq exec.define (integer.dup integer.*) 3 sq"})
        data = response.json()
        assert data["definitions"] == {"sq": "(integer.dup integer.*)"}
        assert data["stacks"]["integer"] == [9]

    def test_unbalanced_program_is_rejected(self, client):
        response = client.post("/api/v1/run", json={"program": "(1 2"})
        assert response.status_code == 422

    def test_invalid_options_are_rejected(self, client):
        response = client.post("/api/v1/run", json={
            "program": "1",
            "options": {"min_random_integer": 10, "max_random_integer": 0},
        })
        assert response.status_code == 422
        errors = response.json()["detail"]["errors"]
        assert errors == ["MIN-RANDOM-INTEGER (10) must be less than or equal to MAX-RANDOM-INTEGER (0)"]

    def test_unknown_option_is_rejected(self, client):
        response = client.post("/api/v1/run", json={"program": "1", "options": {"bogus": 1}})
        assert response.status_code == 422

    @pytest.mark.parametrize("options", [
        {"allowed_types": [1]},
        {"allowed_types": 5},
        {"allowed_instructions": "integer.+"},
        {"min_random_integer": 0.5},
        {"eval_push_limit": "many"},
        {"tracing": "sometimes"},
    ])
    def test_badly_typed_options_are_rejected(self, client, options):
        response = client.post("/api/v1/run", json={"program": "integer.rand", "options": options})
        assert response.status_code == 422

    def test_whole_float_integer_option_is_accepted(self, client):
        response = client.post("/api/v1/run", json={
            "program": "integer.rand",
            "options": {"min_random_integer": 2.0, "max_random_integer": 2},
        })
        assert response.status_code == 200
        assert response.json()["stacks"]["integer"] == [2]

    def test_resource_exhaustion(self, client):
        response = client.post("/api/v1/run", json={
            "program": "exec.y 1",
            "options": {"eval_push_limit": 5},
        })
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "resource_exhausted"
        assert data["success"] is False
        assert data["steps"] == 5

    def test_unknown_instruction(self, client):
        response = client.post("/api/v1/run", json={"program": "1 integer.frobnicate 2"})
        data = response.json()
        assert data["status"] == "unknown_instruction"
        assert "integer.frobnicate" in data["error"]
        assert data["stacks"]["integer"] == [1]

    def test_non_finite_floats_render_as_text(self, client):
        response = client.post("/api/v1/run", json={"program": "nan inf"})
        assert response.status_code == 200
        assert response.json()["stacks"]["float"] == ["inf", "nan"]


@pytest.mark.skipif(not HAS_FASTAPI, reason="FastAPI not available")
class TestOptionsEndpoint:
    """Tests for /api/v1/options/validate endpoint."""

    def test_valid_config(self, client, sample_config):
        response = client.post("/api/v1/options/validate", json={"config": sample_config})
        assert response.status_code == 200
        data = response.json()
        assert data["valid"] is True
        assert data["options"]["eval_push_limit"] == 250
        assert data["errors"] == []

    def test_empty_config_is_defaults(self, client):
        data = client.post("/api/v1/options/validate", json={}).json()
        assert data["valid"] is True
        assert data["options"]["random_seed"] == 0

    def test_invalid_config(self, client):
        response = client.post("/api/v1/options/validate", json={"config": "evalpush-limit foo"})
        data = response.json()
        assert data["valid"] is False
        assert data["errors"] == ["could not parse \"foo\" as integer"]
