"""Unit tests for the resolve, health and metrics endpoints."""

from pathlib import Path
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from intent_resolver.api.app import create_app
from intent_resolver.api.dependencies import get_dispatcher
from intent_resolver.api.routes import register_routes
from intent_resolver.resolution import Dispatcher


@pytest.fixture
def client(gateway: AsyncMock) -> TestClient:
    """Test app resolving against the profile store double."""
    app = FastAPI()
    register_routes(app)
    app.dependency_overrides[get_dispatcher] = lambda: Dispatcher(gateway)
    return TestClient(app)


class TestResolveEndpoint:
    """Tests for POST /database and POST /resolve."""

    @pytest.mark.parametrize("path", ["/database", "/resolve"])
    def test_resolves_message(self, client: TestClient, gateway: AsyncMock, path: str) -> None:
        """Both paths resolve the message in the body."""
        response = client.post(
            path,
            json={
                "message": {
                    "intent": {"name": "database-remove"},
                    "user": {"id": "u1"},
                    "entities": [{"entity": "detail-home"}],
                }
            },
        )

        assert response.status_code == 200
        assert response.json() == {
            "answer": {"content": "Ich habe home gelöscht.", "history": ["intent-resolve"]}
        }
        gateway.remove_detail.assert_awaited_once_with("u1", "home")

    def test_failure_is_still_200(self, client: TestClient) -> None:
        """Failed operations answer with an error field, not an HTTP error."""
        response = client.post("/database", json={"message": {"intent": {"name": "foo"}}})

        assert response.status_code == 200
        body = response.json()
        assert body["error"] == "Operation 'foo' does not exist"
        assert body["answer"]["history"] == ["intent-resolve"]

    def test_empty_body(self, client: TestClient) -> None:
        response = client.post("/database", content=b"")

        assert response.status_code == 200
        assert response.json()["error"] == "no message given"

    def test_body_without_envelope(self, client: TestClient, gateway: AsyncMock) -> None:
        """The message must sit under the `message` key."""
        response = client.post("/database", json={"intent": {"name": "database-remove"}})

        assert response.json()["error"] == "no message given"
        assert gateway.mock_calls == []

    def test_non_json_body(self, client: TestClient) -> None:
        response = client.post(
            "/resolve", content=b"not json", headers={"Content-Type": "application/json"}
        )

        assert response.json() == {
            "error": "no message given",
            "answer": {"content": "Das kann ich irgendwie nicht.", "history": ["intent-resolve"]},
        }


class TestHealthEndpoints:
    """Tests for /health and /metrics."""

    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_metrics(self, client: TestClient) -> None:
        client.post("/database", json={"message": {"intent": {"name": "foo"}}})

        response = client.get("/metrics")

        assert response.status_code == 200
        assert "intent_resolver_resolutions_total" in response.text


class TestCreateApp:
    """Tests for the application factory."""

    def test_app_uses_configuration(
        self,
        test_config_dir: Path,
        mock_toml_files,
        monkeypatch: pytest.MonkeyPatch,
        gateway: AsyncMock,
    ) -> None:
        """The factory reads TOML config and serves the configured service name."""
        mock_toml_files({
            "default.toml": (
                "app_name = 'resolver-test'\n"
                "[observability.logging]\nformat = 'console'\n"
            )
        })
        monkeypatch.setenv("INTENT_RESOLVER_CONFIG_DIR", str(test_config_dir))
        monkeypatch.setenv("INTENT_RESOLVER_ENV", "nonexistent")

        app = create_app()
        app.dependency_overrides[get_dispatcher] = lambda: Dispatcher(gateway)

        with TestClient(app) as client:
            assert client.get("/health").json()["service"] == "resolver-test"
            assert client.post("/resolve", json={}).json()["error"] == "no message given"
