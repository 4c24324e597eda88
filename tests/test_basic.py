"""
Basic application tests.

Validates that the FastAPI app starts correctly, the health endpoint
responds, and cross-cutting middleware and error handling are wired.
"""

import logging

from fastapi.testclient import TestClient
from sqlalchemy import create_engine

from tradedesk.interfaces.dependencies import get_engine
from tradedesk.main import app, create_app
from tradedesk.shared.logging import configure_logging
from tradedesk.shared.security.headers import SECURE_HEADERS

client = TestClient(app)


class TestHealthEndpoint:
    """Tests for the health check endpoint."""

    def test_health_returns_200(self) -> None:
        """Health endpoint must return HTTP 200 with status ok."""
        response = client.get("/api/v1/health")
        assert response.status_code == 200

    def test_health_response_body(self) -> None:
        """Health endpoint must return status and version fields."""
        body = client.get("/api/v1/health").json()
        assert body["status"] == "ok"
        assert "version" in body
        assert body["database"] == "ok"

    def test_unreachable_database_is_degraded(self, tmp_path) -> None:
        """A database that cannot be opened turns the check into a 503."""
        degraded_app = create_app()
        broken = create_engine(f"sqlite:///{tmp_path / 'missing' / 'db.sqlite'}")
        degraded_app.dependency_overrides[get_engine] = lambda: broken

        response = TestClient(degraded_app).get("/api/v1/health")

        assert response.status_code == 503
        assert response.json()["status"] == "degraded"
        assert response.json()["database"] == "unavailable"


class TestConfigureLogging:
    def test_sql_logging_follows_debug(self) -> None:
        configure_logging("INFO", debug=True)
        assert logging.getLogger("sqlalchemy.engine").level == logging.INFO

        configure_logging("INFO")
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
        assert logging.getLogger("passlib").level == logging.ERROR


class TestSecurityHeaders:
    """Every response carries the secure headers."""

    def test_headers_present(self) -> None:
        response = client.get("/api/v1/health")
        for name, value in SECURE_HEADERS.items():
            assert response.headers[name] == value

    def test_headers_on_errors(self) -> None:
        response = client.get("/api/v1/wallet")
        assert response.status_code == 401
        assert response.headers["Cache-Control"] == "no-store"


class TestUnexpectedErrors:
    """Unhandled exceptions become an opaque 500."""

    def test_internals_not_exposed(self) -> None:
        failing_app = create_app()

        @failing_app.get("/boom")
        def boom() -> None:
            raise RuntimeError("database password is hunter2")

        response = TestClient(failing_app, raise_server_exceptions=False).get("/boom")

        assert response.status_code == 500
        assert response.json() == {
            "error": "internal_error",
            "detail": "Internal server error",
        }
        assert "hunter2" not in response.text
