"""Tests for OAuth authentication and role checks on the endpoints."""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import patch


class TestAuthenticationEndpoints:
    """Test OAuth Authentication on endpoints."""

    def test_health_endpoint_no_auth(self, client: TestClient):
        """GET /health should remain public."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}
        assert response.headers["Access-Control-Allow-Origin"] == "*"

    def test_invalid_token(self, client: TestClient):
        response = client.get("/workouts", headers={"Authorization": "Bearer invalid_token"})
        assert response.status_code == 401
        assert "Bearer" in response.headers["WWW-Authenticate"]

    def test_verify_auth(self, viewer_client: TestClient):
        response = viewer_client.get("/auth/verify")
        assert response.status_code == 200
        assert response.json() == {"status": "authenticated", "username": "test_user"}

    def test_environment(self, viewer_client: TestClient):
        response = viewer_client.get("/environment")
        assert response.status_code == 200
        assert response.json()["environment"] in ("dev", "staging", "prod")

    def test_bad_sub_claim(self, client: TestClient):
        with patch(
            "gymlog.app.oauth.validate_jwt_token", return_value={"sub": "not-a-uuid"}
        ):
            response = client.get(
                "/auth/verify", headers={"Authorization": "Bearer whatever"}
            )
        assert response.status_code == 500


class TestProtectedMutationEndpoints:
    """Test that all mutation endpoints are properly protected."""

    @pytest.mark.parametrize(
        "method,path",
        [
            ("POST", "/import"),
            ("DELETE", "/workouts/2025-03-03"),
            ("PATCH", "/workouts/exercises/20000000-0000-0000-0000-000000000001/link"),
            ("POST", "/progress"),
            ("POST", "/progress/import"),
            ("DELETE", "/progress/30000000-0000-0000-0000-000000000001"),
            ("POST", "/wellness"),
            ("PATCH", "/wellness/1"),
            ("DELETE", "/wellness/1"),
        ],
    )
    def test_mutation_endpoints_require_auth(self, method, path, client: TestClient):
        response = client.request(method, path)
        assert response.status_code == 401
        assert "WWW-Authenticate" in response.headers

    @pytest.mark.parametrize(
        "method,path",
        [
            ("DELETE", "/workouts/2025-03-03"),
            ("DELETE", "/progress/30000000-0000-0000-0000-000000000001"),
            ("DELETE", "/wellness/1"),
        ],
    )
    def test_mutation_endpoints_require_editor_role(
        self, method, path, viewer_client: TestClient
    ):
        response = viewer_client.request(method, path)
        assert response.status_code == 403

    @pytest.mark.parametrize(
        "path",
        [
            "/workouts",
            "/workouts/2025-03-03",
            "/progress",
            "/progress/export",
            "/wellness",
            "/wellness/2025-03-04",
            "/environment",
            "/auth/verify",
        ],
    )
    def test_read_endpoints_require_viewer_auth(self, path, client: TestClient):
        response = client.get(path)
        assert response.status_code == 401
