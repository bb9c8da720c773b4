"""
Tests for the bearer-token gate in front of /kv routes.

Every rejection must be a 401, whether or not the requested key exists.
"""

import pytest
from fastapi.testclient import TestClient

from bucketkv.auth import parse_bearer
from bucketkv.errors import AuthError


class TestParseBearer:
    """Test suite for Authorization header parsing."""

    def test_valid_header(self):
        assert parse_bearer("Bearer abc-123") == "abc-123"

    @pytest.mark.parametrize("header", [None, ""])
    def test_missing_header(self, header):
        with pytest.raises(AuthError, match="Authorization header required"):
            parse_bearer(header)

    @pytest.mark.parametrize(
        "header",
        [
            "abc-123",
            "Basic abc-123",
            "bearer abc-123",
            "Bearer",
            "Bearer ",
            "Bearer abc 123",
            "Bearer  abc-123",
        ],
    )
    def test_malformed_header(self, header):
        with pytest.raises(AuthError, match="format must be Bearer"):
            parse_bearer(header)


class TestAuthGate:
    """Test suite for authentication on the HTTP surface."""

    @pytest.fixture
    def stored_key(self, app_client: TestClient, make_bucket, auth_headers):
        bucket = make_bucket()
        response = app_client.post("/kv/secret", content=b"v", headers=auth_headers(bucket["token"]))
        assert response.status_code == 201
        return "secret"

    @pytest.mark.parametrize("method", ["get", "post", "delete"])
    def test_missing_header(self, app_client: TestClient, stored_key, method):
        response = app_client.request(method.upper(), f"/kv/{stored_key}")

        assert response.status_code == 401
        assert response.json() == {"detail": "Authorization header required"}
        assert response.headers["WWW-Authenticate"] == "Bearer"

    @pytest.mark.parametrize("method", ["get", "post", "delete"])
    def test_wrong_scheme(self, app_client: TestClient, stored_key, method):
        response = app_client.request(
            method.upper(), f"/kv/{stored_key}", headers={"Authorization": "Token abc"}
        )

        assert response.status_code == 401

    @pytest.mark.parametrize("method", ["get", "post", "delete"])
    def test_unknown_token(self, app_client: TestClient, stored_key, auth_headers, method):
        response = app_client.request(
            method.upper(), f"/kv/{stored_key}", headers=auth_headers("no-such-token")
        )

        assert response.status_code == 401
        assert response.json() == {"detail": "Invalid token"}

    def test_unknown_token_on_missing_key(self, app_client: TestClient, auth_headers):
        response = app_client.get("/kv/nothing-here", headers=auth_headers("no-such-token"))

        assert response.status_code == 401

    def test_bucket_id_is_not_a_token(self, app_client: TestClient, make_bucket, auth_headers):
        bucket = make_bucket()

        response = app_client.get("/kv/k", headers=auth_headers(bucket["bucket_id"]))

        assert response.status_code == 401
