"""
Tests for app-level endpoints and the error envelope.
"""
import pytest
from fastapi.testclient import TestClient

from marketplace.dependencies import get_user_service
from marketplace.main import create_app
from marketplace.services.sqlite_store import SQLiteDocumentDatabase


class ExplodingUserService:
    def __init__(self, error):
        self.error = error

    def get_all_users(self, params, additional_filter=None):
        raise self.error


class TestRoot:
    """Tests for / and /health."""

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Marketplace API"
        assert data["endpoints"]["users"] == "/api/v1/users"

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"]["collections"] == {
            "bookings": 10,
            "services": 12,
            "users": 25,
            "vendors": 6,
        }

    def test_response_headers(self, client, base_url):
        response = client.get(f"{base_url}/vendors")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert len(response.headers["X-Request-ID"]) == 8

    def test_unknown_route(self, client, base_url):
        assert client.get(f"{base_url}/invoices").status_code == 404


class TestStoreFailures:
    """A failing store surfaces as 503, never as an empty page."""

    @pytest.fixture
    def broken_client(self, tmp_path):
        database = SQLiteDocumentDatabase(tmp_path / "no-such-dir" / "marketplace.db")
        # no context manager: startup checks would fail on the same store
        return TestClient(create_app(database, rate_limit="1000/minute"))

    def test_list_returns_503(self, broken_client, base_url):
        response = broken_client.get(f"{base_url}/users")
        assert response.status_code == 503
        assert response.json() == {
            "error": {
                "code": "DB_UNAVAILABLE",
                "message": "Database temporarily unavailable. Please retry.",
            }
        }

    def test_stats_returns_503(self, broken_client, base_url):
        assert broken_client.get(f"{base_url}/users/stats").status_code == 503

    def test_health_reports_unavailable(self, broken_client):
        response = broken_client.get("/health")
        assert response.status_code == 503
        assert response.json()["status"] == "unavailable"


class TestErrorEnvelope:
    """Unexpected exceptions still use the error envelope."""

    def _client_with(self, database, error):
        app = create_app(database, rate_limit="1000/minute")
        app.dependency_overrides[get_user_service] = lambda: ExplodingUserService(error)
        return TestClient(app, raise_server_exceptions=False)

    def test_value_error_is_422(self, database, base_url):
        response = self._client_with(database, ValueError("bad value")).get(f"{base_url}/users")
        assert response.status_code == 422
        assert response.json() == {"error": {"code": "INVALID_INPUT", "message": "bad value"}}

    def test_unhandled_error_is_500(self, database, base_url):
        response = self._client_with(database, RuntimeError("boom")).get(f"{base_url}/users")
        assert response.status_code == 500
        body = response.json()
        assert body["error"]["code"] == "INTERNAL_ERROR"
        assert "boom" not in response.text


class TestSchemalessRecords:
    """Sparse and irregular records are served as stored."""

    @pytest.fixture
    def irregular_client(self, tmp_path):
        database = SQLiteDocumentDatabase(tmp_path / "irregular.db")
        database.initialize()
        database.collection("users").insert_many([
            {"id": "sparse", "createdAt": "2025-01-01T00:00:00+00:00"},
            {
                "id": "odd",
                "fullName": "Odd Record",
                "tier": "DIAMOND",
                "walletBalance": None,
                "createdAt": "not a date",
                "nickname": "oddball",
                "passwordHash": "$2b$10$secret",
            },
        ])
        database.collection("vendors").insert({"id": "v1", "jobsDone": "many", "workingHours": "weekdays"})
        with TestClient(create_app(database, rate_limit="1000/minute")) as client:
            yield client

    def test_list_keeps_irregular_fields(self, irregular_client, base_url):
        response = irregular_client.get(f"{base_url}/users", params={"sort": "id", "order": "asc"})
        assert response.status_code == 200
        odd, sparse = response.json()["data"]
        assert odd["tier"] == "DIAMOND"
        assert odd["walletBalance"] is None
        assert odd["createdAt"] == "not a date"
        assert odd["nickname"] == "oddball"
        assert "passwordHash" not in odd
        assert sparse == {"id": "sparse", "createdAt": "2025-01-01T00:00:00+00:00"}

    def test_detail_keeps_irregular_fields(self, irregular_client, base_url):
        response = irregular_client.get(f"{base_url}/vendors/v1")
        assert response.status_code == 200
        vendor = response.json()["data"]
        assert vendor["jobsDone"] == "many"
        assert vendor["workingHours"] == "weekdays"


class TestRateLimiting:
    """Per-client rate limit."""

    def test_limit_exceeded(self, database, base_url):
        client = TestClient(create_app(database, rate_limit="2/minute"))
        assert client.get(f"{base_url}/vendors").status_code == 200
        assert client.get(f"{base_url}/vendors").status_code == 200
        assert client.get(f"{base_url}/vendors").status_code == 429


class TestOpenAPI:
    """Schema generation covers the response envelopes."""

    def test_schema(self, client):
        response = client.get("/openapi.json")
        assert response.status_code == 200
        schema = response.json()
        assert "/api/v1/users/{user_id}" in schema["paths"]
        assert "ErrorResponse" in schema["components"]["schemas"]

    def test_list_response_documented(self, client):
        schema = client.get("/openapi.json").json()
        ok = schema["paths"]["/api/v1/users"]["get"]["responses"]["200"]
        assert "$ref" in ok["content"]["application/json"]["schema"]
        assert "UserItem" in schema["components"]["schemas"]
