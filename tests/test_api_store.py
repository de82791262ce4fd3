"""
Tests for the store profile, health check and request tracing.
"""
from fastapi.testclient import TestClient

from kams_pos import __version__, config
from kams_pos.models import Store

from conftest import OTHER_STORE_TOKEN, STORE_ID


class TestStoreProfile:
    """GET/POST /api/store"""

    def test_no_profile_yet(self, store_client):
        resp = store_client.get("/api/store")
        assert resp.status_code == 200
        assert resp.json() is None

    def test_create_then_read(self, store_client):
        resp = store_client.post("/api/store", json={
            "name": " Kam's Pizzeria ",
            "street": "12 Oven Rd",
            "city": "Springfield",
            "phone": "555-0100",
            "logoUrl": "",
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["name"] == "Kam's Pizzeria"
        assert data["ownerId"] == STORE_ID
        assert data["logoUrl"] is None

        assert store_client.get("/api/store").json()["id"] == data["id"]

    def test_post_again_replaces(self, store_client, db_session):
        first = store_client.post("/api/store", json={"name": "First", "city": "Springfield"}).json()
        second = store_client.post("/api/store", json={"name": "Second"}).json()

        assert second["id"] == first["id"]
        assert second["name"] == "Second"
        assert second["city"] is None
        assert db_session.query(Store).count() == 1

    def test_name_required(self, store_client):
        resp = store_client.post("/api/store", json={"city": "Springfield"})
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Store name is required"

    def test_profiles_are_per_store(self, app, store_client):
        store_client.post("/api/store", json={"name": "Mine"})
        with TestClient(app) as other:
            other.cookies.set(config.STORE_SESSION_COOKIE, OTHER_STORE_TOKEN)
            assert other.get("/api/store").json() is None

    def test_requires_store_session(self, client):
        assert client.get("/api/store").status_code == 401

    def test_employee_not_required(self, store_client):
        """Onboarding fills in the profile before any employee exists."""
        assert store_client.post("/api/store", json={"name": "New Shop"}).status_code == 200


class TestHealthAndTracing:
    """Application-level endpoints and middleware."""

    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "healthy", "version": __version__}

    def test_request_id_generated(self, client):
        resp = client.get("/health")
        assert resp.headers.get("X-Request-ID")

    def test_request_id_propagated(self, client):
        resp = client.get("/health", headers={"X-Request-ID": "trace-123"})
        assert resp.headers["X-Request-ID"] == "trace-123"
