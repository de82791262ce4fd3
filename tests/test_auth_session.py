"""
Tests for two-tier session resolution and the auth dependencies.
"""
import logging

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from kams_pos import config
from kams_pos.auth import AuthResult, resolve_auth
from kams_pos.models import Role

from conftest import OTHER_STORE_ID, OTHER_STORE_TOKEN, STORE_ID, STORE_TOKEN


class TestSessionEndpoint:
    """GET /api/auth/session reports both tiers and never answers 401."""

    def test_no_cookies(self, client):
        resp = client.get("/api/auth/session")
        assert resp.status_code == 200
        assert resp.json() == {
            "storeAccountId": None,
            "user": None,
            "isFullyAuthenticated": False,
        }

    def test_store_session_only(self, store_client):
        resp = store_client.get("/api/auth/session")
        data = resp.json()
        assert data["storeAccountId"] == STORE_ID
        assert data["user"] is None
        assert data["isFullyAuthenticated"] is False

    def test_fully_authenticated(self, admin_client, admin):
        data = admin_client.get("/api/auth/session").json()
        assert data["storeAccountId"] == STORE_ID
        assert data["user"]["id"] == admin.id
        assert data["user"]["name"] == "Alice Admin"
        assert data["user"]["role"] == "ADMIN"
        assert data["isFullyAuthenticated"] is True

    def test_session_user_never_exposes_pin(self, admin_client):
        user = admin_client.get("/api/auth/session").json()["user"]
        assert "pin" not in user

    def test_employee_cookie_ignored_without_store_session(self, app, admin):
        """The employee cookie alone authenticates nothing."""
        with TestClient(app) as c:
            c.cookies.set(config.EMPLOYEE_COOKIE_NAME, admin.id)
            data = c.get("/api/auth/session").json()
        assert data["storeAccountId"] is None
        assert data["user"] is None

    def test_unknown_store_token(self, app, admin):
        with TestClient(app) as c:
            c.cookies.set(config.STORE_SESSION_COOKIE, "expired-token")
            c.cookies.set(config.EMPLOYEE_COOKIE_NAME, admin.id)
            data = c.get("/api/auth/session").json()
        assert data["storeAccountId"] is None
        assert data["isFullyAuthenticated"] is False

    def test_employee_of_other_store_ignored(self, app, make_employee):
        other = make_employee(name="Elsewhere", store_account_id=OTHER_STORE_ID)
        with TestClient(app) as c:
            c.cookies.set(config.STORE_SESSION_COOKIE, STORE_TOKEN)
            c.cookies.set(config.EMPLOYEE_COOKIE_NAME, other.id)
            data = c.get("/api/auth/session").json()
        assert data["storeAccountId"] == STORE_ID
        assert data["user"] is None

    def test_inactive_employee_ignored(self, app, make_employee):
        gone = make_employee(name="Former", is_active=False)
        with TestClient(app) as c:
            c.cookies.set(config.STORE_SESSION_COOKIE, STORE_TOKEN)
            c.cookies.set(config.EMPLOYEE_COOKIE_NAME, gone.id)
            data = c.get("/api/auth/session").json()
        assert data["storeAccountId"] == STORE_ID
        assert data["user"] is None

    def test_unknown_employee_id_ignored(self, app):
        with TestClient(app) as c:
            c.cookies.set(config.STORE_SESSION_COOKIE, STORE_TOKEN)
            c.cookies.set(config.EMPLOYEE_COOKIE_NAME, "no-such-employee")
            resp = c.get("/api/auth/session")
        assert resp.status_code == 200
        assert resp.json()["user"] is None

    def test_resolution_does_not_write_cookies(self, admin_client):
        resp = admin_client.get("/api/auth/session")
        assert "set-cookie" not in resp.headers


class TestResolveAuth:
    """Unit tests for resolve_auth with a stand-in request."""

    class _Request:
        def __init__(self, cookies):
            self.cookies = cookies

    def test_database_failure_treated_as_no_employee(self, identity, caplog):
        class BrokenSession:
            rolled_back = False

            def query(self, *args):
                raise OperationalError("SELECT", {}, Exception("database is locked"))

            def rollback(self):
                self.rolled_back = True

        db = BrokenSession()
        request = self._Request({
            config.STORE_SESSION_COOKIE: STORE_TOKEN,
            config.EMPLOYEE_COOKIE_NAME: "emp-1",
        })

        with caplog.at_level(logging.ERROR, logger="kams_pos.auth"):
            result = resolve_auth(request, db, identity)

        assert result.store_account_id == STORE_ID
        assert result.employee is None
        assert db.rolled_back is True
        assert any("Employee lookup failed" in r.message for r in caplog.records)

    def test_no_store_cookie_skips_database(self, identity):
        class ExplodingSession:
            def query(self, *args):
                raise AssertionError("employee lookup must not run")

        request = self._Request({config.EMPLOYEE_COOKIE_NAME: "emp-1"})
        result = resolve_auth(request, ExplodingSession(), identity)
        assert result == AuthResult()

    def test_other_store_token_resolves_other_store(self, identity, db_session):
        request = self._Request({config.STORE_SESSION_COOKIE: OTHER_STORE_TOKEN})
        result = resolve_auth(request, db_session, identity)
        assert result.store_account_id == OTHER_STORE_ID
        assert result.is_fully_authenticated is False


class TestAccessLevels:
    """require_store_session / require_employee / require_admin."""

    def test_store_level_endpoint_rejects_anonymous(self, client):
        resp = client.get("/api/users")
        assert resp.status_code == 401
        assert resp.json()["detail"] == "Unauthorized"

    def test_store_level_endpoint_accepts_store_session(self, store_client):
        assert store_client.get("/api/users").status_code == 200

    def test_employee_level_endpoint_rejects_store_only(self, store_client):
        assert store_client.get("/api/menu").status_code == 401

    def test_employee_level_endpoint_accepts_cashier(self, cashier_client):
        assert cashier_client.get("/api/menu").status_code == 200

    def test_admin_endpoint_rejects_cashier(self, cashier_client):
        resp = cashier_client.get("/api/analytics")
        assert resp.status_code == 403
        assert resp.json()["detail"] == "Forbidden"

    def test_admin_endpoint_rejects_store_only(self, store_client):
        assert store_client.get("/api/analytics").status_code == 401

    def test_admin_endpoint_accepts_admin(self, admin_client):
        assert admin_client.get("/api/analytics").status_code == 200

    @pytest.mark.parametrize("method,path", [
        ("post", "/api/users"),
        ("post", "/api/menu/categories"),
        ("post", "/api/menu/items"),
        ("post", "/api/menu/modifier-groups"),
        ("post", "/api/menu/modifiers"),
    ])
    def test_cashier_cannot_manage(self, cashier_client, method, path):
        resp = getattr(cashier_client, method)(path, json={"name": "x"})
        assert resp.status_code == 403

    def test_deactivated_employee_loses_access_immediately(self, cashier_client, cashier, db_session):
        assert cashier_client.get("/api/menu").status_code == 200

        cashier.is_active = False
        db_session.commit()

        assert cashier_client.get("/api/menu").status_code == 401

    def test_demoted_admin_loses_admin_access(self, admin_client, admin, make_employee, db_session):
        make_employee(name="Backup Admin", role=Role.ADMIN)
        assert admin_client.get("/api/analytics").status_code == 200

        admin.role = Role.CASHIER.value
        db_session.commit()

        assert admin_client.get("/api/analytics").status_code == 403
