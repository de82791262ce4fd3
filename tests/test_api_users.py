"""
Tests for employee management (/api/users) and the guards in
services/users.py.
"""
import pytest

from kams_pos.auth import verify_pin
from kams_pos.models import Role, User
from kams_pos.services.users import (
    EmployeeNotFoundError,
    LastAdminError,
    SelfDeactivationError,
    deactivate_employee,
    update_employee,
)

from conftest import OTHER_STORE_ID, STORE_ID


class TestListUsers:
    """GET /api/users"""

    def test_lists_active_employees_by_name(self, store_client, make_employee):
        make_employee(name="Zoe")
        make_employee(name="Adam")
        make_employee(name="Gone", is_active=False)
        make_employee(name="Elsewhere", store_account_id=OTHER_STORE_ID)

        resp = store_client.get("/api/users")
        assert resp.status_code == 200
        assert [u["name"] for u in resp.json()] == ["Adam", "Zoe"]

    def test_pin_never_returned(self, store_client, make_employee):
        make_employee(name="Adam", email="adam@pizzeria.test")
        user = store_client.get("/api/users").json()[0]
        assert set(user) == {"id", "name", "role", "email", "metadata"}


class TestCreateUser:
    """POST /api/users"""

    def test_create_defaults_to_cashier(self, admin_client, db_session):
        resp = admin_client.post("/api/users", json={"name": "  New Hire ", "pin": "5678"})
        assert resp.status_code == 201
        data = resp.json()
        assert data["name"] == "New Hire"
        assert data["role"] == "CASHIER"

        row = db_session.get(User, data["id"])
        assert row.store_account_id == STORE_ID
        assert row.is_active is True
        assert verify_pin("5678", row.pin)

    def test_create_admin_with_metadata(self, admin_client):
        resp = admin_client.post("/api/users", json={
            "name": "Manager",
            "pin": "987654",
            "role": "ADMIN",
            "email": "manager@pizzeria.test",
            "metadata": {"shift": "evening"},
        })
        assert resp.status_code == 201
        data = resp.json()
        assert data["role"] == "ADMIN"
        assert data["metadata"] == {"shift": "evening"}

    @pytest.mark.parametrize("body", [
        {"name": "No Pin"},
        {"pin": "1234"},
        {"name": "   ", "pin": "1234"},
        {"name": "Short", "pin": "123"},
        {"name": "Long", "pin": "1" * 80},
    ])
    def test_invalid_input(self, admin_client, body):
        resp = admin_client.post("/api/users", json=body)
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Invalid input. Name and PIN (min 4 digits) are required."

    def test_invalid_role_rejected(self, admin_client):
        resp = admin_client.post("/api/users", json={"name": "X", "pin": "1234", "role": "OWNER"})
        assert resp.status_code == 422


class TestUpdateUser:
    """PATCH /api/users/{id}"""

    def test_partial_update(self, admin_client, cashier, db_session):
        resp = admin_client.patch(f"/api/users/{cashier.id}", json={"name": "Carla"})
        assert resp.status_code == 200
        assert resp.json()["name"] == "Carla"
        assert resp.json()["role"] == "CASHIER"

        db_session.expire_all()
        row = db_session.get(User, cashier.id)
        assert verify_pin("2222", row.pin)

    def test_change_pin(self, admin_client, cashier, db_session):
        admin_client.patch(f"/api/users/{cashier.id}", json={"pin": "8765"})
        db_session.expire_all()
        row = db_session.get(User, cashier.id)
        assert verify_pin("8765", row.pin)
        assert not verify_pin("2222", row.pin)

    def test_short_pin_rejected(self, admin_client, cashier):
        resp = admin_client.patch(f"/api/users/{cashier.id}", json={"pin": "12"})
        assert resp.status_code == 400

    def test_long_pin_rejected(self, admin_client, cashier, db_session):
        resp = admin_client.patch(f"/api/users/{cashier.id}", json={"pin": "9" * 80})
        assert resp.status_code == 400
        db_session.expire_all()
        assert verify_pin("2222", db_session.get(User, cashier.id).pin)

    def test_promote_to_admin(self, admin_client, cashier):
        resp = admin_client.patch(f"/api/users/{cashier.id}", json={"role": "ADMIN"})
        assert resp.status_code == 200
        assert resp.json()["role"] == "ADMIN"

    def test_last_admin_cannot_demote_self(self, admin_client, admin, db_session):
        resp = admin_client.patch(f"/api/users/{admin.id}", json={"role": "CASHIER", "name": "Renamed"})
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Cannot change role. You are the only admin."

        db_session.expire_all()
        row = db_session.get(User, admin.id)
        assert row.role == Role.ADMIN.value
        assert row.name == "Alice Admin"

    def test_demote_with_another_admin(self, admin_client, admin, make_employee):
        make_employee(name="Second Admin", role=Role.ADMIN)
        resp = admin_client.patch(f"/api/users/{admin.id}", json={"role": "CASHIER"})
        assert resp.status_code == 200
        assert resp.json()["role"] == "CASHIER"

    def test_inactive_admin_does_not_count(self, admin_client, admin, make_employee):
        make_employee(name="Retired Admin", role=Role.ADMIN, is_active=False)
        resp = admin_client.patch(f"/api/users/{admin.id}", json={"role": "CASHIER"})
        assert resp.status_code == 400

    def test_admin_of_other_store_does_not_count(self, admin_client, admin, make_employee):
        make_employee(name="Other Admin", role=Role.ADMIN, store_account_id=OTHER_STORE_ID)
        resp = admin_client.patch(f"/api/users/{admin.id}", json={"role": "CASHIER"})
        assert resp.status_code == 400

    def test_other_store_employee_not_found(self, admin_client, make_employee):
        other = make_employee(name="Elsewhere", store_account_id=OTHER_STORE_ID)
        resp = admin_client.patch(f"/api/users/{other.id}", json={"name": "Hijacked"})
        assert resp.status_code == 404

    def test_unknown_employee(self, admin_client):
        assert admin_client.patch("/api/users/nope", json={"name": "X"}).status_code == 404


class TestDeleteUser:
    """DELETE /api/users/{id}"""

    def test_soft_delete(self, admin_client, cashier, db_session):
        resp = admin_client.delete(f"/api/users/{cashier.id}")
        assert resp.status_code == 200
        assert resp.json() == {"success": True}

        db_session.expire_all()
        row = db_session.get(User, cashier.id)
        assert row is not None
        assert row.is_active is False

    def test_deleted_employee_disappears_from_list(self, admin_client, cashier):
        admin_client.delete(f"/api/users/{cashier.id}")
        names = [u["name"] for u in admin_client.get("/api/users").json()]
        assert "Carl Cashier" not in names

    def test_cannot_delete_self(self, admin_client, admin):
        resp = admin_client.delete(f"/api/users/{admin.id}")
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Cannot delete your own account"

    def test_other_store_employee_not_found(self, admin_client, make_employee):
        other = make_employee(name="Elsewhere", store_account_id=OTHER_STORE_ID)
        assert admin_client.delete(f"/api/users/{other.id}").status_code == 404

    def test_already_deleted_not_found(self, admin_client, make_employee):
        gone = make_employee(name="Gone", is_active=False)
        assert admin_client.delete(f"/api/users/{gone.id}").status_code == 404


class TestEmployeeService:
    """Direct service calls."""

    def test_self_check_runs_before_lookup(self, db_session):
        with pytest.raises(SelfDeactivationError):
            deactivate_employee(db_session, STORE_ID, "emp-1", acting_employee_id="emp-1")

    def test_update_unknown_raises(self, db_session):
        with pytest.raises(EmployeeNotFoundError):
            update_employee(db_session, STORE_ID, "missing", {"name": "X"})

    def test_two_admins_demoting_each_other(self, db_session, make_employee):
        """Only the first demotion can succeed; the store keeps one admin."""
        first = make_employee(name="First", role=Role.ADMIN)
        second = make_employee(name="Second", role=Role.ADMIN)

        update_employee(db_session, STORE_ID, first.id, {"role": Role.CASHIER})
        with pytest.raises(LastAdminError):
            update_employee(db_session, STORE_ID, second.id, {"role": Role.CASHIER})

        admins = (
            db_session.query(User)
            .filter(User.store_account_id == STORE_ID, User.role == Role.ADMIN.value)
            .all()
        )
        assert [a.id for a in admins] == [second.id]
