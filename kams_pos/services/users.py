"""
Employee Service for KAMS POS
=============================

Business rules for the employees (till operators) of a store. Routes call
these functions and translate the exceptions below into HTTP responses.

Key Functions:
--------------
- find_active_employee: Scoped lookup used by PIN login
- authenticate_employee: Lookup + bcrypt PIN check
- list_employees: Active employees of one store
- create_employee: Validate, hash PIN, insert
- update_employee: Partial update with the last-admin guard
- deactivate_employee: Soft delete with the self-deletion guard

Store Scoping:
--------------
Every function takes the caller's store_account_id and never touches rows
of another store. A row that exists in another store is reported exactly
like a row that does not exist.

Last-Admin Guard:
-----------------
A store must always keep at least one active ADMIN. Demoting an ADMIN is
done with a single conditional UPDATE:

    UPDATE users SET role = :new_role
     WHERE id = :id AND store_account_id = :store
       AND (role != 'ADMIN' OR EXISTS (
            SELECT 1 FROM users other
             WHERE other.store_account_id = :store
               AND other.role = 'ADMIN' AND other.is_active
               AND other.id != :id))

so two admins demoting each other at the same moment cannot both succeed
on databases that serialize the writes. Zero affected rows means the guard
refused the change.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import or_, select, update
from sqlalchemy.orm import Session, aliased

from .. import config
from ..auth import hash_pin, verify_pin
from ..models import Role, User

logger = logging.getLogger(__name__)


# =============================================================================
# Exceptions
# =============================================================================

class EmployeeError(Exception):
    """Base class for employee rule violations."""
    message = "Employee request rejected"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class EmployeeNotFoundError(EmployeeError):
    message = "Employee not found"


class InvalidEmployeeInputError(EmployeeError):
    message = "Invalid input. Name and PIN (min 4 digits) are required."


class InvalidPinError(EmployeeError):
    message = "Invalid PIN"


class LastAdminError(EmployeeError):
    message = "Cannot change role. You are the only admin."


class SelfDeactivationError(EmployeeError):
    message = "Cannot delete your own account"


# =============================================================================
# Lookups
# =============================================================================

def find_active_employee(db: Session, store_account_id: str, employee_id: str) -> Optional[User]:
    """Return the employee only if it is active and owned by the given store."""
    return (
        db.query(User)
        .filter(
            User.id == employee_id,
            User.store_account_id == store_account_id,
            User.is_active.is_(True),
        )
        .first()
    )


def list_employees(db: Session, store_account_id: str) -> List[User]:
    """Active employees of a store, ordered by name."""
    return (
        db.query(User)
        .filter(User.store_account_id == store_account_id, User.is_active.is_(True))
        .order_by(User.name)
        .all()
    )


def authenticate_employee(db: Session, store_account_id: str, employee_id: str, pin: str) -> User:
    """
    Check an employee's PIN.

    Raises:
        EmployeeNotFoundError: Unknown, inactive, or owned by another store.
        InvalidPinError: The PIN does not match.
    """
    employee = find_active_employee(db, store_account_id, employee_id)
    if employee is None:
        raise EmployeeNotFoundError()

    if not verify_pin(pin, employee.pin):
        logger.info("PIN mismatch for employee %s", employee.id)
        raise InvalidPinError()

    return employee


# =============================================================================
# Mutations
# =============================================================================

def _valid_pin(pin: Optional[str]) -> bool:
    return bool(pin) and config.PIN_MIN_LENGTH <= len(pin) <= config.PIN_MAX_LENGTH


def create_employee(
    db: Session,
    store_account_id: str,
    name: Optional[str],
    pin: Optional[str],
    role: Role = Role.CASHIER,
    email: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> User:
    """Create an active employee for the store with a hashed PIN."""
    name = (name or "").strip()
    if not name or not _valid_pin(pin):
        raise InvalidEmployeeInputError()

    employee = User(
        name=name,
        role=Role(role).value,
        pin=hash_pin(pin),
        email=email,
        extra_metadata=metadata,
        store_account_id=store_account_id,
        is_active=True,
    )
    db.add(employee)
    db.commit()
    db.refresh(employee)

    logger.info("Created employee: %s (id=%s, role=%s)", employee.name, employee.id, employee.role)
    return employee


def _change_role(db: Session, store_account_id: str, employee: User, new_role: Role) -> None:
    """Apply a role change, refusing to remove the store's last active admin."""
    if new_role == Role.ADMIN:
        employee.role = new_role.value
        return

    other = aliased(User)
    another_admin = (
        select(other.id)
        .where(
            other.store_account_id == store_account_id,
            other.role == Role.ADMIN.value,
            other.is_active.is_(True),
            other.id != employee.id,
        )
        .exists()
    )
    result = db.execute(
        update(User)
        .where(
            User.id == employee.id,
            User.store_account_id == store_account_id,
            or_(User.role != Role.ADMIN.value, another_admin),
        )
        .values(role=new_role.value)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        db.rollback()
        logger.warning("Refused to demote last admin %s of store %s", employee.id, store_account_id)
        raise LastAdminError()

    db.expire(employee, ["role"])


def update_employee(
    db: Session,
    store_account_id: str,
    employee_id: str,
    changes: Dict[str, Any],
) -> User:
    """
    Apply a partial update to an employee of the store.

    Args:
        changes: Only the keys present are applied (name, role, email, pin,
                 metadata).

    Raises:
        EmployeeNotFoundError: Not an employee of this store.
        InvalidEmployeeInputError: Blank name or PIN outside the allowed length.
        LastAdminError: The change would leave the store without an admin.
    """
    employee = (
        db.query(User)
        .filter(User.id == employee_id, User.store_account_id == store_account_id)
        .first()
    )
    if employee is None:
        raise EmployeeNotFoundError()

    name = changes.get("name")
    if name is not None and not name.strip():
        raise InvalidEmployeeInputError()
    if changes.get("pin") is not None and not _valid_pin(changes["pin"]):
        raise InvalidEmployeeInputError()

    # Role first so a refused demotion leaves every other field untouched
    if changes.get("role") is not None:
        _change_role(db, store_account_id, employee, Role(changes["role"]))

    if name is not None:
        employee.name = name.strip()

    if changes.get("pin") is not None:
        employee.pin = hash_pin(changes["pin"])

    if "email" in changes:
        employee.email = changes["email"]

    if "metadata" in changes:
        employee.extra_metadata = changes["metadata"]

    db.commit()
    db.refresh(employee)

    logger.info("Updated employee %s (fields=%s)", employee.id, ", ".join(sorted(changes)))
    return employee


def deactivate_employee(
    db: Session,
    store_account_id: str,
    employee_id: str,
    acting_employee_id: str,
) -> None:
    """
    Soft-delete an employee. Rows are never removed so orders keep their
    placed_by reference.

    Raises:
        SelfDeactivationError: The caller tried to deactivate themselves.
        EmployeeNotFoundError: Not an active employee of this store.
    """
    if employee_id == acting_employee_id:
        raise SelfDeactivationError()

    employee = find_active_employee(db, store_account_id, employee_id)
    if employee is None:
        raise EmployeeNotFoundError()

    employee.is_active = False
    db.commit()

    logger.info("Deactivated employee %s", employee_id)
