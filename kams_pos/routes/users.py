"""
Employee Routes for KAMS POS
============================

Endpoints:
----------
- GET /users: Active employees of the current store (store session only,
  so the profile picker can show them before anyone has logged in)
- POST /users: Create an employee (admin)
- PATCH /users/{user_id}: Update an employee (admin)
- DELETE /users/{user_id}: Deactivate an employee (admin)

Safety Checks:
--------------
- An admin cannot deactivate their own account.
- The last active admin of a store cannot be demoted.

Both are enforced in services/users.py and surface here as 400 responses.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ..auth import AuthResult, require_admin, require_store_session
from ..db import get_db
from ..models import Role
from ..schemas.common import SuccessResponse
from ..schemas.users import EmployeeCreate, EmployeeOut, EmployeeUpdate, serialize_employee
from ..services.users import (
    EmployeeError,
    EmployeeNotFoundError,
    create_employee,
    deactivate_employee,
    list_employees,
    update_employee,
)

logger = logging.getLogger(__name__)

users_router = APIRouter(prefix="/users", tags=["Employees"])


def _http_error(error: EmployeeError) -> HTTPException:
    if isinstance(error, EmployeeNotFoundError):
        return HTTPException(status_code=404, detail=error.message)
    return HTTPException(status_code=400, detail=error.message)


@users_router.get("", response_model=List[EmployeeOut])
def get_users(
    auth: AuthResult = Depends(require_store_session),
    db: Session = Depends(get_db),
) -> List[EmployeeOut]:
    """List the store's active employees, by name."""
    return [serialize_employee(u) for u in list_employees(db, auth.store_account_id)]


@users_router.post("", response_model=EmployeeOut, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: EmployeeCreate,
    auth: AuthResult = Depends(require_admin),
    db: Session = Depends(get_db),
) -> EmployeeOut:
    """Create an employee. Role defaults to CASHIER."""
    try:
        employee = create_employee(
            db,
            auth.store_account_id,
            name=payload.name,
            pin=payload.pin,
            role=payload.role or Role.CASHIER,
            email=payload.email,
            metadata=payload.metadata,
        )
    except EmployeeError as e:
        raise _http_error(e)
    return serialize_employee(employee)


@users_router.patch("/{user_id}", response_model=EmployeeOut)
def update_user(
    user_id: str,
    payload: EmployeeUpdate,
    auth: AuthResult = Depends(require_admin),
    db: Session = Depends(get_db),
) -> EmployeeOut:
    """Partially update an employee of the current store."""
    try:
        employee = update_employee(
            db,
            auth.store_account_id,
            user_id,
            payload.model_dump(exclude_unset=True),
        )
    except EmployeeError as e:
        raise _http_error(e)
    return serialize_employee(employee)


@users_router.delete("/{user_id}", response_model=SuccessResponse)
def delete_user(
    user_id: str,
    auth: AuthResult = Depends(require_admin),
    db: Session = Depends(get_db),
) -> SuccessResponse:
    """Deactivate an employee. The row is kept for order history."""
    try:
        deactivate_employee(db, auth.store_account_id, user_id, acting_employee_id=auth.employee.id)
    except EmployeeError as e:
        raise _http_error(e)
    return SuccessResponse(success=True)
