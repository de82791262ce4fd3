"""
Employee Schemas for KAMS POS
=============================

Employees are the till operators of a store (table `users`). Each one logs in
at the terminal with a PIN once the store itself is signed in.

Endpoint Coverage:
------------------
- GET /api/users: List active employees of the current store
- POST /api/users: Create an employee (admin only)
- PATCH /api/users/{id}: Update an employee (admin only)
- DELETE /api/users/{id}: Deactivate an employee (admin only)

The PIN hash is never part of any response model. Request PINs are accepted
as strings or bare numbers and kept as strings, so leading zeros survive
when the client sends a string.
"""

from typing import Any, Dict, Optional

from pydantic import EmailStr, field_validator

from ..models import Role, User
from .common import CamelModel, blank_to_none, number_to_str


class EmployeeOut(CamelModel):
    """Public view of an employee."""
    id: str
    name: str
    role: Role
    email: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None


class PinUserOut(CamelModel):
    """Till-operator identity returned after PIN login and by the session endpoint."""
    id: str
    name: str
    role: Role
    metadata: Optional[Dict[str, Any]] = None


class EmployeeCreate(CamelModel):
    """
    Request model for creating an employee.

    Name and PIN are optional at the schema level so the route can answer
    with a single 400 message covering both.
    """
    name: Optional[str] = None
    pin: Optional[str] = None
    role: Optional[Role] = None
    email: Optional[EmailStr] = None
    metadata: Optional[Dict[str, Any]] = None

    @field_validator("pin", mode="before")
    @classmethod
    def pin_as_text(cls, value):
        return number_to_str(value)

    @field_validator("email", mode="before")
    @classmethod
    def blank_email(cls, value):
        return blank_to_none(value)


class EmployeeUpdate(CamelModel):
    """Request model for a partial employee update. Only sent fields change."""
    name: Optional[str] = None
    pin: Optional[str] = None
    role: Optional[Role] = None
    email: Optional[EmailStr] = None
    metadata: Optional[Dict[str, Any]] = None

    @field_validator("pin", mode="before")
    @classmethod
    def pin_as_text(cls, value):
        return number_to_str(value)

    @field_validator("email", mode="before")
    @classmethod
    def blank_email(cls, value):
        return blank_to_none(value)


def serialize_employee(user: User) -> EmployeeOut:
    return EmployeeOut(
        id=user.id,
        name=user.name,
        role=user.role,
        email=user.email,
        metadata=user.extra_metadata,
    )


def serialize_pin_user(user: User) -> PinUserOut:
    return PinUserOut(
        id=user.id,
        name=user.name,
        role=user.role,
        metadata=user.extra_metadata,
    )
