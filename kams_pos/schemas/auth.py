"""
Authentication Schemas for KAMS POS
===================================

Request and response bodies for the two authentication tiers:

- Store tier: email/password login against the identity provider
  (/api/auth/store/login, /api/auth/store/signup, /api/auth/store/logout).
- Employee tier: PIN login at the till (/api/auth/verify-pin,
  /api/auth/logout-employee) and first-run admin setup
  (/api/auth/setup-admin).

Older terminals post `userId` instead of `employeeId` to verify-pin; both
are accepted.
"""

from typing import Optional

from pydantic import AliasChoices, EmailStr, Field, field_validator

from .common import CamelModel, blank_to_none, number_to_str
from .users import EmployeeOut, PinUserOut


class VerifyPinRequest(CamelModel):
    employee_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("employeeId", "userId", "employee_id"),
    )
    pin: Optional[str] = None

    @field_validator("pin", mode="before")
    @classmethod
    def pin_as_text(cls, value):
        return number_to_str(value)


class VerifyPinResponse(CamelModel):
    success: bool = True
    user: PinUserOut


class StoreCredentials(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None


class StoreLoginResponse(CamelModel):
    success: bool = True
    store_account_id: str


class StoreSignupResponse(CamelModel):
    success: bool = True
    store_account_id: Optional[str] = None
    # False when the provider requires email confirmation before sign-in
    session_created: bool = False


class SessionOut(CamelModel):
    store_account_id: Optional[str] = None
    user: Optional[PinUserOut] = None
    is_fully_authenticated: bool = False


class SetupAdminRequest(CamelModel):
    name: Optional[str] = None
    pin: Optional[str] = None
    email: Optional[EmailStr] = None

    @field_validator("pin", mode="before")
    @classmethod
    def pin_as_text(cls, value):
        return number_to_str(value)

    @field_validator("email", mode="before")
    @classmethod
    def blank_email(cls, value):
        return blank_to_none(value)


class SetupAdminResponse(CamelModel):
    success: bool = True
    user: EmployeeOut
