"""
Authentication Module for KAMS POS
==================================

The POS uses two independent authentication tiers, each carried by its own
cookie:

1. **Store session (outer tier)**: An access token issued by the hosted
   identity provider when the pizzeria signs in with email and password.
   The token is opaque here; it is handed to the provider on every request
   and resolves to a stable store-account id (see identity.py).

2. **Employee session (inner tier)**: Once the terminal is signed in, an
   employee taps their PIN. On success the application sets the
   `kams_pos_employee_id` cookie holding the bare employee id. The id is
   re-validated against the database on every request (exists, active, and
   owned by the current store), so deactivating an employee or signing the
   store out ends the till session immediately. There is no server-side
   session table.

Resolution Rules:
-----------------
- No store session means fully unauthenticated. The employee cookie is not
  even read.
- An employee cookie that is unknown, inactive, or belongs to another store
  is ignored (no employee, store tier still valid). It is not an error.
- A database failure during the employee lookup is logged and treated the
  same way.
- Resolution never writes cookies.

Dependencies:
-------------
    require_store_session  -> 401 unless the store tier resolves
    require_employee       -> 401 unless both tiers resolve
    require_admin          -> require_employee, then 403 unless role is ADMIN

Usage:
------
    from kams_pos.auth import require_admin

    @router.delete("/users/{user_id}")
    def delete_user(user_id: str, auth: AuthResult = Depends(require_admin)):
        ...

PIN Storage:
------------
PINs are hashed with bcrypt (cost from PIN_HASH_ROUNDS). Raw PINs and hashes
are never logged or returned by any endpoint.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import bcrypt
from fastapi import Depends, HTTPException, Request, Response, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import config
from .db import get_db
from .identity import IdentityProvider, get_identity_provider
from .models import Role, User

logger = logging.getLogger(__name__)


# =============================================================================
# PIN Hashing
# =============================================================================

def hash_pin(pin: str) -> str:
    """Hash a PIN with bcrypt and return the hash as text."""
    salt = bcrypt.gensalt(rounds=config.PIN_HASH_ROUNDS)
    return bcrypt.hashpw(pin.encode("utf-8"), salt).decode("utf-8")


def verify_pin(pin: str, pin_hash: str) -> bool:
    """Check a PIN against a stored bcrypt hash. Malformed hashes never match."""
    if not pin or not pin_hash:
        return False
    if len(pin) > config.PIN_MAX_LENGTH:
        return False
    try:
        return bcrypt.checkpw(pin.encode("utf-8"), pin_hash.encode("utf-8"))
    except ValueError:
        logger.warning("Stored PIN hash is not a valid bcrypt hash")
        return False


# =============================================================================
# Two-Tier Resolver
# =============================================================================

@dataclass
class AuthResult:
    """Outcome of resolving both authentication tiers for one request."""
    store_account_id: Optional[str] = None
    employee: Optional[User] = None

    @property
    def is_fully_authenticated(self) -> bool:
        return self.store_account_id is not None and self.employee is not None


def resolve_auth(request: Request, db: Session, provider: IdentityProvider) -> AuthResult:
    """
    Resolve the store session and, within it, the till operator.

    Read-only: inspects cookies, never sets or clears them.
    """
    token = request.cookies.get(config.STORE_SESSION_COOKIE)
    account = provider.get_store_account(token) if token else None
    if account is None:
        return AuthResult()

    result = AuthResult(store_account_id=account.id)

    employee_id = request.cookies.get(config.EMPLOYEE_COOKIE_NAME)
    if not employee_id:
        return result

    try:
        result.employee = (
            db.query(User)
            .filter(
                User.id == employee_id,
                User.is_active.is_(True),
                User.store_account_id == account.id,
            )
            .first()
        )
    except SQLAlchemyError:
        logger.exception("Employee lookup failed while resolving till session")
        db.rollback()
        result.employee = None

    return result


# =============================================================================
# FastAPI Dependencies
# =============================================================================

def get_auth(
    request: Request,
    db: Session = Depends(get_db),
    provider: IdentityProvider = Depends(get_identity_provider),
) -> AuthResult:
    """Resolve authentication without enforcing anything."""
    return resolve_auth(request, db, provider)


def require_store_session(auth: AuthResult = Depends(get_auth)) -> AuthResult:
    """Require a valid store session (outer tier only)."""
    if auth.store_account_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return auth


def require_employee(auth: AuthResult = Depends(require_store_session)) -> AuthResult:
    """Require both a store session and an active employee of that store."""
    if auth.employee is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return auth


def require_admin(auth: AuthResult = Depends(require_employee)) -> AuthResult:
    """Require a fully authenticated employee with the ADMIN role."""
    if auth.employee.role != Role.ADMIN.value:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    return auth


# =============================================================================
# Cookie Helpers
# =============================================================================

def set_employee_cookie(response: Response, employee_id: str) -> None:
    response.set_cookie(
        key=config.EMPLOYEE_COOKIE_NAME,
        value=employee_id,
        max_age=config.EMPLOYEE_COOKIE_MAX_AGE,
        httponly=True,
        secure=config.IS_PRODUCTION,
        samesite="lax",
        path="/",
    )


def clear_employee_cookie(response: Response) -> None:
    response.delete_cookie(
        key=config.EMPLOYEE_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=config.IS_PRODUCTION,
        samesite="lax",
    )


def set_store_cookie(response: Response, access_token: str, max_age: int) -> None:
    response.set_cookie(
        key=config.STORE_SESSION_COOKIE,
        value=access_token,
        max_age=max_age,
        httponly=True,
        secure=config.IS_PRODUCTION,
        samesite="lax",
        path="/",
    )


def clear_store_cookie(response: Response) -> None:
    response.delete_cookie(
        key=config.STORE_SESSION_COOKIE,
        path="/",
        httponly=True,
        secure=config.IS_PRODUCTION,
        samesite="lax",
    )
