"""
Authentication Routes for KAMS POS
==================================

Endpoints for both authentication tiers (see kams_pos.auth for the model).

Endpoints:
----------
Store tier:
- POST /auth/store/login: Email/password login; sets the store session cookie
- POST /auth/store/signup: Create a store account
- POST /auth/store/logout: End the store session and the till session
- GET /auth/session: Resolved state of both tiers (never 401)

Employee tier:
- POST /auth/verify-pin: PIN login at the till; sets kams_pos_employee_id
- POST /auth/logout-employee: Clear the till cookie (store stays signed in)
- POST /auth/setup-admin: Create the first ADMIN employee of a store

Rate Limiting:
--------------
verify-pin is rate limited per client address (RATE_LIMIT_PIN, default
"10 per minute"). A 4-digit PIN has only 10,000 values, so unthrottled
guessing would find one in minutes.

Error Responses:
----------------
verify-pin reports every lookup miss (unknown id, inactive employee,
employee of another store) as the same 404, and a wrong PIN as a generic
401, so the endpoint cannot be used to enumerate other stores.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from slowapi import Limiter
from slowapi.util import get_remote_address
from sqlalchemy.orm import Session

from .. import config
from ..auth import (
    AuthResult,
    clear_employee_cookie,
    clear_store_cookie,
    get_auth,
    require_store_session,
    set_employee_cookie,
    set_store_cookie,
)
from ..config import RATE_LIMIT_ENABLED, get_rate_limit_pin
from ..db import get_db
from ..identity import (
    IdentityProvider,
    IdentityProviderError,
    InvalidCredentialsError,
    get_identity_provider,
)
from ..models import Role
from ..schemas.auth import (
    SessionOut,
    SetupAdminRequest,
    SetupAdminResponse,
    StoreCredentials,
    StoreLoginResponse,
    StoreSignupResponse,
    VerifyPinRequest,
    VerifyPinResponse,
)
from ..schemas.common import SuccessResponse
from ..schemas.users import serialize_employee, serialize_pin_user
from ..services.users import (
    EmployeeError,
    EmployeeNotFoundError,
    InvalidPinError,
    authenticate_employee,
    create_employee,
)

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address, enabled=RATE_LIMIT_ENABLED)

auth_router = APIRouter(prefix="/auth", tags=["Auth"])


# =============================================================================
# Employee (Till) Session
# =============================================================================

@auth_router.post("/verify-pin", response_model=VerifyPinResponse)
@limiter.limit(get_rate_limit_pin)
def verify_pin(
    request: Request,
    response: Response,
    payload: VerifyPinRequest,
    auth: AuthResult = Depends(get_auth),
    db: Session = Depends(get_db),
) -> VerifyPinResponse:
    """
    Log an employee in at the till.

    On success the till cookie is set to the employee id. On any failure
    no cookie is written, so an existing till session stays as it was.
    """
    if auth.store_account_id is None:
        raise HTTPException(status_code=401, detail="Unauthorized Store Session")

    if not payload.employee_id:
        raise HTTPException(status_code=400, detail="Employee ID is required")
    if not payload.pin:
        raise HTTPException(status_code=400, detail="PIN is required")

    try:
        employee = authenticate_employee(db, auth.store_account_id, payload.employee_id, payload.pin)
    except EmployeeNotFoundError:
        raise HTTPException(status_code=404, detail="Employee not found")
    except InvalidPinError:
        raise HTTPException(status_code=401, detail="Invalid PIN")

    set_employee_cookie(response, employee.id)
    logger.info("Employee %s logged in at store %s", employee.id, auth.store_account_id)

    return VerifyPinResponse(success=True, user=serialize_pin_user(employee))


@auth_router.post("/logout-employee", response_model=SuccessResponse)
def logout_employee(
    response: Response,
    auth: AuthResult = Depends(require_store_session),
) -> SuccessResponse:
    """Clear the till cookie. Works whether or not a till session exists."""
    clear_employee_cookie(response)
    return SuccessResponse(success=True)


@auth_router.post("/setup-admin", response_model=SetupAdminResponse)
def setup_admin(
    payload: SetupAdminRequest,
    auth: AuthResult = Depends(require_store_session),
    db: Session = Depends(get_db),
) -> SetupAdminResponse:
    """Create an ADMIN employee for the signed-in store (onboarding)."""
    if not payload.name or not payload.pin:
        raise HTTPException(status_code=400, detail="Name and PIN are required")

    try:
        employee = create_employee(
            db,
            auth.store_account_id,
            name=payload.name,
            pin=payload.pin,
            role=Role.ADMIN,
            email=payload.email,
        )
    except EmployeeError as e:
        raise HTTPException(status_code=400, detail=e.message)

    return SetupAdminResponse(success=True, user=serialize_employee(employee))


# =============================================================================
# Store Session
# =============================================================================

@auth_router.post("/store/login", response_model=StoreLoginResponse)
def store_login(
    payload: StoreCredentials,
    response: Response,
    provider: IdentityProvider = Depends(get_identity_provider),
) -> StoreLoginResponse:
    """Sign the terminal in as a store account."""
    if not payload.email or not payload.password:
        raise HTTPException(status_code=400, detail="Email and password are required")

    try:
        session = provider.sign_in(payload.email, payload.password)
    except InvalidCredentialsError:
        raise HTTPException(status_code=401, detail="Invalid email or password")
    except IdentityProviderError:
        raise HTTPException(status_code=503, detail="Identity provider unavailable")

    set_store_cookie(response, session.access_token, session.expires_in)
    logger.info("Store account %s signed in", session.account.id)
    return StoreLoginResponse(success=True, store_account_id=session.account.id)


@auth_router.post("/store/signup", response_model=StoreSignupResponse)
def store_signup(
    payload: StoreCredentials,
    response: Response,
    provider: IdentityProvider = Depends(get_identity_provider),
) -> StoreSignupResponse:
    """Create a store account. Signs in immediately when the provider allows it."""
    if not payload.email or not payload.password:
        raise HTTPException(status_code=400, detail="Email and password are required")

    try:
        session = provider.sign_up(payload.email, payload.password)
    except InvalidCredentialsError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except IdentityProviderError:
        raise HTTPException(status_code=503, detail="Identity provider unavailable")

    if session is None:
        return StoreSignupResponse(success=True, session_created=False)

    set_store_cookie(response, session.access_token, session.expires_in)
    logger.info("Store account %s created", session.account.id)
    return StoreSignupResponse(
        success=True,
        store_account_id=session.account.id,
        session_created=True,
    )


@auth_router.post("/store/logout", response_model=SuccessResponse)
def store_logout(
    request: Request,
    response: Response,
    provider: IdentityProvider = Depends(get_identity_provider),
) -> SuccessResponse:
    """Sign the store out. The till session ends with it."""
    token = request.cookies.get(config.STORE_SESSION_COOKIE)
    if token:
        provider.sign_out(token)

    clear_store_cookie(response)
    clear_employee_cookie(response)
    return SuccessResponse(success=True)


@auth_router.get("/session", response_model=SessionOut)
def get_session(auth: AuthResult = Depends(get_auth)) -> SessionOut:
    """Report which tiers are authenticated. Never fails with 401."""
    return SessionOut(
        store_account_id=auth.store_account_id,
        user=serialize_pin_user(auth.employee) if auth.employee else None,
        is_fully_authenticated=auth.is_fully_authenticated,
    )
