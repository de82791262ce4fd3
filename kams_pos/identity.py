"""
Store Identity Provider Client
==============================

Store accounts (one per pizzeria) are owned by a hosted identity provider.
This module wraps the provider's REST API so the rest of the application only
ever sees two things: an opaque store-account id, and an opaque access token
that is handed back to the provider for validation.

The default implementation talks to a Supabase (GoTrue) project:

    GET  /auth/v1/user                       -> resolve an access token
    POST /auth/v1/token?grant_type=password  -> email/password sign-in
    POST /auth/v1/signup                     -> create a store account
    POST /auth/v1/logout                     -> revoke a token

Failure semantics:
------------------
- Token lookup never raises. A network error or a non-2xx answer is logged
  and reported as "no store session", which the auth layer turns into a 401.
- Sign-in with bad credentials raises InvalidCredentialsError; any other
  failure raises IdentityProviderError so the route can answer 503.
- Sign-out is best effort.

Usage:
------
    from kams_pos.identity import get_identity_provider

    @router.get("/whoami")
    def whoami(provider: IdentityProvider = Depends(get_identity_provider)):
        ...

Tests replace the provider with set_identity_provider() or through
app.dependency_overrides.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import requests

from . import config

logger = logging.getLogger(__name__)


# =============================================================================
# Data Types
# =============================================================================

@dataclass
class StoreAccount:
    """A store account as known to the identity provider."""
    id: str
    email: Optional[str] = None


@dataclass
class StoreSession:
    """Result of a successful sign-in."""
    access_token: str
    expires_in: int
    account: StoreAccount
    refresh_token: Optional[str] = None


class IdentityProviderError(Exception):
    """The identity provider could not be reached or answered unexpectedly."""


class InvalidCredentialsError(IdentityProviderError):
    """Email/password rejected by the identity provider."""


# =============================================================================
# Provider Interface
# =============================================================================

class IdentityProvider(ABC):
    """Operations the POS needs from the store identity provider."""

    @abstractmethod
    def get_store_account(self, access_token: str) -> Optional[StoreAccount]:
        """Resolve an access token to its store account, or None."""

    @abstractmethod
    def sign_in(self, email: str, password: str) -> StoreSession:
        """Exchange credentials for a session."""

    @abstractmethod
    def sign_up(self, email: str, password: str) -> Optional[StoreSession]:
        """Create an account. Returns a session when the provider issues one immediately."""

    @abstractmethod
    def sign_out(self, access_token: str) -> None:
        """Revoke the given token."""


# =============================================================================
# Supabase Implementation
# =============================================================================

class SupabaseIdentityProvider(IdentityProvider):
    """IdentityProvider backed by the Supabase GoTrue REST API."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 10,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or requests.Session()

    def _headers(self, access_token: Optional[str] = None) -> dict:
        headers = {
            "apikey": self.api_key,
            "Content-Type": "application/json",
        }
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"
        return headers

    def _url(self, path: str) -> str:
        return f"{self.base_url}/auth/v1/{path}"

    def get_store_account(self, access_token: str) -> Optional[StoreAccount]:
        if not access_token:
            return None

        try:
            response = self.session.get(
                self._url("user"),
                headers=self._headers(access_token),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("Identity provider lookup failed: %s", e)
            return None

        if response.status_code != 200:
            # Expired or revoked tokens land here; not worth more than debug
            logger.debug("Identity provider rejected token (status=%d)", response.status_code)
            return None

        try:
            data = response.json()
        except ValueError:
            logger.error("Identity provider returned a non-JSON user payload")
            return None

        account_id = data.get("id")
        if not account_id:
            return None
        return StoreAccount(id=account_id, email=data.get("email"))

    def _parse_session(self, data: dict) -> Optional[StoreSession]:
        token = data.get("access_token")
        user = data.get("user") or {}
        if not token or not user.get("id"):
            return None
        return StoreSession(
            access_token=token,
            expires_in=int(data.get("expires_in") or 3600),
            refresh_token=data.get("refresh_token"),
            account=StoreAccount(id=user["id"], email=user.get("email")),
        )

    def sign_in(self, email: str, password: str) -> StoreSession:
        try:
            response = self.session.post(
                self._url("token"),
                params={"grant_type": "password"},
                json={"email": email, "password": password},
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("Identity provider sign-in failed: %s", e)
            raise IdentityProviderError("Identity provider unavailable") from e

        if response.status_code in (400, 401):
            raise InvalidCredentialsError("Invalid email or password")
        if response.status_code != 200:
            logger.error("Identity provider sign-in returned status %d", response.status_code)
            raise IdentityProviderError(f"Unexpected status {response.status_code}")

        session = self._parse_session(response.json())
        if session is None:
            raise IdentityProviderError("Sign-in response did not contain a session")
        return session

    def sign_up(self, email: str, password: str) -> Optional[StoreSession]:
        try:
            response = self.session.post(
                self._url("signup"),
                json={"email": email, "password": password},
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("Identity provider sign-up failed: %s", e)
            raise IdentityProviderError("Identity provider unavailable") from e

        if response.status_code in (400, 422):
            try:
                message = response.json().get("msg") or "Sign up failed"
            except ValueError:
                message = "Sign up failed"
            raise InvalidCredentialsError(message)
        if response.status_code not in (200, 201):
            logger.error("Identity provider sign-up returned status %d", response.status_code)
            raise IdentityProviderError(f"Unexpected status {response.status_code}")

        # With email confirmation enabled the provider returns the user only
        return self._parse_session(response.json())

    def sign_out(self, access_token: str) -> None:
        if not access_token:
            return
        try:
            self.session.post(
                self._url("logout"),
                headers=self._headers(access_token),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning("Identity provider sign-out failed: %s", e)


# =============================================================================
# Global Instance
# =============================================================================

_identity_provider: Optional[IdentityProvider] = None


def get_identity_provider() -> IdentityProvider:
    """Get the global identity provider instance (FastAPI dependency)."""
    global _identity_provider
    if _identity_provider is None:
        if not config.SUPABASE_URL:
            logger.warning("SUPABASE_URL is not set; every store session lookup will fail")
        _identity_provider = SupabaseIdentityProvider(
            base_url=config.SUPABASE_URL,
            api_key=config.SUPABASE_ANON_KEY,
            timeout=config.IDENTITY_TIMEOUT_SECONDS,
        )
    return _identity_provider


def set_identity_provider(provider: Optional[IdentityProvider]) -> None:
    """Set the global identity provider instance (for testing)."""
    global _identity_provider
    _identity_provider = provider
