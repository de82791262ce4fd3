"""
Configuration Module for KAMS POS
=================================

This module centralizes all configuration settings, environment variables, and
constants used throughout the POS application. Values are parsed once at
module load time so that misconfiguration surfaces at startup.

Configuration Categories:
-------------------------
- **Environment**: Production flag that controls cookie security.

- **Database**: SQLAlchemy connection URL. SQLite is the development default;
  production deployments point this at PostgreSQL.

- **Store Identity Provider**: URL, public API key and timeout for the hosted
  auth service that owns store accounts (email/password login).

- **Employee Session**: Name and lifetime of the till-operator cookie, and the
  PIN hashing policy.

- **Rate Limiting**: Throttling for the PIN verification endpoint. A 4-digit
  PIN has only 10,000 possibilities, so brute force must be slowed down.

- **Store Locale**: Timezone that decides where the business day starts.

- **CORS Settings**: Cross-Origin Resource Sharing for the POS frontend.

Environment Variables:
----------------------
- ENVIRONMENT: "production" enables secure cookies (default: "development")
- DATABASE_URL: SQLAlchemy URL (default: "sqlite:///./kams_pos.db")
- SUPABASE_URL: Base URL of the identity provider project
- SUPABASE_ANON_KEY: Public API key sent with every identity provider call
- IDENTITY_TIMEOUT_SECONDS: HTTP timeout for identity calls (default: 10)
- STORE_SESSION_COOKIE: Cookie holding the store access token
- RATE_LIMIT_ENABLED: Enable/disable rate limiting (default: "true")
- RATE_LIMIT_PIN: PIN verification limit (default: "10 per minute")
- CORS_ORIGINS: Comma-separated allowed origins (default: "*")
- STORE_TIMEZONE: IANA zone for the store's business day (default: "UTC")

Usage:
------
    from kams_pos.config import (
        EMPLOYEE_COOKIE_NAME,
        EMPLOYEE_COOKIE_MAX_AGE,
        IS_PRODUCTION,
    )
"""

import os
from typing import List

from dotenv import load_dotenv

load_dotenv()


# =============================================================================
# Environment
# =============================================================================

ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development").lower()
IS_PRODUCTION: bool = ENVIRONMENT == "production"


# =============================================================================
# Database Configuration
# =============================================================================

DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./kams_pos.db")


# =============================================================================
# Store Identity Provider
# =============================================================================
# Store accounts (one per pizzeria) live entirely in the hosted identity
# provider. This application only ever holds the opaque account id.

SUPABASE_URL: str = os.getenv("SUPABASE_URL", "").rstrip("/")
SUPABASE_ANON_KEY: str = os.getenv("SUPABASE_ANON_KEY", "")
IDENTITY_TIMEOUT_SECONDS: float = float(os.getenv("IDENTITY_TIMEOUT_SECONDS", "10"))

# The cookie value is the provider's access token; it is passed through
# to the provider for validation and never decoded here.
STORE_SESSION_COOKIE: str = os.getenv("STORE_SESSION_COOKIE", "kams_pos_store_session")


# =============================================================================
# Employee (Till-Operator) Session
# =============================================================================

EMPLOYEE_COOKIE_NAME: str = "kams_pos_employee_id"
EMPLOYEE_COOKIE_MAX_AGE: int = 60 * 60 * 24 * 7  # 7 days

PIN_MIN_LENGTH: int = 4
# bcrypt only hashes the first 72 bytes and rejects longer input
PIN_MAX_LENGTH: int = 12
PIN_HASH_ROUNDS: int = int(os.getenv("PIN_HASH_ROUNDS", "10"))


# =============================================================================
# Rate Limiting Configuration
# =============================================================================
# Format: "X per Y" where Y is second, minute, hour, or day

RATE_LIMIT_ENABLED: bool = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
RATE_LIMIT_PIN: str = os.getenv("RATE_LIMIT_PIN", "10 per minute")


def get_rate_limit_pin() -> str:
    """
    Return the current PIN verification rate limit.

    Allows dynamic override in tests without modifying the module-level
    constant.
    """
    return RATE_LIMIT_PIN


# =============================================================================
# Store Locale
# =============================================================================
# Analytics ranges start at local midnight in this zone, e.g. "America/New_York"

STORE_TIMEZONE: str = os.getenv("STORE_TIMEZONE", "UTC")


# =============================================================================
# CORS Configuration
# =============================================================================
# Format: comma-separated list of origins, e.g., "https://pos.example.com"
# Default "*" allows all origins (suitable for development only)

_cors_origins_env = os.getenv("CORS_ORIGINS", "")
CORS_ORIGINS: List[str] = [
    origin.strip()
    for origin in _cors_origins_env.split(",")
    if origin.strip()
] or ["*"]
