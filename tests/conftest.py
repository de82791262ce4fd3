"""
Shared fixtures for the KAMS POS test suite.

Every test gets a fresh in-memory SQLite database (StaticPool, so all
sessions share one connection) and a FakeIdentityProvider in place of the
hosted identity service. Clients come pre-authenticated at the tier a test
needs: no cookies, store session only, or store session plus a till
employee.
"""
import os

# Must be set before kams_pos is imported: config reads them at import time
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["PIN_HASH_ROUNDS"] = "4"
os.environ.setdefault("ENVIRONMENT", "development")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from kams_pos import config
from kams_pos.app_factory import create_app
from kams_pos.auth import hash_pin
from kams_pos.db import get_db
from kams_pos.identity import (
    IdentityProvider,
    IdentityProviderError,
    InvalidCredentialsError,
    StoreAccount,
    StoreSession,
    get_identity_provider,
)
from kams_pos.models import Base, Role, User
from kams_pos.routes.auth import limiter

STORE_ID = "store-account-1"
STORE_TOKEN = "store-token-1"
STORE_EMAIL = "owner@pizzeria.test"
STORE_PASSWORD = "correct-horse"

OTHER_STORE_ID = "store-account-2"
OTHER_STORE_TOKEN = "store-token-2"


class FakeIdentityProvider(IdentityProvider):
    """In-memory stand-in for the hosted identity provider."""

    def __init__(self):
        self.accounts = {
            STORE_TOKEN: StoreAccount(id=STORE_ID, email=STORE_EMAIL),
            OTHER_STORE_TOKEN: StoreAccount(id=OTHER_STORE_ID, email="other@pizzeria.test"),
        }
        self.passwords = {STORE_EMAIL: (STORE_PASSWORD, STORE_TOKEN)}
        self.signed_out = []
        self.available = True
        self.require_email_confirmation = False

    def get_store_account(self, access_token):
        return self.accounts.get(access_token)

    def sign_in(self, email, password):
        if not self.available:
            raise IdentityProviderError("down")
        entry = self.passwords.get(email)
        if entry is None or entry[0] != password:
            raise InvalidCredentialsError("Invalid email or password")
        token = entry[1]
        return StoreSession(access_token=token, expires_in=3600, account=self.accounts[token])

    def sign_up(self, email, password):
        if not self.available:
            raise IdentityProviderError("down")
        if email in self.passwords:
            raise InvalidCredentialsError("User already registered")

        n = len(self.accounts) + 1
        token = f"store-token-{n}"
        account = StoreAccount(id=f"store-account-{n}", email=email)
        self.accounts[token] = account
        self.passwords[email] = (password, token)
        if self.require_email_confirmation:
            return None
        return StoreSession(access_token=token, expires_in=3600, account=account)

    def sign_out(self, access_token):
        self.signed_out.append(access_token)
        self.accounts.pop(access_token, None)


@pytest.fixture
def session_factory():
    """Sessionmaker bound to a fresh in-memory database."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield TestingSessionLocal
    engine.dispose()


@pytest.fixture
def db_session(session_factory):
    """Session for arranging and inspecting rows directly."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def identity():
    return FakeIdentityProvider()


@pytest.fixture
def app(session_factory, identity):
    """FastAPI app wired to the test database and the fake identity provider."""
    application = create_app()

    def override_get_db():
        db_sess = session_factory()
        try:
            yield db_sess
        finally:
            db_sess.close()

    application.dependency_overrides[get_db] = override_get_db
    application.dependency_overrides[get_identity_provider] = lambda: identity

    limiter.enabled = False
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app):
    """Client without any session cookie."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def store_client(app):
    """Client with a valid store session but no till employee."""
    with TestClient(app) as test_client:
        test_client.cookies.set(config.STORE_SESSION_COOKIE, STORE_TOKEN)
        yield test_client


@pytest.fixture
def make_employee(db_session):
    """Factory that inserts an employee with a hashed PIN."""
    def _make(name="Cashier", pin="1234", role=Role.CASHIER, store_account_id=STORE_ID, is_active=True, email=None):
        employee = User(
            name=name,
            pin=hash_pin(pin),
            role=role.value,
            store_account_id=store_account_id,
            is_active=is_active,
            email=email,
        )
        db_session.add(employee)
        db_session.commit()
        db_session.refresh(employee)
        return employee
    return _make


@pytest.fixture
def admin(make_employee):
    return make_employee(name="Alice Admin", pin="1111", role=Role.ADMIN)


@pytest.fixture
def cashier(make_employee):
    return make_employee(name="Carl Cashier", pin="2222", role=Role.CASHIER)


def _till_client(app, employee):
    test_client = TestClient(app)
    test_client.cookies.set(config.STORE_SESSION_COOKIE, STORE_TOKEN)
    test_client.cookies.set(config.EMPLOYEE_COOKIE_NAME, employee.id)
    return test_client


@pytest.fixture
def admin_client(app, admin):
    """Client logged in at the till as an ADMIN."""
    with _till_client(app, admin) as test_client:
        yield test_client


@pytest.fixture
def cashier_client(app, cashier):
    """Client logged in at the till as a CASHIER."""
    with _till_client(app, cashier) as test_client:
        yield test_client
