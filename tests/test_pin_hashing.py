"""
Tests for PIN hashing and the cookie helpers in kams_pos.auth.
"""
from fastapi import Response

from kams_pos import config
from kams_pos.auth import (
    clear_employee_cookie,
    hash_pin,
    set_employee_cookie,
    set_store_cookie,
    verify_pin,
)


class TestPinHashing:
    """hash_pin / verify_pin"""

    def test_hash_is_not_the_pin(self):
        hashed = hash_pin("1234")
        assert hashed != "1234"
        assert hashed.startswith("$2")

    def test_verify_roundtrip(self):
        hashed = hash_pin("0420")
        assert verify_pin("0420", hashed) is True
        assert verify_pin("420", hashed) is False

    def test_same_pin_hashes_differently(self):
        assert hash_pin("1234") != hash_pin("1234")

    def test_empty_inputs_never_match(self):
        assert verify_pin("", hash_pin("1234")) is False
        assert verify_pin("1234", "") is False

    def test_malformed_hash_never_matches(self):
        """Rows holding a plain-text PIN (legacy data) must not log anyone in."""
        assert verify_pin("1234", "1234") is False

    def test_overlong_pin_never_matches(self):
        hashed = hash_pin("123456789012")
        assert verify_pin("123456789012", hashed) is True
        assert verify_pin("123456789012" + "0" * 70, hashed) is False


class TestCookieHelpers:
    """Cookie attributes for both tiers."""

    def _headers(self, response):
        return [v.decode("latin-1") for k, v in response.raw_headers if k == b"set-cookie"]

    def test_employee_cookie_attributes(self):
        response = Response()
        set_employee_cookie(response, "emp-1")
        header = self._headers(response)[0]
        assert header.startswith(f"{config.EMPLOYEE_COOKIE_NAME}=emp-1")
        assert "HttpOnly" in header
        assert "SameSite=lax" in header
        assert "Path=/" in header

    def test_secure_in_production(self, monkeypatch):
        monkeypatch.setattr(config, "IS_PRODUCTION", True)
        response = Response()
        set_employee_cookie(response, "emp-1")
        assert "Secure" in self._headers(response)[0]

    def test_clear_employee_cookie_expires_it(self):
        response = Response()
        clear_employee_cookie(response)
        header = self._headers(response)[0]
        assert header.startswith(f"{config.EMPLOYEE_COOKIE_NAME}=")
        assert "Max-Age=0" in header

    def test_store_cookie_uses_token_lifetime(self):
        response = Response()
        set_store_cookie(response, "jwt-abc", 1800)
        header = self._headers(response)[0]
        assert header.startswith(f"{config.STORE_SESSION_COOKIE}=jwt-abc")
        assert "Max-Age=1800" in header
