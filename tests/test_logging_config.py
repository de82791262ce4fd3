"""
Tests for logging configuration.
"""
import logging

from fastapi.testclient import TestClient

from kams_pos.logging_config import (
    RequestIDFilter,
    current_request_id,
    reset_request_id,
    set_request_id,
)


class TestLoggingConfiguration:
    """Test logging setup and configuration."""

    def test_setup_logging_default_level(self, monkeypatch):
        """Test that setup_logging defaults to INFO level."""
        monkeypatch.delenv("LOG_LEVEL", raising=False)

        from kams_pos.logging_config import setup_logging
        setup_logging()

        logger = logging.getLogger("kams_pos")
        assert logger.level == logging.INFO

    def test_setup_logging_respects_env_var(self, monkeypatch):
        """Test that LOG_LEVEL env var is respected."""
        monkeypatch.setenv("LOG_LEVEL", "WARNING")

        from kams_pos.logging_config import setup_logging
        setup_logging()

        logger = logging.getLogger("kams_pos")
        assert logger.level == logging.WARNING

    def test_setup_logging_explicit_level(self):
        """Test that explicit level parameter works."""
        from kams_pos.logging_config import setup_logging
        setup_logging(level="error")

        logger = logging.getLogger("kams_pos")
        assert logger.level == logging.ERROR

    def test_setup_logging_invalid_level_defaults_to_info(self):
        """Test that invalid level falls back to INFO."""
        from kams_pos.logging_config import setup_logging
        setup_logging(level="INVALID_LEVEL")

        logger = logging.getLogger("kams_pos")
        assert logger.level == logging.INFO

    def test_third_party_noise_reduced(self):
        from kams_pos.logging_config import setup_logging
        setup_logging(level="INFO")

        assert logging.getLogger("urllib3").level == logging.WARNING
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING

    def test_root_handlers_stamp_request_id(self):
        from kams_pos.logging_config import setup_logging
        setup_logging(level="INFO")
        setup_logging(level="INFO")

        for handler in logging.getLogger().handlers:
            stamps = [f for f in handler.filters if isinstance(f, RequestIDFilter)]
            assert len(stamps) == 1


class TestRequestCorrelation:
    """Request IDs on log records."""

    def _record(self):
        return logging.LogRecord("kams_pos.test", logging.INFO, __file__, 1, "hello", None, None)

    def test_dash_outside_a_request(self):
        record = self._record()
        RequestIDFilter().filter(record)
        assert record.request_id == "-"

    def test_stamps_current_id(self):
        token = set_request_id("abc-123")
        try:
            record = self._record()
            assert RequestIDFilter().filter(record) is True
            assert record.request_id == "abc-123"
        finally:
            reset_request_id(token)
        assert current_request_id() is None

    def test_id_visible_while_handling_request(self, app):
        @app.get("/_request-id")
        async def echo_request_id():
            return {"requestId": current_request_id()}

        with TestClient(app) as client:
            resp = client.get("/_request-id", headers={"X-Request-ID": "trace-42"})

        assert resp.json() == {"requestId": "trace-42"}
        assert current_request_id() is None


class TestNoSensitiveDataInLogs:
    """PINs and PIN hashes must never reach the logs."""

    def test_pin_login_logs_no_pin(self, store_client, make_employee, caplog):
        employee = make_employee(name="Dana", pin="8642")

        with caplog.at_level(logging.DEBUG, logger="kams_pos"):
            store_client.post("/api/auth/verify-pin", json={"employeeId": employee.id, "pin": "8642"})
            store_client.post("/api/auth/verify-pin", json={"employeeId": employee.id, "pin": "1357"})

        for record in caplog.records:
            assert "8642" not in record.getMessage()
            assert "1357" not in record.getMessage()
            assert employee.pin not in record.getMessage()

    def test_employee_creation_logs_no_pin(self, admin_client, caplog):
        with caplog.at_level(logging.DEBUG, logger="kams_pos"):
            admin_client.post("/api/users", json={"name": "Eve", "pin": "97531"})

        messages = [r.getMessage() for r in caplog.records]
        assert any("Created employee: Eve" in m for m in messages)
        assert all("97531" not in m for m in messages)

    def test_debug_logs_not_shown_at_info_level(self, caplog):
        """Test that DEBUG logs don't appear when level is INFO."""
        from kams_pos.logging_config import setup_logging
        setup_logging(level="INFO")

        with caplog.at_level(logging.INFO):
            logger = logging.getLogger("kams_pos.test")
            logger.debug("This should not appear")
            logger.info("This should appear")

            messages = [r.message for r in caplog.records]
            assert "This should not appear" not in messages
            assert "This should appear" in messages
