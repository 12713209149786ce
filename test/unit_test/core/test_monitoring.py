"""
Unit tests for the Logfire monitoring module.

This test suite covers:
- Logfire initialization with various configurations
- Feature flag handling
- Custom logging functions (API requests, document events, errors)
- Graceful degradation when Logfire fails
"""

from unittest.mock import patch

import pytest
from fastapi import FastAPI

from docvault.core import monitoring

MODULE = "docvault.core.monitoring"


@pytest.fixture
def mock_logfire():
    with patch(f"{MODULE}.logfire") as mock:
        yield mock


@pytest.fixture
def active_logfire(mock_logfire):
    with patch(f"{MODULE}.LOGFIRE_ENABLED", True), patch(f"{MODULE}.LOGFIRE_TOKEN", "test-token"):
        yield mock_logfire


class TestIsLogfireActive:
    @pytest.mark.parametrize(
        "enabled,token,expected",
        [(True, "token", True), (True, "", False), (False, "token", False), (False, "", False)],
    )
    def test_requires_flag_and_token(self, enabled, token, expected):
        with patch(f"{MODULE}.LOGFIRE_ENABLED", enabled), patch(f"{MODULE}.LOGFIRE_TOKEN", token):
            assert monitoring.is_logfire_active() is expected


class TestInitializeLogfire:
    @patch(f"{MODULE}.LOGFIRE_ENABLED", False)
    @patch(f"{MODULE}.logger")
    def test_initialize_logfire_disabled(self, mock_logger, mock_logfire):
        monitoring.initialize_logfire()

        mock_logfire.configure.assert_not_called()
        assert "disabled" in mock_logger.info.call_args[0][0].lower()

    @patch(f"{MODULE}.LOGFIRE_ENABLED", True)
    @patch(f"{MODULE}.LOGFIRE_TOKEN", "")
    @patch(f"{MODULE}.logger")
    def test_initialize_logfire_no_token(self, mock_logger, mock_logfire):
        monitoring.initialize_logfire()

        mock_logfire.configure.assert_not_called()
        assert "token" in mock_logger.warning.call_args[0][0].lower()

    @patch(f"{MODULE}.LOGFIRE_SERVICE_NAME", "test-service")
    @patch(f"{MODULE}.LOGFIRE_SERVICE_VERSION", "9.9.9")
    @patch(f"{MODULE}.LOGFIRE_ENVIRONMENT", "test")
    @patch(f"{MODULE}.LOGFIRE_TRACE_SQLALCHEMY", True)
    @patch(f"{MODULE}.LOGFIRE_TRACE_FASTAPI", True)
    def test_configures_and_instruments(self, active_logfire):
        app = FastAPI()

        monitoring.initialize_logfire(app)

        active_logfire.configure.assert_called_once_with(
            token="test-token",
            service_name="test-service",
            service_version="9.9.9",
            environment="test",
        )
        active_logfire.instrument_sqlalchemy.assert_called_once()
        active_logfire.instrument_fastapi.assert_called_once_with(app=app)

    @patch(f"{MODULE}.LOGFIRE_TRACE_SQLALCHEMY", False)
    @patch(f"{MODULE}.LOGFIRE_TRACE_FASTAPI", True)
    def test_skips_fastapi_without_app(self, active_logfire):
        monitoring.initialize_logfire(app=None)

        active_logfire.instrument_sqlalchemy.assert_not_called()
        active_logfire.instrument_fastapi.assert_not_called()

    @patch(f"{MODULE}.LOGFIRE_TRACE_SQLALCHEMY", True)
    @patch(f"{MODULE}.LOGFIRE_TRACE_FASTAPI", False)
    @patch(f"{MODULE}.logger")
    def test_instrumentation_failure_is_only_a_warning(self, mock_logger, active_logfire):
        active_logfire.instrument_sqlalchemy.side_effect = RuntimeError("boom")

        monitoring.initialize_logfire()

        mock_logger.warning.assert_called_once()
        mock_logger.error.assert_not_called()

    @patch(f"{MODULE}.logger")
    def test_configure_failure_is_logged(self, mock_logger, active_logfire):
        active_logfire.configure.side_effect = RuntimeError("bad token")

        monitoring.initialize_logfire()

        mock_logger.error.assert_called_once()


class TestEventLogging:
    def test_events_are_dropped_when_inactive(self, mock_logfire):
        with patch(f"{MODULE}.LOGFIRE_ENABLED", False):
            monitoring.log_api_request("GET", "/health", 200, 1.5)
            monitoring.log_document_event("uploaded", 1, "C001", 2)
            monitoring.log_error("ValueError", "bad")

        mock_logfire.info.assert_not_called()
        mock_logfire.error.assert_not_called()

    def test_log_api_request(self, active_logfire):
        monitoring.log_api_request("GET", "/clients", 200, 12.5)

        active_logfire.info.assert_called_once_with(
            "API request completed", method="GET", path="/clients", status_code=200, duration_ms=12.5
        )

    def test_log_document_event(self, active_logfire):
        monitoring.log_document_event("downloaded", 7, "C001", user_id=3)

        active_logfire.info.assert_called_once_with(
            "Document {event}", event="downloaded", document_id=7, client_code="C001", user_id=3
        )

    def test_log_error_with_context(self, active_logfire):
        monitoring.log_error("ValueError", "bad input", {"path": "/documents"})

        active_logfire.error.assert_called_once_with("ValueError: bad input", path="/documents")

    def test_logfire_failures_are_swallowed(self, active_logfire):
        active_logfire.info.side_effect = RuntimeError("exporter down")
        active_logfire.error.side_effect = RuntimeError("exporter down")

        monitoring.log_api_request("GET", "/", 200, 1.0)
        monitoring.log_document_event("deleted", 1, "C001")
        monitoring.log_error("KeyError", "missing", {"document_id": 1})
