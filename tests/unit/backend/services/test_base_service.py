"""
Unit Tests for Base Service.

Tests the logging helpers shared by every service.
"""

from unittest.mock import MagicMock, patch

from scribe.backend.services.base import BaseService


class ExampleService(BaseService):
    pass


class TestBaseServiceInit:
    """Tests for BaseService initialization."""

    def test_init_creates_logger_for_subclass_module(self):
        """Should name the logger after the subclass module."""
        with patch("scribe.backend.services.base.get_logger") as mock_get_logger:
            ExampleService()

        mock_get_logger.assert_called_once_with(__name__)


class TestLoggingHelpers:
    """Tests for _log_operation, _log_debug and _log_warning."""

    def _service(self) -> tuple[ExampleService, MagicMock]:
        service = ExampleService()
        service._logger = MagicMock()
        return service, service._logger

    def test_log_operation_includes_service_name(self):
        """Should log at info with the service class name."""
        service, logger = self._service()

        service._log_operation("Doing work", article_id="1")

        logger.info.assert_called_once_with(
            "Doing work",
            extra={"service": "ExampleService", "article_id": "1"},
        )

    def test_log_debug(self):
        """Should log at debug level."""
        service, logger = self._service()

        service._log_debug("Detail")

        logger.debug.assert_called_once_with("Detail", extra={"service": "ExampleService"})

    def test_log_warning(self):
        """Should log at warning level with context."""
        service, logger = self._service()

        service._log_warning("Fallback used", error="down")

        logger.warning.assert_called_once_with(
            "Fallback used",
            extra={"service": "ExampleService", "error": "down"},
        )
