"""
Base Service.

Base class for all services providing common patterns for business logic.
Services orchestrate repositories and collaborators and
implement business rules. Used by the summary backend and the editor core.

Usage:
    from scribe.backend.services.base import BaseService

    class TrashManager(BaseService):
        def __init__(self, repo: TrashRepository) -> None:
            super().__init__()
            self.repo = repo

        def restore(self, article_id: str) -> Article:
            self._log_operation("Restoring article", article_id=article_id)
            ...
"""

from typing import Any

from scribe.backend.core.logging import get_logger


class BaseService:
    """
    Base class for all services.

    Provides:
    - Logging context

    Subclasses should:
    - Call super().__init__() in their __init__
    - Receive repositories and collaborators as constructor arguments
    """

    def __init__(self) -> None:
        self._logger = get_logger(self.__class__.__module__)

    def _log_operation(
        self,
        operation: str,
        **context: Any,
    ) -> None:
        """
        Log a service operation with context.

        Args:
            operation: Description of the operation
            **context: Additional context to include in log
        """
        self._logger.info(
            operation,
            extra={"service": self.__class__.__name__, **context},
        )

    def _log_debug(
        self,
        message: str,
        **context: Any,
    ) -> None:
        """
        Log debug information.

        Args:
            message: Debug message
            **context: Additional context to include in log
        """
        self._logger.debug(
            message,
            extra={"service": self.__class__.__name__, **context},
        )

    def _log_warning(
        self,
        message: str,
        **context: Any,
    ) -> None:
        """Log a recoverable problem with context."""
        self._logger.warning(
            message,
            extra={"service": self.__class__.__name__, **context},
        )
