"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.
Shared by the summary backend and the editor core.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class NotFoundError(ApplicationError):
    """Raised when a resource cannot be found."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, code="RES_NOT_FOUND")


class ValidationError(ApplicationError):
    """Raised when validation fails."""

    def __init__(self, message: str = "Validation failed", details: dict | None = None) -> None:
        self.details = details or {}
        super().__init__(message, code="VAL_VALIDATION_ERROR")


class ConflictError(ApplicationError):
    """Raised when an operation conflicts with existing state."""

    def __init__(self, message: str = "Resource conflict") -> None:
        super().__init__(message, code="RES_CONFLICT")


class ExternalServiceError(ApplicationError):
    """Raised when an external service call fails."""

    def __init__(
        self,
        message: str = "External service error",
        code: str = "SYS_EXTERNAL_SERVICE_ERROR",
    ) -> None:
        super().__init__(message, code=code)


class SummarizationFailed(ExternalServiceError):
    """Raised when the summarization collaborator cannot produce a summary."""

    def __init__(self, message: str = "Summary generation failed") -> None:
        super().__init__(message, code="SUM_FAILED")


class DatabaseError(ApplicationError):
    """Raised when a database operation fails."""

    def __init__(self, message: str = "Database error") -> None:
        super().__init__(message, code="SYS_DATABASE_ERROR")


class PersistenceUnavailable(DatabaseError):
    """Raised when the local persistent store cannot be read or written."""

    def __init__(self, message: str = "Persistent store unavailable") -> None:
        super().__init__(message)
