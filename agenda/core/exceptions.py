"""Custom application exceptions."""


class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, status_code: int = 500):
        """Initialize exception with message and status code."""
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class NotFoundException(AppException):
    """Resource not found exception."""

    def __init__(self, message: str = "Resource not found"):
        """Initialize with 404 status code."""
        super().__init__(message, status_code=404)


class ConflictException(AppException):
    """Conflict exception."""

    def __init__(self, message: str = "Conflict"):
        """Initialize with 409 status code."""
        super().__init__(message, status_code=409)


class ValidationException(AppException):
    """Validation error exception."""

    def __init__(self, message: str = "Validation error", details: dict[str, str] | None = None):
        """Initialize with 422 status code."""
        super().__init__(message, status_code=422)
        self.details = details or {}


class StorageFailure(AppException):
    """The appointment database could not complete an operation."""

    def __init__(self, message: str = "Storage operation failed"):
        """Initialize with 503 status code."""
        super().__init__(message, status_code=503)


class NotificationFailure(AppException):
    """A notification could not be scheduled, cancelled or delivered."""

    def __init__(self, message: str = "Notification operation failed"):
        """Initialize with 502 status code."""
        super().__init__(message, status_code=502)
