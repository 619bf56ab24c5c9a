"""Domain error taxonomy raised by the service layer."""

from garage_manager.core.error_codes import ErrorCode


class DomainException(Exception):
    """Base class for errors that map to a structured API error payload."""

    code: ErrorCode = ErrorCode.UNAVAILABLE
    status_code: int = 500

    def __init__(self, error: str, details: str | None = None):
        super().__init__(error)
        self.error = error
        self.details = details or error


class NotFoundError(DomainException):
    code = ErrorCode.NOT_FOUND
    status_code = 404


class InvalidArgumentError(DomainException):
    code = ErrorCode.INVALID_ARGUMENT
    status_code = 400


class UnavailableError(DomainException):
    code = ErrorCode.UNAVAILABLE
    status_code = 500


class ConflictError(DomainException):
    code = ErrorCode.CONFLICT
    status_code = 409
