from typing import Any, Mapping, Optional


class ServiceError(Exception):
    """Base class for errors that map onto an HTTP response.

    Attributes:
        message: human-readable message, safe to show to the client
        details: optional mapping with extra context (field errors, validation info)
        code: optional machine-readable error code
        http_status: suggested HTTP status code for handlers
    """

    http_status = 500
    default_message = "Service error"

    def __init__(self, message: Optional[str] = None, details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)
        self.details = details
        self.code = code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        return self.message


class ServiceValidationError(ServiceError):
    """Raised when input data is invalid or a precondition for a service call is not met."""

    http_status = 400
    default_message = "Invalid input"


class ConflictError(ServiceError):
    """Raised when a unique field is already taken (e.g., duplicate email).

    Answered with 400 like other client input errors.
    """

    http_status = 400
    default_message = "Conflict"


class UnauthorizedError(ServiceError):
    """Raised when authentication fails: bad credentials or a missing/invalid token."""

    http_status = 401
    default_message = "Unauthorized"


class NotFoundError(ServiceError):
    """Raised when a record is absent or owned by someone else."""

    http_status = 404
    default_message = "Not found"


class StorageError(ServiceError):
    """Raised when an attachment backend fails to store or delete a file.

    Fatal to uploads. Deletion cleanups catch and log it.
    """

    http_status = 500
    default_message = "Image storage failed"
