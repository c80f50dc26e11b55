"""
Error taxonomy shared by the services.

Services raise these exceptions instead of ``HTTPException`` so they
can be exercised without an HTTP layer.  Each class carries the HTTP
status it maps to; ``main.create_app`` installs a handler that turns
any :class:`ServiceError` into ``{"error": message}`` with that status.
"""

from fastapi import status


class ServiceError(Exception):
    """Base class for failures reported to the client."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    """Malformed or missing input."""

    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(ServiceError):
    """A uniqueness rule would be violated."""

    status_code = status.HTTP_409_CONFLICT


class AuthError(ServiceError):
    """Missing, unknown or expired session, or bad credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED


class NotFoundError(ServiceError):
    """The referenced playlist does not exist for the caller."""

    status_code = status.HTTP_404_NOT_FOUND


class StorageError(ServiceError):
    """The store document or the upload directory could not be written."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
