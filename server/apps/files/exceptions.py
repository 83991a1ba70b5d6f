"""Exceptions for files app.

Every failure of the access and retrieval logic is one of these.
The HTTP layer maps ``status_code`` onto the response.
"""

from typing import ClassVar


class FileAccessError(Exception):
    """Base class for typed files errors."""

    status_code: ClassVar[int] = 500


class InvalidRequestError(FileAccessError):
    """Raised for malformed caller input (missing id, bad value)."""

    status_code: ClassVar[int] = 400


class NotFoundError(FileAccessError):
    """Raised when a resource is absent.

    Also used for resources of another tenant, so that existence
    is never revealed across tenants.
    """

    status_code: ClassVar[int] = 404


class ForbiddenError(FileAccessError):
    """Raised when the resource exists but the identity lacks rights."""

    status_code: ClassVar[int] = 403

    def __init__(self, message: str, reason: str) -> None:
        """Initialize ForbiddenError.

        Args:
            message: Human readable message.
            reason: Machine-readable reason tag (e.g. 'forbidden: owner').
        """
        self.reason = reason
        super().__init__(message)


class StorageIntegrityError(FileAccessError):
    """Raised when metadata and blob storage disagree.

    This is a server-side fault, never a client error.
    """

    status_code: ClassVar[int] = 500
