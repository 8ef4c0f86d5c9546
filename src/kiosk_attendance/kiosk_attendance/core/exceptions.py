from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for attendance rule violations."""


class ValidationError(DomainError):
    """Raised when input data is missing or malformed."""


class ConflictError(DomainError):
    """Raised when a request clashes with the current session state."""


class NotFoundError(DomainError):
    """Raised when a referenced session or visitor does not exist."""


class StorageError(DomainError):
    """Raised when the underlying persistence fails or holds unreadable data."""


class GatewayError(Exception):
    """Uniform failure surfaced by the client data gateway.

    ``status_code`` is set when the failure came from an HTTP response.
    """

    def __init__(self, message: str, *, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
