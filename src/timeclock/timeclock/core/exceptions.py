class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class InvalidRecordError(DomainError):
    """Raised when a stored record cannot be turned into a domain object."""

    def __init__(self, message: str, *, record=None):
        super().__init__(message)
        self.record = record


class StorageError(DomainError):
    """Raised when persisting data fails."""
