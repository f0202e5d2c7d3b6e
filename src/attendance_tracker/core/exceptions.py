class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AccessDeniedError(DomainError):
    """Raised when a caller lacks permission for the requested scope."""


class NotFoundError(DomainError):
    """Raised when a referenced subject, user or session does not exist."""


class InvalidSessionError(DomainError):
    """Raised when a session is not active or not owned by the caller."""


class InvalidStudentError(DomainError):
    """Raised when the target account is not a valid student."""


class ConflictError(DomainError):
    """Raised when the store rejects a write on a unique key. Safe to retry."""
