class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class SessionBusyError(ValidationError):
    """Raised when a mark/delete is requested while another one is in flight."""


class ConflictError(DomainError):
    """Raised when an attendance record already exists for the subject and date."""


class NotFoundError(DomainError):
    """Raised when a subject or attendance record no longer exists."""


class AuthError(DomainError):
    """Raised when the credential is missing, invalid or expired."""


class TransientError(DomainError):
    """Raised for any other transport or server failure. Safe to retry manually."""
