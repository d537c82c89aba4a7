class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when the acting user is missing or does not own the data."""


class NotFoundError(DomainError):
    """Raised when a scoped lookup returns nothing."""


class ConflictError(DomainError):
    """Raised when a form already has a save in flight."""


class BackendError(DomainError):
    """Raised when a call to the hosted backend fails.

    The backend message is kept verbatim so it can be shown to the user.
    """


class ConfigurationError(DomainError):
    """Raised when required settings are missing."""
