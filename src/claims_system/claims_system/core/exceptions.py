class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a claim or lecturer id does not resolve."""


class InvalidTransitionError(DomainError):
    """Raised when a status change is not allowed from the claim's current status."""


class AuthorizationError(DomainError):
    """Raised when a role lacks permission for an action."""


class PersistenceError(DomainError):
    """Raised when the underlying storage cannot read or write a record."""
