class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(ValidationError):
    """Raised when a referenced site, worker or record does not exist."""


class ActiveShiftConflictError(ValidationError):
    """Raised when a worker already has an active shift on the given date."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class StorageError(DomainError):
    """Raised when the record store fails to persist a write.

    Transient from the user's point of view: nothing was changed, the action
    may be retried manually.
    """
