class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a requested record does not exist in the store."""


class StoreUnavailableError(DomainError):
    """Raised when the backing database cannot be reached."""


class NetworkUnreachableError(Exception):
    """Raised by the transport when no response was received at all."""


class AuthorizationError(DomainError):
    """Raised when a role lacks permission for an action."""


class RemoteProtocolError(Exception):
    """Raised by the transport when a response could not be read (bad encoding, redirect loop)."""
