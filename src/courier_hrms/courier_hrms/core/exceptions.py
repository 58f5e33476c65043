class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when an identity or record does not exist."""


class PersistenceError(DomainError):
    """Raised when the storage layer rejects a write."""


class DuplicateEntryError(PersistenceError):
    """Raised when a write collides with a unique key."""


class RenderError(DomainError):
    """Raised when a salary slip PDF cannot be produced."""


class DownstreamNotifyError(DomainError):
    """Raised by notification gateways; callers log and swallow it."""


class SpreadsheetError(DomainError):
    """Raised when an uploaded spreadsheet cannot be read at all."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""
