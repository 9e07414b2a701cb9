class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class IncompleteEntryError(ValidationError):
    """Raised when an entry lacks the fields a receipt is derived from."""


class MalformedReceiptError(ValidationError):
    """Raised when a receipt code is not 64 hex characters."""


class SheetClosedError(ValidationError):
    """Raised when a sheet is inactive or past its expiry."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a requested sheet or entry does not exist."""
