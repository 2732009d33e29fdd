class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class StoreUnavailable(DomainError):
    """Raised when the record store cannot complete a read or write."""
