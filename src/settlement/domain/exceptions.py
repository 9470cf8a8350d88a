"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class AuthorizationError(DomainException):
    """The caller's role does not allow the requested operation."""


class ConcurrentUpdateError(DomainException):
    """A conditional write found the row in an unexpected payout status."""


class TransferError(DomainException):
    """The payment processor rejected a transfer or could not be reached."""
