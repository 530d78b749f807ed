class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidTimeFormat(ValidationError):
    """Raised when a clock time is not a valid "HH:MM" string."""


class InvalidShiftInput(ValidationError):
    """Raised when shift fields are out of range (e.g. negative travel)."""


class InvalidRateTable(ValidationError):
    """Raised when a rate needed for a calculation is missing or invalid."""


class QuoteNotFound(DomainError):
    """Raised when a quote id is unknown to the repository."""


class QuoteLockedError(DomainError):
    """Raised when editing a quote whose status does not allow edits."""


class InvalidStatusTransition(DomainError):
    """Raised when a lifecycle action is not allowed from the current status."""
