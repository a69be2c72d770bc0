class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class MalformedEntryError(ValidationError):
    """Raised when a time entry lacks its mandatory check-in instant."""


class EntryOrderError(ValidationError):
    """Raised when entries are not ordered by check-in ascending."""


class ScheduleOutsideMonthError(ValidationError):
    """Raised when a monthly summary receives schedules from another month."""


class NotFoundError(DomainError):
    """Raised when a record does not exist for the requesting owner."""
