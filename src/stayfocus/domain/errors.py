"""Domain errors raised by services."""


class StayFocusError(Exception):
    """Base class for domain errors."""


class NotFoundError(StayFocusError):
    """Raised when a record does not exist for the user."""


class ConflictError(StayFocusError):
    """Raised when an action conflicts with the current record state."""


class InvalidInputError(StayFocusError, ValueError):
    """Raised when input fails domain validation."""


class SleepSessionNotFoundError(NotFoundError):
    """Sleep session missing."""


class SleepSessionConflictError(ConflictError):
    """Sleep session already open or already closed."""


class InvalidSleepSessionError(InvalidInputError):
    """Sleep session times or quality are invalid."""


class ReminderNotFoundError(NotFoundError):
    """Reminder missing."""


class InvalidReminderError(InvalidInputError):
    """Reminder fields are invalid."""
