"""Error taxonomy for the availability core.

``DataError`` marks a broken snapshot (a data-integrity bug upstream).
``ValidationError`` and its subclasses are expected, user-facing rejections
whose ``message`` is shown to the guest unaltered.
"""


class BookingError(Exception):
    """Base class for every error raised by the availability core."""

    code: str = "booking_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class DataError(BookingError):
    """Malformed or unparseable snapshot data (dates, ranges)."""

    code = "data_error"


class ValidationError(BookingError):
    """A proposed stay or input was rejected."""

    code = "validation_error"


class NotFoundError(ValidationError):
    """The accommodation referenced by a stay cannot be resolved."""

    code = "not_found"


class CapacityExceededError(ValidationError):
    """Guest count outside ``[1, capacity]``."""

    code = "capacity_exceeded"


class InvalidRangeError(ValidationError):
    """Check-out is not at least one night after check-in."""

    code = "invalid_range"


class DateUnavailableError(ValidationError):
    """Check-in date or a night of the stay is fully blocked."""

    code = "date_unavailable"


class TimeUnavailableError(ValidationError):
    """Selected check-in time is earlier than the earliest permitted time."""

    code = "time_unavailable"

    def __init__(self, message: str, reason: str) -> None:
        super().__init__(message)
        self.reason = reason


class InvalidTimeError(ValidationError):
    """A time-of-day string or cleaning buffer could not be used."""

    code = "invalid_time"


class InvalidStatusError(ValidationError):
    """A reservation cannot move to the requested status from its current one."""

    code = "invalid_status"
