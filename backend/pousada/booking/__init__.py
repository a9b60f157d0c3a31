"""Availability core: blocked days, check-in time windows and stay validation.

Framework-free and side-effect-free; callers fetch a snapshot of blocked
ranges, inject "now", and re-run these functions whenever inputs change.
"""

from pousada.booking.availability import AvailabilityIndex, compute_availability
from pousada.booking.errors import (
    BookingError,
    CapacityExceededError,
    DataError,
    DateUnavailableError,
    InvalidRangeError,
    InvalidStatusError,
    InvalidTimeError,
    NotFoundError,
    TimeUnavailableError,
    ValidationError,
)
from pousada.booking.time_window import (
    EARLIEST_VACANT_CHECK_IN,
    TimeOption,
    TimeWindow,
    WindowConstraint,
    compute_earliest_check_in,
)
from pousada.booking.timeofday import TIME_SLOTS, TimeOfDay, add_buffer, format_buffer_hours, parse_time
from pousada.booking.types import Accommodation, BlockedRange, ProposedStay
from pousada.booking.validator import StayQuote, validate_stay

__all__ = [
    "Accommodation",
    "AvailabilityIndex",
    "BlockedRange",
    "BookingError",
    "CapacityExceededError",
    "DataError",
    "DateUnavailableError",
    "EARLIEST_VACANT_CHECK_IN",
    "InvalidRangeError",
    "InvalidStatusError",
    "InvalidTimeError",
    "NotFoundError",
    "ProposedStay",
    "StayQuote",
    "TIME_SLOTS",
    "TimeOfDay",
    "TimeOption",
    "TimeUnavailableError",
    "TimeWindow",
    "ValidationError",
    "WindowConstraint",
    "add_buffer",
    "compute_availability",
    "compute_earliest_check_in",
    "format_buffer_hours",
    "parse_time",
    "validate_stay",
]
