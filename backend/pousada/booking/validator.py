"""Stay validation and pricing.

``validate_stay`` is a pure decision over a snapshot: it never touches the
store.  It is an optimistic pre-check only; two guests racing for the same
nights are separated by the ``reservations`` overlap exclusion constraint
at insert time, not here.
"""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any

from pousada.booking.availability import AvailabilityIndex
from pousada.booking.errors import (
    CapacityExceededError,
    DateUnavailableError,
    InvalidRangeError,
    NotFoundError,
    TimeUnavailableError,
)
from pousada.booking.time_window import TimeWindow, WindowConstraint
from pousada.booking.timeofday import TimeOfDay, format_buffer_hours, parse_time
from pousada.booking.types import Accommodation, ProposedStay

logger = logging.getLogger(__name__)

_CENTS = Decimal("0.01")


@dataclass(frozen=True)
class StayQuote:
    """An accepted stay with its derived nights and price."""

    accommodation_id: Any
    check_in_date: date
    check_in_time: TimeOfDay
    check_out_date: date
    check_out_time: TimeOfDay
    guest_count: int
    nights: int
    price_per_night: Decimal
    total_price: Decimal


def _time_rejection(requested: TimeOfDay, window: TimeWindow) -> TimeUnavailableError:
    earliest = window.earliest_check_in
    if window.constraint is WindowConstraint.ALREADY_PAST:
        if earliest is None:
            message = "No check-in times remain today."
        else:
            message = f"Check-in time {requested} has already passed. Check-in is available from {earliest}."
    elif window.constraint is WindowConstraint.CLEANING_BUFFER:
        message = (
            f"Previous check-out on {window.day:%d/%m/%Y} at {window.latest_check_out}. "
            f"A cleaning buffer of {format_buffer_hours(window.cleaning_buffer_hours)} is required. "
            f"Check-in is available from {earliest}."
        )
    else:
        message = f"Check-in is only allowed from the earliest available time ({earliest})."
    return TimeUnavailableError(message, reason=window.constraint.value)


def validate_stay(
    stay: ProposedStay,
    accommodation: Accommodation | None,
    availability: AvailabilityIndex,
    time_window: TimeWindow,
) -> StayQuote:
    """Accept or reject ``stay``; checks run in order and stop at the first failure.

    1. the accommodation resolves
    2. guest count within ``[1, capacity]``
    3. at least one night
    4. check-in date not fully blocked
    5. check-in time not earlier than the window allows
    6. no fully blocked night in ``[check_in_date, check_out_date)``

    ``time_window`` must be the window of ``stay.check_in_date``.
    """
    if accommodation is None or str(accommodation.id) != str(stay.accommodation_id):
        raise NotFoundError("Accommodation not found.")

    if stay.guest_count < 1:
        raise CapacityExceededError("At least 1 guest is required.")
    if stay.guest_count > accommodation.capacity:
        raise CapacityExceededError(f"The maximum capacity of this accommodation is {accommodation.capacity} guests.")

    if stay.check_out_date <= stay.check_in_date:
        raise InvalidRangeError("Check-out must be at least 1 day after check-in.")

    if availability.is_fully_blocked(stay.check_in_date):
        raise DateUnavailableError("The selected check-in date is unavailable.")

    if time_window.day != stay.check_in_date:
        raise ValueError(
            f"Time window is for {time_window.day.isoformat()}, not check-in date {stay.check_in_date.isoformat()}"
        )
    check_in_time = parse_time(stay.check_in_time)
    if time_window.is_blocked(check_in_time):
        raise _time_rejection(check_in_time, time_window)

    blocked = availability.blocked_nights(stay.check_in_date, stay.check_out_date)
    if blocked:
        logger.info(
            "Stay %s -> %s overlaps %d blocked nights (first %s)",
            stay.check_in_date.isoformat(),
            stay.check_out_date.isoformat(),
            len(blocked),
            blocked[0].isoformat(),
        )
        raise DateUnavailableError("The selected period contains unavailable dates.")

    check_out_time = parse_time(stay.check_out_time)
    nights = (stay.check_out_date - stay.check_in_date).days
    total_price = (accommodation.price_per_night * nights).quantize(_CENTS)

    return StayQuote(
        accommodation_id=accommodation.id,
        check_in_date=stay.check_in_date,
        check_in_time=check_in_time,
        check_out_date=stay.check_out_date,
        check_out_time=check_out_time,
        guest_count=stay.guest_count,
        nights=nights,
        price_per_night=accommodation.price_per_night,
        total_price=total_price,
    )
