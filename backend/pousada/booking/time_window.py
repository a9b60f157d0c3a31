"""Earliest check-in time for a day and the half-hour option grid."""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from pousada.booking.timeofday import (
    MINUTES_PER_DAY,
    TIME_SLOTS,
    TimeOfDay,
    add_buffer,
    buffer_minutes,
    next_slot_at_or_after,
    parse_time,
)
from pousada.booking.types import DEFAULT_CLEANING_BUFFER_HOURS, BlockedRange, as_blocked_range

logger = logging.getLogger(__name__)

EARLIEST_VACANT_CHECK_IN = TimeOfDay(8, 0)


class WindowConstraint(str, Enum):
    """What set the earliest check-in time of a window."""

    VACANT_FLOOR = "vacant_floor"
    CLEANING_BUFFER = "cleaning_buffer"
    ALREADY_PAST = "already_past"


@dataclass(frozen=True)
class TimeOption:
    time: TimeOfDay
    is_blocked: bool


@dataclass(frozen=True)
class TimeWindow:
    """Check-in window of one day.

    ``earliest_check_in`` is ``None`` only when the day is today and every
    slot has already elapsed; all options are blocked then.
    """

    day: date
    earliest_check_in: TimeOfDay | None
    constraint: WindowConstraint
    latest_check_out: TimeOfDay | None
    cleaning_buffer_hours: Decimal | float
    options: tuple[TimeOption, ...]

    def is_blocked(self, value: "str | TimeOfDay") -> bool:
        """Whether check-in at ``value`` is earlier than permitted."""
        wanted = parse_time(value)
        if self.earliest_check_in is None:
            return True
        return wanted < self.earliest_check_in


def latest_checkout_on(day: date, ranges: Iterable[BlockedRange]) -> TimeOfDay | None:
    """Latest reservation checkout time falling on ``day``, if any."""
    times = [
        blocked.end_time
        for blocked in ranges
        if not blocked.is_manual and blocked.end_time is not None and blocked.end_date == day
    ]
    return max(times, default=None)


def compute_earliest_check_in(
    day: date,
    ranges: Iterable["BlockedRange | Mapping[str, Any]"],
    cleaning_buffer_hours: "Decimal | float | None",
    now: datetime,
    vacant_floor: "str | TimeOfDay" = EARLIEST_VACANT_CHECK_IN,
) -> TimeWindow:
    """Resolve the earliest check-in time of ``day``.

    Starts at the vacant floor, moves later to the latest same-day checkout
    plus the cleaning buffer, and on today's date moves later again to the
    next half-hour slot that has not elapsed.

    A buffer pushing the checkout past midnight wraps (23:30 + 1h gives
    00:30 on the same day) and that wrapped time is used as-is, without
    comparing it to the vacant floor.  Earliest check-in therefore grows
    with the buffer only while checkout plus buffer stays before midnight;
    past it the wrapped time falls before the checkout itself.

    Raises ``InvalidTimeError`` for malformed times or a negative buffer.
    """
    if cleaning_buffer_hours is None:
        cleaning_buffer_hours = DEFAULT_CLEANING_BUFFER_HOURS
    buffer = buffer_minutes(cleaning_buffer_hours)
    snapshot = [as_blocked_range(item) for item in ranges]

    earliest: TimeOfDay | None = parse_time(vacant_floor)
    constraint = WindowConstraint.VACANT_FLOOR

    latest = latest_checkout_on(day, snapshot)
    if latest is not None:
        after_cleaning = add_buffer(latest, cleaning_buffer_hours)
        wrapped = latest.total_minutes + buffer >= MINUTES_PER_DAY
        if wrapped or after_cleaning > earliest:
            earliest = after_cleaning
            constraint = WindowConstraint.CLEANING_BUFFER

    if day == now.date():
        next_slot = next_slot_at_or_after(now)
        if next_slot is None:
            earliest = None
            constraint = WindowConstraint.ALREADY_PAST
        elif next_slot > earliest:
            earliest = next_slot
            constraint = WindowConstraint.ALREADY_PAST

    options = tuple(TimeOption(time=slot, is_blocked=earliest is None or slot < earliest) for slot in TIME_SLOTS)

    logger.debug(
        "Earliest check-in on %s is %s (%s, latest checkout %s)",
        day.isoformat(),
        earliest,
        constraint.value,
        latest,
    )
    return TimeWindow(
        day=day,
        earliest_check_in=earliest,
        constraint=constraint,
        latest_check_out=latest,
        cleaning_buffer_hours=cleaning_buffer_hours,
        options=options,
    )
