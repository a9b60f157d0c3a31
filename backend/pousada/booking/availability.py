"""Availability index: fully and partially blocked days for one unit."""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date
from typing import Any

from pousada.booking.types import BlockedRange, as_blocked_range

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AvailabilityIndex:
    """Derived blocking sets for a snapshot of ranges.

    ``fully_blocked_dates`` holds the nights covered by some range.  Days
    before ``today`` are fully blocked as well; use ``is_fully_blocked`` to
    ask about a day rather than testing set membership directly.
    """

    today: date
    fully_blocked_dates: frozenset[date]
    partial_block_dates: frozenset[date]
    ranges: tuple[BlockedRange, ...] = ()

    def is_fully_blocked(self, day: date) -> bool:
        return day < self.today or day in self.fully_blocked_dates

    def is_partially_blocked(self, day: date) -> bool:
        return day in self.partial_block_dates

    def is_selectable_check_in(self, day: date) -> bool:
        """Whether a calendar should let a guest pick ``day`` for check-in.

        Checkout days stay selectable; the time window decides from when.
        """
        if day < self.today:
            return False
        if self.is_partially_blocked(day):
            return True
        return day not in self.fully_blocked_dates

    def blocked_nights(self, check_in: date, check_out: date) -> list[date]:
        """Nights of ``[check_in, check_out)`` that cannot be booked."""
        return [
            date.fromordinal(o)
            for o in range(check_in.toordinal(), check_out.toordinal())
            if self.is_fully_blocked(date.fromordinal(o))
        ]


def compute_availability(
    ranges: Iterable["BlockedRange | Mapping[str, Any]"],
    today: date,
) -> AvailabilityIndex:
    """Compute the blocked days of one accommodation.

    Every night ``start_date <= d < end_date`` is fully blocked.  The
    ``end_date`` of a reservation with a checkout time is partially blocked
    unless another range already blocks that night.  Overlapping and
    adjacent ranges collapse into the same sets.

    ``today`` is the property-local calendar day.  Raises ``DataError`` on
    malformed dates or checkout times; no partial result is returned.
    """
    snapshot = tuple(as_blocked_range(item) for item in ranges)

    fully: set[date] = set()
    for blocked in snapshot:
        fully.update(blocked.nights())

    partial = {
        blocked.end_date
        for blocked in snapshot
        if not blocked.is_manual and blocked.end_time is not None and blocked.end_date not in fully
    }

    logger.debug(
        "Availability computed from %d ranges: %d blocked nights, %d checkout days",
        len(snapshot),
        len(fully),
        len(partial),
    )
    return AvailabilityIndex(
        today=today,
        fully_blocked_dates=frozenset(fully),
        partial_block_dates=frozenset(partial),
        ranges=snapshot,
    )
