"""Booking flow: fetch a snapshot, run the availability core, persist.

Each call loads its own snapshot of blocked ranges, so concurrent callers
share no state.  Validation here is advisory; the overlap exclusion
constraint on ``reservations`` is what finally rejects a double booking.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from pousada.booking import (
    Accommodation,
    AvailabilityIndex,
    DateUnavailableError,
    InvalidRangeError,
    InvalidStatusError,
    NotFoundError,
    ProposedStay,
    StayQuote,
    TimeWindow,
    compute_availability,
    compute_earliest_check_in,
    validate_stay,
)
from pousada.config import settings
from pousada.models.manual_block import ManualBlock
from pousada.models.reservation import ACTIVE_RESERVATION_STATUSES, RESERVATION_TRANSITIONS, Reservation
from pousada.services import store

logger = logging.getLogger(__name__)

_STAY_FIELDS = ("check_in_date", "check_out_date", "check_in_time", "check_out_time", "guest_count")


@dataclass(frozen=True)
class AvailabilitySnapshot:
    """An accommodation together with the index computed from its ranges."""

    accommodation: Accommodation
    availability: AvailabilityIndex


async def _require_accommodation(db: AsyncSession, accommodation_id: uuid.UUID) -> Accommodation:
    accommodation = await store.get_accommodation(db, accommodation_id)
    if accommodation is None:
        raise NotFoundError("Accommodation not found.")
    return accommodation


async def load_availability(
    db: AsyncSession,
    accommodation_id: uuid.UUID,
    now: datetime,
    exclude_reservation_id: uuid.UUID | None = None,
) -> AvailabilitySnapshot:
    """Blocked and checkout-only days of an accommodation as of ``now``."""
    accommodation = await _require_accommodation(db, accommodation_id)
    ranges = await store.list_blocked_ranges(db, accommodation_id, exclude_reservation_id=exclude_reservation_id)
    return AvailabilitySnapshot(
        accommodation=accommodation,
        availability=compute_availability(ranges, today=now.date()),
    )


def _window_for(snapshot: AvailabilitySnapshot, day: date, now: datetime) -> TimeWindow:
    return compute_earliest_check_in(
        day,
        snapshot.availability.ranges,
        snapshot.accommodation.cleaning_buffer_hours,
        now,
        vacant_floor=settings.vacant_check_in_floor,
    )


async def load_time_window(
    db: AsyncSession,
    accommodation_id: uuid.UUID,
    day: date,
    now: datetime,
) -> tuple[AvailabilitySnapshot, TimeWindow]:
    """Check-in time options of ``day`` for an accommodation."""
    snapshot = await load_availability(db, accommodation_id, now)
    return snapshot, _window_for(snapshot, day, now)


async def quote_stay(
    db: AsyncSession,
    stay: ProposedStay,
    now: datetime,
    exclude_reservation_id: uuid.UUID | None = None,
) -> StayQuote:
    """Validate ``stay`` against a fresh snapshot and price it.

    Raises a ``ValidationError`` subclass on rejection.
    """
    snapshot = await load_availability(db, stay.accommodation_id, now, exclude_reservation_id)
    window = _window_for(snapshot, stay.check_in_date, now)
    return validate_stay(stay, snapshot.accommodation, snapshot.availability, window)


async def submit_reservation(
    db: AsyncSession,
    stay: ProposedStay,
    now: datetime,
    user_id: uuid.UUID | None = None,
) -> Reservation:
    """Validate and persist a new ``pending`` reservation."""
    quote = await quote_stay(db, stay, now)
    try:
        return await store.insert_reservation(db, quote, user_id=user_id)
    except IntegrityError as exc:
        # Lost the race against a concurrent booking of the same nights.
        logger.info("Reservation insert for %s rejected by overlap constraint: %s", stay.accommodation_id, exc.orig)
        raise DateUnavailableError("The selected period was booked by someone else in the meantime.") from exc


async def update_reservation(
    db: AsyncSession,
    reservation_id: uuid.UUID,
    changes: dict[str, Any],
    now: datetime,
) -> Reservation:
    """Change the status or the stay of an existing reservation.

    Status changes follow ``RESERVATION_TRANSITIONS``.  Changing dates, times
    or guests re-validates the stay against every other blocked range and
    re-prices it; only pending or confirmed reservations can be changed so.
    """
    reservation = await store.get_reservation(db, reservation_id)
    if reservation is None:
        raise NotFoundError("Reservation not found.")

    updates: dict[str, Any] = {}
    status = changes.get("status", reservation.status)
    if status != reservation.status:
        if status not in RESERVATION_TRANSITIONS.get(reservation.status, ()):
            raise InvalidStatusError(f"A {reservation.status} reservation cannot become {status}.")
        updates["status"] = status

    if any(field in changes for field in _STAY_FIELDS):
        if status not in ACTIVE_RESERVATION_STATUSES:
            raise InvalidStatusError("Only pending or confirmed reservations can be rescheduled.")
        stay = ProposedStay(
            accommodation_id=reservation.accommodation_id,
            check_in_date=changes.get("check_in_date", reservation.check_in_date),
            check_in_time=changes.get("check_in_time", reservation.check_in_time),
            check_out_date=changes.get("check_out_date", reservation.check_out_date),
            check_out_time=changes.get("check_out_time", reservation.check_out_time),
            guest_count=changes.get("guest_count", reservation.guest_count),
        )
        quote = await quote_stay(db, stay, now, exclude_reservation_id=reservation.id)
        updates.update(
            check_in_date=quote.check_in_date,
            check_out_date=quote.check_out_date,
            check_in_time=quote.check_in_time.to_time(),
            check_out_time=quote.check_out_time.to_time(),
            guest_count=quote.guest_count,
            total_price=quote.total_price,
        )

    if not updates:
        return reservation
    try:
        return await store.save_reservation(db, reservation, updates)
    except IntegrityError as exc:
        logger.info("Reservation %s update rejected by overlap constraint: %s", reservation_id, exc.orig)
        raise DateUnavailableError("The selected period was booked by someone else in the meantime.") from exc


async def create_manual_block(
    db: AsyncSession,
    accommodation_id: uuid.UUID,
    start_date: date,
    end_date: date,
    reason: str | None,
    today: date,
) -> ManualBlock:
    """Close ``start_date`` to ``end_date`` (exclusive) for an accommodation."""
    await _require_accommodation(db, accommodation_id)
    if end_date <= start_date:
        raise InvalidRangeError("The block end date must be after its start date.")
    if start_date < today:
        raise InvalidRangeError("A block cannot start in the past.")
    return await store.insert_manual_block(db, accommodation_id, start_date, end_date, reason or None)
