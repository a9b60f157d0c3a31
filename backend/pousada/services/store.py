"""Store access: the only place that talks to the database.

Reads produce the core's plain value types so the availability functions
never see ORM objects.
"""

import logging
import uuid
from datetime import date
from decimal import Decimal
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pousada.booking.types import Accommodation, BlockedRange
from pousada.booking.validator import StayQuote
from pousada.config import settings
from pousada.models.accommodation import Accommodation as AccommodationRow
from pousada.models.manual_block import ManualBlock
from pousada.models.reservation import ACTIVE_RESERVATION_STATUSES, Reservation

logger = logging.getLogger(__name__)


def _to_accommodation(row: AccommodationRow) -> Accommodation:
    return Accommodation(
        id=row.id,
        capacity=row.capacity,
        price_per_night=row.price_per_night,
        cleaning_buffer_hours=(
            row.cleaning_buffer_hours
            if row.cleaning_buffer_hours is not None
            else Decimal(str(settings.default_cleaning_buffer_hours))
        ),
        standard_check_in_time=row.standard_check_in_time.strftime("%H:%M") if row.standard_check_in_time else None,
        default_check_out_time=row.default_check_out_time.strftime("%H:%M") if row.default_check_out_time else None,
        title=row.title,
    )


async def get_accommodation(db: AsyncSession, accommodation_id: uuid.UUID) -> Accommodation | None:
    """Fetch an active accommodation, or ``None`` when it does not exist."""
    result = await db.execute(
        select(AccommodationRow).where(
            AccommodationRow.id == accommodation_id,
            AccommodationRow.is_active.is_(True),
        )
    )
    row = result.scalar_one_or_none()
    return _to_accommodation(row) if row is not None else None


async def list_blocked_ranges(
    db: AsyncSession,
    accommodation_id: uuid.UUID,
    exclude_reservation_id: uuid.UUID | None = None,
) -> list[BlockedRange]:
    """Snapshot of active reservations plus manual blocks for one unit.

    ``exclude_reservation_id`` leaves one reservation out, so that it can be
    re-validated against everything else when it is edited.
    """
    query = (
        select(
            Reservation.check_in_date,
            Reservation.check_out_date,
            Reservation.check_out_time,
        )
        .where(
            Reservation.accommodation_id == accommodation_id,
            Reservation.status.in_(ACTIVE_RESERVATION_STATUSES),
        )
        .order_by(Reservation.check_in_date)
    )
    if exclude_reservation_id is not None:
        query = query.where(Reservation.id != exclude_reservation_id)
    reservations = await db.execute(query)
    blocks = await db.execute(
        select(ManualBlock.start_date, ManualBlock.end_date)
        .where(ManualBlock.accommodation_id == accommodation_id)
        .order_by(ManualBlock.start_date)
    )

    ranges = [
        BlockedRange(
            accommodation_id=accommodation_id,
            start_date=check_in,
            end_date=check_out,
            end_time=check_out_time,
            is_manual=False,
        )
        for check_in, check_out, check_out_time in reservations.all()
    ]
    ranges.extend(
        BlockedRange(accommodation_id=accommodation_id, start_date=start, end_date=end, is_manual=True)
        for start, end in blocks.all()
    )
    logger.debug("Loaded %d blocked ranges for accommodation %s", len(ranges), accommodation_id)
    return ranges


async def insert_reservation(
    db: AsyncSession,
    quote: StayQuote,
    user_id: uuid.UUID | None = None,
) -> Reservation:
    """Persist an accepted quote as a ``pending`` reservation."""
    reservation = Reservation(
        accommodation_id=quote.accommodation_id,
        user_id=user_id,
        check_in_date=quote.check_in_date,
        check_out_date=quote.check_out_date,
        check_in_time=quote.check_in_time.to_time(),
        check_out_time=quote.check_out_time.to_time(),
        guest_count=quote.guest_count,
        total_price=quote.total_price,
        status="pending",
    )
    db.add(reservation)
    await db.flush()
    await db.refresh(reservation)
    logger.info(
        "Reservation %s created for accommodation %s (%s -> %s)",
        reservation.id,
        reservation.accommodation_id,
        reservation.check_in_date,
        reservation.check_out_date,
    )
    return reservation


async def get_reservation(db: AsyncSession, reservation_id: uuid.UUID) -> Reservation | None:
    result = await db.execute(select(Reservation).where(Reservation.id == reservation_id))
    return result.scalar_one_or_none()


async def save_reservation(db: AsyncSession, reservation: Reservation, changes: dict[str, Any]) -> Reservation:
    """Apply ``changes`` to a stored reservation and flush them."""
    for field, value in changes.items():
        setattr(reservation, field, value)
    db.add(reservation)
    await db.flush()
    await db.refresh(reservation)
    logger.info("Reservation %s updated: %s", reservation.id, ", ".join(sorted(changes)))
    return reservation


async def delete_reservation(db: AsyncSession, reservation_id: uuid.UUID) -> bool:
    """Delete a reservation; ``False`` when it does not exist."""
    reservation = await get_reservation(db, reservation_id)
    if reservation is None:
        return False
    await db.delete(reservation)
    await db.flush()
    logger.info("Reservation %s deleted", reservation_id)
    return True


async def list_manual_blocks(db: AsyncSession, accommodation_id: uuid.UUID) -> list[ManualBlock]:
    result = await db.execute(
        select(ManualBlock).where(ManualBlock.accommodation_id == accommodation_id).order_by(ManualBlock.start_date)
    )
    return list(result.scalars().all())


async def insert_manual_block(
    db: AsyncSession,
    accommodation_id: uuid.UUID,
    start_date: date,
    end_date: date,
    reason: str | None = None,
) -> ManualBlock:
    block = ManualBlock(
        accommodation_id=accommodation_id,
        start_date=start_date,
        end_date=end_date,
        reason=reason,
    )
    db.add(block)
    await db.flush()
    await db.refresh(block)
    logger.info("Manual block %s created for accommodation %s", block.id, accommodation_id)
    return block


async def delete_manual_block(db: AsyncSession, block_id: uuid.UUID) -> bool:
    """Delete a manual block; ``False`` when it does not exist."""
    result = await db.execute(select(ManualBlock).where(ManualBlock.id == block_id))
    block = result.scalar_one_or_none()
    if block is None:
        return False
    await db.delete(block)
    await db.flush()
    logger.info("Manual block %s deleted", block_id)
    return True
