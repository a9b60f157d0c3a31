"""Test data builders shared by the test modules."""

import uuid
from datetime import date, datetime
from types import SimpleNamespace
from zoneinfo import ZoneInfo

from pousada.booking import BlockedRange

# Fixed clock: Monday 10 June 2024, 09:07 at the pousada
TZ = ZoneInfo("America/Sao_Paulo")
NOW = datetime(2024, 6, 10, 9, 7, tzinfo=TZ)
TODAY = NOW.date()

ACCOMMODATION_ID = uuid.UUID("6f1c1d3e-8a54-4f0e-9b1c-2f6a3e9d7c01")


def at(day: str, hh_mm: str) -> datetime:
    """A pousada-local wall-clock time, e.g. ``at("2024-06-10", "09:07")``."""
    return datetime.fromisoformat(f"{day}T{hh_mm}").replace(tzinfo=TZ)


def reservation(start: str, end: str, end_time: str | None = "11:00", accommodation_id=ACCOMMODATION_ID) -> BlockedRange:
    """A reservation-derived range with a checkout time."""
    return BlockedRange(
        accommodation_id=accommodation_id,
        start_date=date.fromisoformat(start),
        end_date=date.fromisoformat(end),
        end_time=end_time,
    )


def manual_block(start: str, end: str, accommodation_id=ACCOMMODATION_ID) -> BlockedRange:
    return BlockedRange(
        accommodation_id=accommodation_id,
        start_date=date.fromisoformat(start),
        end_date=date.fromisoformat(end),
        is_manual=True,
    )


def stored_reservation(quote, user_id=None, status: str = "pending") -> SimpleNamespace:
    """What ``insert_reservation`` returns: an ORM-like object for a quote."""
    return SimpleNamespace(
        id=uuid.uuid4(),
        accommodation_id=quote.accommodation_id,
        user_id=user_id,
        check_in_date=quote.check_in_date,
        check_out_date=quote.check_out_date,
        check_in_time=quote.check_in_time.to_time(),
        check_out_time=quote.check_out_time.to_time(),
        guest_count=quote.guest_count,
        total_price=quote.total_price,
        status=status,
        created_at=datetime(2024, 6, 10, 12, 7),
        updated_at=datetime(2024, 6, 10, 12, 7),
    )
