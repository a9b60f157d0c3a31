"""Shared test configuration and fixtures.

The availability core is pure, so most tests build ``BlockedRange`` lists
directly.  API tests run against the real FastAPI app with:
- ``get_db`` overridden by a mock session (no database needed),
- ``get_now`` pinned to ``NOW``,
- the store functions patched with ``AsyncMock`` through ``fake_store``.
"""

import uuid
from collections.abc import AsyncGenerator
from dataclasses import dataclass, field
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from helpers import ACCOMMODATION_ID, NOW, stored_reservation
from pousada.api.deps import get_db, get_now
from pousada.booking import Accommodation, BlockedRange
from pousada.main import app
from pousada.models.reservation import ACTIVE_RESERVATION_STATUSES

# ---------------------------------------------------------------------------
# Core fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def accommodation() -> Accommodation:
    """A two-guest chalet at 200.00 per night with a 1.5h cleaning buffer."""
    return Accommodation(
        id=ACCOMMODATION_ID,
        capacity=2,
        price_per_night=Decimal("200.00"),
        cleaning_buffer_hours=Decimal("1.5"),
        title="Chalé Mirante",
    )


# ---------------------------------------------------------------------------
# Store fake
# ---------------------------------------------------------------------------


@dataclass
class FakeStore:
    """Handles on the patched ``pousada.services.store`` functions.

    ``ranges`` are extra blocked ranges; ``reservations`` are stored
    reservations, blocking their nights while pending or confirmed.
    """

    accommodation: Accommodation | None
    ranges: list[BlockedRange] = field(default_factory=list)
    reservations: dict[uuid.UUID, SimpleNamespace] = field(default_factory=dict)
    get_accommodation: AsyncMock = field(default_factory=AsyncMock)
    list_blocked_ranges: AsyncMock = field(default_factory=AsyncMock)
    insert_reservation: AsyncMock = field(default_factory=AsyncMock)
    get_reservation: AsyncMock = field(default_factory=AsyncMock)
    save_reservation: AsyncMock = field(default_factory=AsyncMock)
    delete_reservation: AsyncMock = field(default_factory=AsyncMock)
    list_manual_blocks: AsyncMock = field(default_factory=AsyncMock)
    insert_manual_block: AsyncMock = field(default_factory=AsyncMock)
    delete_manual_block: AsyncMock = field(default_factory=AsyncMock)


@pytest.fixture
def fake_store(accommodation: Accommodation):
    """Patch every store function; tests mutate ``ranges`` / ``accommodation``."""
    fake = FakeStore(accommodation=accommodation)

    async def _get_accommodation(db, accommodation_id):
        if fake.accommodation is not None and fake.accommodation.id == accommodation_id:
            return fake.accommodation
        return None

    async def _list_blocked_ranges(db, accommodation_id, exclude_reservation_id=None):
        ranges = list(fake.ranges)
        ranges.extend(
            BlockedRange(
                accommodation_id=stored.accommodation_id,
                start_date=stored.check_in_date,
                end_date=stored.check_out_date,
                end_time=stored.check_out_time,
            )
            for stored in fake.reservations.values()
            if stored.status in ACTIVE_RESERVATION_STATUSES and stored.id != exclude_reservation_id
        )
        return ranges

    async def _insert_reservation(db, quote, user_id=None):
        stored = stored_reservation(quote, user_id)
        fake.reservations[stored.id] = stored
        return stored

    async def _get_reservation(db, reservation_id):
        return fake.reservations.get(reservation_id)

    async def _save_reservation(db, reservation, changes):
        for name, value in changes.items():
            setattr(reservation, name, value)
        return reservation

    async def _delete_reservation(db, reservation_id):
        return fake.reservations.pop(reservation_id, None) is not None

    fake.get_accommodation.side_effect = _get_accommodation
    fake.list_blocked_ranges.side_effect = _list_blocked_ranges
    fake.insert_reservation.side_effect = _insert_reservation
    fake.get_reservation.side_effect = _get_reservation
    fake.save_reservation.side_effect = _save_reservation
    fake.delete_reservation.side_effect = _delete_reservation

    with (
        patch("pousada.services.store.get_accommodation", fake.get_accommodation),
        patch("pousada.services.store.list_blocked_ranges", fake.list_blocked_ranges),
        patch("pousada.services.store.insert_reservation", fake.insert_reservation),
        patch("pousada.services.store.get_reservation", fake.get_reservation),
        patch("pousada.services.store.save_reservation", fake.save_reservation),
        patch("pousada.services.store.delete_reservation", fake.delete_reservation),
        patch("pousada.services.store.list_manual_blocks", fake.list_manual_blocks),
        patch("pousada.services.store.insert_manual_block", fake.insert_manual_block),
        patch("pousada.services.store.delete_manual_block", fake.delete_manual_block),
    ):
        yield fake


# ---------------------------------------------------------------------------
# HTTP client
# ---------------------------------------------------------------------------


@pytest.fixture
def db_session() -> MagicMock:
    return MagicMock(name="AsyncSession")


@pytest_asyncio.fixture
async def client(db_session: MagicMock) -> AsyncGenerator[AsyncClient, None]:
    """Provide an httpx AsyncClient wired to a mock session and fixed clock."""

    async def override_get_db() -> AsyncGenerator[MagicMock, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_now] = lambda: NOW

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

    app.dependency_overrides.clear()
