"""Tests for the booking flow service layer (store patched)."""

import uuid
from datetime import date, time
from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError

from helpers import ACCOMMODATION_ID, NOW, TODAY, reservation
from pousada.booking import (
    DateUnavailableError,
    InvalidRangeError,
    InvalidStatusError,
    NotFoundError,
    ProposedStay,
    TimeUnavailableError,
    WindowConstraint,
)
from pousada.services.booking_service import (
    create_manual_block,
    load_availability,
    load_time_window,
    quote_stay,
    submit_reservation,
    update_reservation,
)

pytestmark = pytest.mark.asyncio

D = date.fromisoformat


def _stay(check_in: str = "2024-07-01", check_out: str = "2024-07-04", check_in_time: str = "14:00") -> ProposedStay:
    return ProposedStay(
        accommodation_id=ACCOMMODATION_ID,
        check_in_date=D(check_in),
        check_in_time=check_in_time,
        check_out_date=D(check_out),
        check_out_time="11:00",
        guest_count=2,
    )


async def test_load_availability_uses_today_from_now(db_session, fake_store):
    fake_store.ranges = [reservation("2024-06-01", "2024-06-04"), reservation("2024-06-12", "2024-06-14")]

    snapshot = await load_availability(db_session, ACCOMMODATION_ID, NOW)
    assert snapshot.availability.today == TODAY
    assert snapshot.availability.is_fully_blocked(D("2024-06-12"))
    assert snapshot.availability.is_partially_blocked(D("2024-06-14"))
    assert snapshot.accommodation.id == ACCOMMODATION_ID


async def test_load_availability_unknown(db_session, fake_store):
    with pytest.raises(NotFoundError):
        await load_availability(db_session, uuid.uuid4(), NOW)


async def test_load_time_window_uses_accommodation_buffer(db_session, fake_store):
    fake_store.ranges = [reservation("2024-06-12", "2024-06-14", "10:00")]

    _, window = await load_time_window(db_session, ACCOMMODATION_ID, D("2024-06-14"), NOW)
    assert str(window.earliest_check_in) == "11:30"
    assert window.constraint is WindowConstraint.CLEANING_BUFFER


async def test_each_call_loads_a_fresh_snapshot(db_session, fake_store):
    await quote_stay(db_session, _stay(), NOW)
    fake_store.ranges = [reservation("2024-07-02", "2024-07-03")]

    with pytest.raises(DateUnavailableError):
        await quote_stay(db_session, _stay(), NOW)
    assert fake_store.list_blocked_ranges.await_count == 2


async def test_submit_reservation_persists_quote(db_session, fake_store):
    user_id = uuid.uuid4()

    stored = await submit_reservation(db_session, _stay(), NOW, user_id=user_id)
    assert stored.status == "pending"
    assert stored.user_id == user_id
    fake_store.insert_reservation.assert_awaited_once()
    assert fake_store.insert_reservation.await_args.kwargs == {"user_id": user_id}


async def test_submit_reservation_translates_overlap_constraint(db_session, fake_store):
    fake_store.insert_reservation.side_effect = IntegrityError("INSERT", {}, Exception("overlap"))

    with pytest.raises(DateUnavailableError, match="booked by someone else"):
        await submit_reservation(db_session, _stay(), NOW)


async def test_create_manual_block_checks_dates(db_session, fake_store):
    with pytest.raises(InvalidRangeError):
        await create_manual_block(db_session, ACCOMMODATION_ID, D("2024-06-20"), D("2024-06-19"), None, today=TODAY)
    with pytest.raises(InvalidRangeError):
        await create_manual_block(db_session, ACCOMMODATION_ID, D("2024-06-09"), D("2024-06-19"), None, today=TODAY)
    fake_store.insert_manual_block.assert_not_awaited()


async def test_create_manual_block_blank_reason(db_session, fake_store):
    await create_manual_block(db_session, ACCOMMODATION_ID, D("2024-06-20"), D("2024-06-22"), "", today=TODAY)
    fake_store.insert_manual_block.assert_awaited_once_with(
        db_session, ACCOMMODATION_ID, D("2024-06-20"), D("2024-06-22"), None
    )


# ---------------------------------------------------------------------------
# Reservation lifecycle
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("current", "requested"),
    [
        ("pending", "confirmed"),
        ("pending", "cancelled"),
        ("confirmed", "cancelled"),
        ("confirmed", "concluded"),
    ],
)
async def test_allowed_status_changes(db_session, fake_store, current, requested):
    stored = await submit_reservation(db_session, _stay(), NOW)
    stored.status = current

    updated = await update_reservation(db_session, stored.id, {"status": requested}, NOW)
    assert updated.status == requested
    fake_store.save_reservation.assert_awaited_once_with(db_session, stored, {"status": requested})


@pytest.mark.parametrize(
    ("current", "requested"),
    [
        ("pending", "concluded"),
        ("confirmed", "pending"),
        ("cancelled", "pending"),
        ("cancelled", "confirmed"),
        ("concluded", "cancelled"),
    ],
)
async def test_forbidden_status_changes(db_session, fake_store, current, requested):
    stored = await submit_reservation(db_session, _stay(), NOW)
    stored.status = current

    with pytest.raises(InvalidStatusError):
        await update_reservation(db_session, stored.id, {"status": requested}, NOW)
    fake_store.save_reservation.assert_not_awaited()


async def test_unchanged_status_is_not_saved(db_session, fake_store):
    stored = await submit_reservation(db_session, _stay(), NOW)

    assert await update_reservation(db_session, stored.id, {"status": "pending"}, NOW) is stored
    fake_store.save_reservation.assert_not_awaited()


async def test_update_unknown_reservation(db_session, fake_store):
    with pytest.raises(NotFoundError, match="Reservation not found"):
        await update_reservation(db_session, uuid.uuid4(), {"status": "confirmed"}, NOW)


async def test_reschedule_leaves_itself_out_of_the_snapshot(db_session, fake_store):
    stored = await submit_reservation(db_session, _stay(), NOW)

    updated = await update_reservation(
        db_session, stored.id, {"check_in_date": D("2024-07-02"), "check_in_time": "15:30"}, NOW
    )
    assert fake_store.list_blocked_ranges.await_args.kwargs == {"exclude_reservation_id": stored.id}
    assert updated.check_in_date == D("2024-07-02")
    assert updated.check_in_time == time(15, 30)
    assert updated.total_price == Decimal("400.00")


async def test_reschedule_respects_cleaning_after_previous_guest(db_session, fake_store):
    fake_store.ranges = [reservation("2024-06-28", "2024-07-01", "11:00")]
    stored = await submit_reservation(db_session, _stay(), NOW)

    with pytest.raises(TimeUnavailableError):
        await update_reservation(db_session, stored.id, {"check_in_time": "12:00"}, NOW)


async def test_reschedule_lost_race(db_session, fake_store):
    stored = await submit_reservation(db_session, _stay(), NOW)
    fake_store.save_reservation.side_effect = IntegrityError("UPDATE", {}, Exception("overlap"))

    with pytest.raises(DateUnavailableError, match="booked by someone else"):
        await update_reservation(db_session, stored.id, {"check_out_date": D("2024-07-05")}, NOW)


async def test_cancelled_nights_are_bookable_again(db_session, fake_store):
    stored = await submit_reservation(db_session, _stay(), NOW)
    with pytest.raises(DateUnavailableError):
        await quote_stay(db_session, _stay(), NOW)

    await update_reservation(db_session, stored.id, {"status": "cancelled"}, NOW)
    quote = await quote_stay(db_session, _stay(), NOW)
    assert quote.nights == 3
