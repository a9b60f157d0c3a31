"""Availability API router: calendar data and check-in time options."""

from __future__ import annotations

import uuid
from datetime import date, datetime

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from pousada.api.deps import get_db, get_now
from pousada.booking import format_buffer_hours
from pousada.config import settings
from pousada.schemas.availability import AvailabilityResponse, CheckInWindowResponse, TimeOptionResponse
from pousada.schemas.common import ErrorResponse
from pousada.services.booking_service import load_availability, load_time_window

router = APIRouter(prefix="/api/v1/accommodations", tags=["availability"])


@router.get(
    "/{accommodation_id}/availability",
    response_model=AvailabilityResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Blocked and checkout-only days of an accommodation",
)
async def get_availability(
    accommodation_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    now: datetime = Depends(get_now),
) -> dict:
    """Return the nights that cannot be booked and the checkout days that can
    be booked only after cleaning, plus the default form times."""
    snapshot = await load_availability(db, accommodation_id, now)
    accommodation = snapshot.accommodation
    availability = snapshot.availability

    return {
        "accommodation_id": accommodation.id,
        "today": availability.today,
        "fully_blocked_dates": sorted(availability.fully_blocked_dates),
        "partial_block_dates": sorted(availability.partial_block_dates),
        "cleaning_buffer_hours": accommodation.cleaning_buffer_hours,
        "standard_check_in_time": accommodation.standard_check_in_time or settings.standard_check_in_time,
        "default_check_out_time": accommodation.default_check_out_time or settings.default_check_out_time,
    }


@router.get(
    "/{accommodation_id}/check-in-times",
    response_model=CheckInWindowResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Check-in time options for a day",
)
async def get_check_in_times(
    accommodation_id: uuid.UUID,
    day: date = Query(..., alias="date", description="Candidate check-in date (YYYY-MM-DD)"),
    db: AsyncSession = Depends(get_db),
    now: datetime = Depends(get_now),
) -> dict:
    """Return the 48 half-hour options of ``date`` flagged blocked or available."""
    snapshot, window = await load_time_window(db, accommodation_id, day, now)

    return {
        "accommodation_id": snapshot.accommodation.id,
        "date": window.day,
        "earliest_check_in": str(window.earliest_check_in) if window.earliest_check_in is not None else None,
        "latest_check_out": str(window.latest_check_out) if window.latest_check_out is not None else None,
        "constraint": window.constraint.value,
        "cleaning_buffer_hours": window.cleaning_buffer_hours,
        "cleaning_buffer_label": format_buffer_hours(window.cleaning_buffer_hours),
        "options": [TimeOptionResponse(time=str(opt.time), is_blocked=opt.is_blocked) for opt in window.options],
    }
