"""Pydantic v2 response schemas for availability endpoints."""

import uuid
from datetime import date
from decimal import Decimal

from pydantic import BaseModel


class AvailabilityResponse(BaseModel):
    """Calendar data for one accommodation.

    Days before ``today`` are unavailable as well but are not listed.
    """

    accommodation_id: uuid.UUID
    today: date
    fully_blocked_dates: list[date]
    partial_block_dates: list[date]
    cleaning_buffer_hours: Decimal
    standard_check_in_time: str
    default_check_out_time: str


class TimeOptionResponse(BaseModel):
    time: str
    is_blocked: bool


class CheckInWindowResponse(BaseModel):
    """Check-in time options of a single day."""

    accommodation_id: uuid.UUID
    date: date
    earliest_check_in: str | None = None  # None = no slot left today
    latest_check_out: str | None = None
    constraint: str  # vacant_floor, cleaning_buffer, already_past
    cleaning_buffer_hours: Decimal
    cleaning_buffer_label: str
    options: list[TimeOptionResponse]
