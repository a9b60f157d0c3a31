"""Pydantic v2 request/response schemas for reservation endpoints."""

import uuid
from datetime import date, datetime, time
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

_TIME_PATTERN = r"^\d{2}:\d{2}$"

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class ReservationRequest(BaseModel):
    """A proposed stay, used both for quotes and for new reservations.

    Date ordering and capacity are checked by the availability core so the
    guest gets its specific message rather than a schema error.
    """

    accommodation_id: uuid.UUID
    check_in_date: date
    check_out_date: date
    check_in_time: str = Field(..., pattern=_TIME_PATTERN)
    check_out_time: str | None = Field(None, pattern=_TIME_PATTERN)
    guest_count: int = 1
    user_id: uuid.UUID | None = None


class ReservationUpdate(BaseModel):
    """Partial update of a reservation. All fields optional.

    Changing any stay field re-validates the reservation against the other
    blocked ranges and re-prices it.
    """

    status: str | None = Field(None, pattern="^(pending|confirmed|cancelled|concluded)$")
    check_in_date: date | None = None
    check_out_date: date | None = None
    check_in_time: str | None = Field(None, pattern=_TIME_PATTERN)
    check_out_time: str | None = Field(None, pattern=_TIME_PATTERN)
    guest_count: int | None = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class QuoteResponse(BaseModel):
    """An accepted stay with its price; nothing is persisted."""

    accommodation_id: uuid.UUID
    check_in_date: date
    check_in_time: str
    check_out_date: date
    check_out_time: str
    guest_count: int
    nights: int
    price_per_night: Decimal
    total_price: Decimal


class ReservationResponse(BaseModel):
    """Reservation as stored."""

    id: uuid.UUID
    accommodation_id: uuid.UUID
    user_id: uuid.UUID | None = None
    check_in_date: date
    check_out_date: date
    check_in_time: time
    check_out_time: time
    guest_count: int
    total_price: Decimal
    status: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
