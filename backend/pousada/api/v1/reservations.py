"""Reservations API router: quote, submit and manage stays.

Stay rejections come from the availability core as a ``ValidationError``
and is rendered by the app-level exception handlers.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from pousada.api.deps import get_db, get_now
from pousada.booking import ProposedStay
from pousada.config import settings
from pousada.models.reservation import Reservation
from pousada.schemas.common import ErrorResponse, MessageResponse
from pousada.schemas.reservation import QuoteResponse, ReservationRequest, ReservationResponse, ReservationUpdate
from pousada.services import store
from pousada.services.booking_service import quote_stay, submit_reservation, update_reservation

router = APIRouter(prefix="/api/v1/reservations", tags=["reservations"])

_REJECTIONS = {
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
}


def _to_stay(body: ReservationRequest) -> ProposedStay:
    return ProposedStay(
        accommodation_id=body.accommodation_id,
        check_in_date=body.check_in_date,
        check_in_time=body.check_in_time,
        check_out_date=body.check_out_date,
        check_out_time=body.check_out_time or settings.default_check_out_time,
        guest_count=body.guest_count,
    )


@router.post(
    "/quote",
    response_model=QuoteResponse,
    responses=_REJECTIONS,
    summary="Validate a stay and compute its price",
)
async def create_quote(
    body: ReservationRequest,
    db: AsyncSession = Depends(get_db),
    now: datetime = Depends(get_now),
) -> dict:
    """Run every availability check without persisting anything."""
    quote = await quote_stay(db, _to_stay(body), now)
    return {
        "accommodation_id": quote.accommodation_id,
        "check_in_date": quote.check_in_date,
        "check_in_time": str(quote.check_in_time),
        "check_out_date": quote.check_out_date,
        "check_out_time": str(quote.check_out_time),
        "guest_count": quote.guest_count,
        "nights": quote.nights,
        "price_per_night": quote.price_per_night,
        "total_price": quote.total_price,
    }


@router.post(
    "",
    response_model=ReservationResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_REJECTIONS,
    summary="Request a reservation",
)
async def create_reservation(
    body: ReservationRequest,
    db: AsyncSession = Depends(get_db),
    now: datetime = Depends(get_now),
) -> Reservation:
    """Validate the stay against a fresh snapshot and store it as ``pending``.

    The total price is always computed server-side from nights and the
    accommodation's nightly price.
    """
    return await submit_reservation(db, _to_stay(body), now, user_id=body.user_id)


@router.get(
    "/{reservation_id}",
    response_model=ReservationResponse,
    summary="Get a reservation",
)
async def get_reservation(
    reservation_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> Reservation:
    reservation = await store.get_reservation(db, reservation_id)
    if reservation is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Reservation not found",
        )
    return reservation


@router.patch(
    "/{reservation_id}",
    response_model=ReservationResponse,
    responses=_REJECTIONS,
    summary="Change a reservation's status or stay",
)
async def patch_reservation(
    reservation_id: uuid.UUID,
    body: ReservationUpdate,
    db: AsyncSession = Depends(get_db),
    now: datetime = Depends(get_now),
) -> Reservation:
    """Partially update a reservation.

    Status moves pending -> confirmed or cancelled, and confirmed ->
    cancelled or concluded.  Cancelled and concluded reservations no longer
    block their nights.  Date, time or guest changes are validated like a new
    stay, ignoring the reservation's own nights.
    """
    changes = {field: value for field, value in body.model_dump(exclude_unset=True).items() if value is not None}
    return await update_reservation(db, reservation_id, changes, now)


@router.delete(
    "/{reservation_id}",
    response_model=MessageResponse,
    summary="Delete a reservation",
)
async def delete_reservation(
    reservation_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> dict:
    """Delete a reservation and free its nights."""
    if not await store.delete_reservation(db, reservation_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Reservation not found",
        )
    return {"message": "Reservation deleted"}
