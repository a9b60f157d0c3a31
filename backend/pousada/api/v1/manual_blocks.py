"""Manual blocks API router: administrator-closed date ranges."""

from __future__ import annotations

import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from pousada.api.deps import get_db, get_now
from pousada.models.manual_block import ManualBlock
from pousada.schemas.common import ErrorResponse, MessageResponse
from pousada.schemas.manual_block import ManualBlockCreate, ManualBlockListResponse, ManualBlockResponse
from pousada.services import store
from pousada.services.booking_service import create_manual_block

router = APIRouter(prefix="/api/v1", tags=["manual-blocks"])


@router.get(
    "/accommodations/{accommodation_id}/manual-blocks",
    response_model=ManualBlockListResponse,
    summary="List manual blocks of an accommodation",
)
async def list_manual_blocks(
    accommodation_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> dict:
    items = await store.list_manual_blocks(db, accommodation_id)
    return {"items": items, "total": len(items)}


@router.post(
    "/accommodations/{accommodation_id}/manual-blocks",
    response_model=ManualBlockResponse,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
    summary="Block a date range",
)
async def create_block(
    accommodation_id: uuid.UUID,
    body: ManualBlockCreate,
    db: AsyncSession = Depends(get_db),
    now: datetime = Depends(get_now),
) -> ManualBlock:
    """Close the nights ``start_date`` to ``end_date`` (exclusive).

    The end date must be after the start date and the block cannot start in
    the past.
    """
    return await create_manual_block(
        db,
        accommodation_id,
        body.start_date,
        body.end_date,
        body.reason,
        today=now.date(),
    )


@router.delete(
    "/manual-blocks/{block_id}",
    response_model=MessageResponse,
    summary="Remove a manual block",
)
async def delete_block(
    block_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> dict:
    if not await store.delete_manual_block(db, block_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Manual block not found",
        )
    return {"message": "Manual block deleted"}
