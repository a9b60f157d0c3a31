"""Pydantic v2 request/response schemas for manual block endpoints."""

import uuid
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field


class ManualBlockCreate(BaseModel):
    """Schema for closing a date range of an accommodation."""

    start_date: date
    end_date: date
    reason: str | None = Field(None, max_length=500)


class ManualBlockResponse(BaseModel):
    id: uuid.UUID
    accommodation_id: uuid.UUID
    start_date: date
    end_date: date
    reason: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ManualBlockListResponse(BaseModel):
    items: list[ManualBlockResponse]
    total: int
