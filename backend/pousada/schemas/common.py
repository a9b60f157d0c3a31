"""Schemas shared by several routers."""

from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Generic message response."""

    message: str


class ErrorResponse(BaseModel):
    """Body of every rejection raised by the availability core."""

    detail: str
    code: str
