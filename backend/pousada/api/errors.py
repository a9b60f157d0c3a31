"""Map availability-core and store errors to HTTP responses.

Validation rejections are expected and logged at INFO; a ``DataError`` is a
data-integrity bug and a store failure is "try again later", both logged as
errors and never reported as a rejection of the guest's stay.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from pousada.booking.errors import (
    DataError,
    DateUnavailableError,
    InvalidStatusError,
    NotFoundError,
    TimeUnavailableError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def _status_for(exc: ValidationError) -> int:
    if isinstance(exc, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, (DateUnavailableError, TimeUnavailableError, InvalidStatusError)):
        return status.HTTP_409_CONFLICT
    return status.HTTP_422_UNPROCESSABLE_ENTITY


async def booking_validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
    logger.info("Rejected %s %s: %s (%s)", request.method, request.url.path, exc.message, exc.code)
    content = {"detail": exc.message, "code": exc.code}
    if isinstance(exc, TimeUnavailableError):
        content["reason"] = exc.reason
    return JSONResponse(status_code=_status_for(exc), content=content)


async def data_error_handler(request: Request, exc: DataError) -> JSONResponse:
    logger.error("Malformed availability data on %s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Availability data is inconsistent; please contact the pousada.", "code": exc.code},
    )


async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Store failure on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Availability is temporarily unavailable, please try again.", "code": "store_unavailable"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, booking_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(DataError, data_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(SQLAlchemyError, store_error_handler)  # type: ignore[arg-type]
