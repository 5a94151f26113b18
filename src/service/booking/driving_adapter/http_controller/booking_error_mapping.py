"""
Boundary mapping from admission-control rejections to HTTP status codes
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from src.service.booking.domain.booking_rejected_error import BookingRejectedError
from src.service.booking.domain.enum.booking_rejection import BookingRejection


REJECTION_STATUS_CODES: dict[BookingRejection, int] = {
    BookingRejection.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    BookingRejection.NOT_ELIGIBLE: status.HTTP_403_FORBIDDEN,
    BookingRejection.FULL_CAPACITY: status.HTTP_403_FORBIDDEN,
    BookingRejection.NOT_OWNER: status.HTTP_403_FORBIDDEN,
}


async def booking_rejected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    if not isinstance(exc, BookingRejectedError):
        raise exc
    return JSONResponse(
        status_code=REJECTION_STATUS_CODES[exc.rejection],
        content={'detail': exc.message},
    )


def register_booking_exception_handlers(app: FastAPI) -> None:
    # Resolved by MRO, so this wins over the generic CustomBaseError handler
    app.add_exception_handler(BookingRejectedError, booking_rejected_error_handler)
