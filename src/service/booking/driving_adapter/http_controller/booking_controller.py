from typing import Optional

from fastapi import APIRouter, Depends, status
from opentelemetry import trace

from src.platform.exception.exceptions import ForbiddenError
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.command.change_booking_room_use_case import (
    ChangeBookingRoomUseCase,
)
from src.service.booking.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.booking.app.query.get_booking_use_case import GetBookingUseCase
from src.service.booking.domain.entity.user_entity import UserEntity
from src.service.booking.driving_adapter.http_controller.auth.current_user import (
    get_current_user,
)
from src.service.booking.driving_adapter.http_controller.schema.booking_schema import (
    MAX_ID,
    BookingIdResponse,
    BookingResponse,
    BookingRoomRequest,
    RoomResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


def _require_room_id(request: Optional[BookingRoomRequest]) -> int:
    if request is None or request.room_id is None:
        raise ForbiddenError('roomId is required')
    return request.room_id


def _parse_booking_id(raw_booking_id: str) -> int:
    # isdecimal, not isdigit: superscripts pass isdigit but int() rejects them
    if not raw_booking_id.isdecimal() or not 0 < int(raw_booking_id) <= MAX_ID:
        raise ForbiddenError('Invalid bookingId')
    return int(raw_booking_id)


@router.get('', status_code=status.HTTP_200_OK)
@Logger.io
async def get_booking(
    current_user: UserEntity = Depends(get_current_user),
    use_case: GetBookingUseCase = Depends(GetBookingUseCase.depends),
) -> BookingResponse:
    booking = await use_case.get_current_booking(user_id=current_user.id)
    room = booking.room
    return BookingResponse(
        id=booking.id,
        room=RoomResponse(
            id=room.id,
            name=room.name,
            capacity=room.capacity,
            hotel_id=room.hotel_id,
            created_at=room.created_at,
            updated_at=room.updated_at,
        ),
    )


@router.post('', status_code=status.HTTP_200_OK)
@Logger.io
async def create_booking(
    request: Optional[BookingRoomRequest] = None,
    current_user: UserEntity = Depends(get_current_user),
    use_case: CreateBookingUseCase = Depends(CreateBookingUseCase.depends),
) -> BookingIdResponse:
    with tracer.start_as_current_span('controller.create_booking') as span:
        span.set_attribute('user.id', current_user.id)
        room_id = _require_room_id(request)
        span.set_attribute('room.id', room_id)

        booking = await use_case.create_reservation(user_id=current_user.id, room_id=room_id)

        if booking.id is None:
            raise ValueError('Booking ID should not be None after creation.')

        return BookingIdResponse(booking_id=booking.id)


@router.put('', status_code=status.HTTP_200_OK, include_in_schema=False)
@Logger.io
async def change_booking_without_id(
    current_user: UserEntity = Depends(get_current_user),
) -> BookingIdResponse:
    raise ForbiddenError('bookingId is required')


@router.put('/{booking_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def change_booking(
    booking_id: str,
    request: Optional[BookingRoomRequest] = None,
    current_user: UserEntity = Depends(get_current_user),
    use_case: ChangeBookingRoomUseCase = Depends(ChangeBookingRoomUseCase.depends),
) -> BookingIdResponse:
    with tracer.start_as_current_span('controller.change_booking') as span:
        span.set_attribute('user.id', current_user.id)
        room_id = _require_room_id(request)
        parsed_booking_id = _parse_booking_id(booking_id)
        span.set_attribute('room.id', room_id)
        span.set_attribute('booking.id', parsed_booking_id)

        booking = await use_case.change_reservation(
            booking_id=parsed_booking_id, room_id=room_id, user_id=current_user.id
        )
        return BookingIdResponse(booking_id=booking.id or parsed_booking_id)
