from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.booking.domain.booking_rejected_error import BookingRejectedError
from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.domain.enum.booking_rejection import BookingRejection
from src.service.booking.driven_adapter.model.booking_model import BookingModel
from src.service.booking.driven_adapter.repo.booking_query_repo_impl import BookingQueryRepoImpl


class BookingCommandRepoImpl(IBookingCommandRepo):
    def __init__(self, *, session: AsyncSession):
        self.session = session

    @Logger.io
    async def create(self, *, booking: Booking) -> Booking:
        db_booking = BookingModel(user_id=booking.user_id, room_id=booking.room_id)
        self.session.add(db_booking)
        try:
            await self.session.flush()
        except IntegrityError as e:
            # booking.user_id is unique, a concurrent create for the same user lost the race
            raise BookingRejectedError(
                BookingRejection.NOT_ELIGIBLE, 'User already has a booking'
            ) from e
        await self.session.refresh(db_booking)

        return BookingQueryRepoImpl._to_entity(db_booking)

    @Logger.io
    async def update_room(self, *, booking: Booking) -> Booking:
        db_booking = await self.session.get(BookingModel, booking.id)
        if db_booking is None:
            raise ValueError(f'Booking {booking.id} does not exist')

        db_booking.room_id = booking.room_id
        if booking.updated_at is not None:
            db_booking.updated_at = booking.updated_at
        await self.session.flush()
        await self.session.refresh(db_booking)

        return BookingQueryRepoImpl._to_entity(db_booking)
