from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from src.platform.logging.loguru_io import Logger
from src.service.booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.booking.domain.entity.booking_entity import Booking, BookingWithRoom
from src.service.booking.driven_adapter.model.booking_model import BookingModel
from src.service.booking.driven_adapter.repo.room_query_repo_impl import RoomQueryRepoImpl


class BookingQueryRepoImpl(IBookingQueryRepo):
    def __init__(self, *, session: AsyncSession):
        self.session = session

    @staticmethod
    def _to_entity(db_booking: BookingModel) -> Booking:
        return Booking(
            id=db_booking.id,
            user_id=db_booking.user_id,
            room_id=db_booking.room_id,
            created_at=db_booking.created_at,
            updated_at=db_booking.updated_at,
        )

    @Logger.io
    async def get_by_user_id(self, *, user_id: int) -> Optional[Booking]:
        result = await self.session.execute(
            select(BookingModel)
            .where(BookingModel.user_id == user_id)
            .order_by(BookingModel.id)
            .limit(1)
        )
        db_booking = result.scalars().first()

        if not db_booking:
            return None

        return BookingQueryRepoImpl._to_entity(db_booking)

    @Logger.io
    async def get_with_room_by_user_id(self, *, user_id: int) -> Optional[BookingWithRoom]:
        result = await self.session.execute(
            select(BookingModel)
            .options(joinedload(BookingModel.room))
            .where(BookingModel.user_id == user_id)
            .order_by(BookingModel.id)
            .limit(1)
        )
        db_booking = result.scalars().first()

        if not db_booking:
            return None

        return BookingWithRoom(
            id=db_booking.id,
            room=RoomQueryRepoImpl._to_entity(db_booking.room),
        )

    @Logger.io
    async def count_by_room_id(self, *, room_id: int) -> int:
        result = await self.session.execute(
            select(func.count(BookingModel.id)).where(BookingModel.room_id == room_id)
        )
        return result.scalar_one()
