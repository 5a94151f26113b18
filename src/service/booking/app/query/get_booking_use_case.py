from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.booking.domain.booking_rejected_error import BookingRejectedError
from src.service.booking.domain.entity.booking_entity import BookingWithRoom
from src.service.booking.domain.enum.booking_rejection import BookingRejection


class GetBookingUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.read_unit_of_work]),
    ) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def get_current_booking(self, *, user_id: int) -> BookingWithRoom:
        async with self.uow:
            booking = await self.uow.booking_query_repo.get_with_room_by_user_id(user_id=user_id)

        if not booking:
            raise BookingRejectedError(BookingRejection.NOT_FOUND, 'Booking not found')

        return booking
