import time
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.booking.app.service.room_capacity_checker import RoomCapacityChecker
from src.service.booking.domain.booking_rejected_error import BookingRejectedError
from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.domain.enum.booking_rejection import BookingRejection


class ChangeBookingRoomUseCase:
    """
    Move the caller's existing booking to another room

    Eligibility is not re-checked: it was established when the booking was created.
    """

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
    ) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def change_reservation(self, *, booking_id: int, room_id: int, user_id: int) -> Booking:
        """
        Reassign booking_id to room_id

        Flow (single transaction):
        1. Capacity check on the target room (row locked)
        2. Load the caller's booking
        3. Ownership: the caller's booking must be booking_id
        4. Update room_id and updated_at, commit

        Moving into the room the booking already occupies still counts that
        booking, so a full room rejects it as FULL_CAPACITY.

        Raises:
            BookingRejectedError: NOT_FOUND (room / caller has no booking),
                FULL_CAPACITY (target room), NOT_OWNER (booking_id is not the caller's)
        """
        started_at = time.perf_counter()
        with self.tracer.start_as_current_span(
            'use_case.change_reservation',
            attributes={'user.id': user_id, 'room.id': room_id, 'booking.id': booking_id},
        ) as span:
            try:
                async with self.uow:
                    capacity_checker = RoomCapacityChecker(
                        room_query_repo=self.uow.room_query_repo,
                        booking_query_repo=self.uow.booking_query_repo,
                    )
                    await capacity_checker.check_room_availability(room_id=room_id)

                    booking = await self.uow.booking_query_repo.get_by_user_id(user_id=user_id)
                    if not booking:
                        raise BookingRejectedError(BookingRejection.NOT_FOUND, 'Booking not found')
                    if booking.id != booking_id:
                        raise BookingRejectedError(BookingRejection.NOT_OWNER)

                    updated_booking = await self.uow.booking_command_repo.update_room(
                        booking=booking.move_to_room(room_id=room_id)
                    )
                    await self.uow.commit()
            except BookingRejectedError as e:
                span.set_attribute('booking.rejection', e.rejection.value)
                metrics.record_rejection(
                    operation='change',
                    reason=e.rejection.value,
                    duration=time.perf_counter() - started_at,
                )
                raise

            metrics.record_admission(
                operation='change', duration=time.perf_counter() - started_at
            )
            Logger.base.info(
                f'🔁 [CHANGE-BOOKING] Booking {booking_id} moved to room {room_id} by user {user_id}'
            )
            return updated_booking
