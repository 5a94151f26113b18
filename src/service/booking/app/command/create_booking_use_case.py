import time
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.booking.app.service.eligibility_checker import EligibilityChecker
from src.service.booking.app.service.room_capacity_checker import RoomCapacityChecker
from src.service.booking.domain.booking_rejected_error import BookingRejectedError
from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.domain.enum.booking_rejection import BookingRejection


class CreateBookingUseCase:
    """
    Create a hotel room reservation for the caller

    Flow (single transaction):
    1. Eligibility: enrollment exists and its ticket is PAID, in-person, with hotel
    2. The user holds no booking yet (one live booking per user)
    3. Capacity: room exists (row locked) and occupancy < capacity
    4. Insert booking, commit

    Dependencies:
    - uow: Unit of work giving every step the same session and transaction
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
    async def create_reservation(self, *, user_id: int, room_id: int) -> Booking:
        """
        Create reservation after eligibility and capacity checks

        Args:
            user_id: Authenticated caller
            room_id: Room to reserve

        Returns:
            Persisted booking with its id

        Raises:
            BookingRejectedError: NOT_FOUND (no enrollment / no room),
                NOT_ELIGIBLE (ticket or an existing booking), FULL_CAPACITY (room)
        """
        started_at = time.perf_counter()
        with self.tracer.start_as_current_span(
            'use_case.create_reservation',
            attributes={'user.id': user_id, 'room.id': room_id},
        ) as span:
            try:
                async with self.uow:
                    eligibility_checker = EligibilityChecker(
                        enrollment_query_repo=self.uow.enrollment_query_repo,
                        ticket_query_repo=self.uow.ticket_query_repo,
                    )
                    capacity_checker = RoomCapacityChecker(
                        room_query_repo=self.uow.room_query_repo,
                        booking_query_repo=self.uow.booking_query_repo,
                    )

                    await eligibility_checker.check_eligibility(user_id=user_id)
                    if await self.uow.booking_query_repo.get_by_user_id(user_id=user_id):
                        raise BookingRejectedError(
                            BookingRejection.NOT_ELIGIBLE, 'User already has a booking'
                        )
                    await capacity_checker.check_room_availability(room_id=room_id)

                    booking = await self.uow.booking_command_repo.create(
                        booking=Booking.create(user_id=user_id, room_id=room_id)
                    )
                    await self.uow.commit()
            except BookingRejectedError as e:
                span.set_attribute('booking.rejection', e.rejection.value)
                metrics.record_rejection(
                    operation='create',
                    reason=e.rejection.value,
                    duration=time.perf_counter() - started_at,
                )
                raise

            span.set_attribute('booking.id', booking.id or 0)
            metrics.record_admission(
                operation='create', duration=time.perf_counter() - started_at
            )
            Logger.base.info(
                f'🛏️  [CREATE-BOOKING] Booking {booking.id} created for user {user_id} in room {room_id}'
            )
            return booking
