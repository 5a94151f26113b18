"""
Integration tests for the booking repositories behind SqlAlchemyUnitOfWork

Runs the real SQLAlchemy repositories against SQLite.
"""

import pytest

from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.service.booking.domain.booking_rejected_error import BookingRejectedError
from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.domain.enum.booking_rejection import BookingRejection
from src.service.booking.domain.enum.ticket_status import TicketStatus


@pytest.mark.integration
class TestBookingRepositories:
    @pytest.fixture
    def uow(self, session_maker) -> SqlAlchemyUnitOfWork:
        return SqlAlchemyUnitOfWork(session_maker)

    async def test_create_commits_and_counts_occupancy(self, uow, seeder) -> None:
        # Arrange
        user = await seeder.create_eligible_user()
        room = await seeder.create_room_with_hotel(capacity=2)

        # Act
        async with uow:
            booking = await uow.booking_command_repo.create(
                booking=Booking.create(user_id=user.id, room_id=room.id)
            )
            await uow.commit()

        # Assert
        assert booking.id is not None
        async with uow:
            assert await uow.booking_query_repo.count_by_room_id(room_id=room.id) == 1
            stored = await uow.booking_query_repo.get_by_user_id(user_id=user.id)
        assert stored is not None
        assert stored.id == booking.id
        assert stored.room_id == room.id

    async def test_leaving_without_commit_rolls_back(self, uow, seeder) -> None:
        # Arrange
        user = await seeder.create_user()
        room = await seeder.create_room_with_hotel()

        # Act
        async with uow:
            await uow.booking_command_repo.create(
                booking=Booking.create(user_id=user.id, room_id=room.id)
            )

        # Assert
        assert await seeder.count_bookings(room_id=room.id) == 0

    async def test_update_room_keeps_identity(self, uow, seeder) -> None:
        # Arrange
        user = await seeder.create_user()
        hotel = await seeder.create_hotel()
        old_room = await seeder.create_room(hotel_id=hotel.id, name='101')
        new_room = await seeder.create_room(hotel_id=hotel.id, name='102')
        seeded = await seeder.create_booking(user_id=user.id, room_id=old_room.id)

        # Act
        async with uow:
            booking = await uow.booking_query_repo.get_by_user_id(user_id=user.id)
            updated = await uow.booking_command_repo.update_room(
                booking=booking.move_to_room(room_id=new_room.id)
            )
            await uow.commit()

        # Assert
        assert updated.id == seeded.id
        assert updated.user_id == user.id
        stored = await seeder.get_booking(booking_id=seeded.id)
        assert stored.room_id == new_room.id

    async def test_second_booking_for_same_user_is_rejected(self, uow, seeder) -> None:
        """
        Given: User already holds a booking
        When: Inserting another booking for that user directly through the repo
        Then: The unique user_id index turns it into NOT_ELIGIBLE and nothing is added
        """
        # Arrange
        user = await seeder.create_user()
        room = await seeder.create_room_with_hotel()
        await seeder.create_booking(user_id=user.id, room_id=room.id)

        # Act & Assert
        with pytest.raises(BookingRejectedError, match='User already has a booking') as exc_info:
            async with uow:
                await uow.booking_command_repo.create(
                    booking=Booking.create(user_id=user.id, room_id=room.id)
                )
                await uow.commit()

        assert exc_info.value.rejection == BookingRejection.NOT_ELIGIBLE
        assert await seeder.count_bookings(room_id=room.id) == 1

    async def test_get_with_room_projects_room(self, uow, seeder) -> None:
        # Arrange
        user = await seeder.create_user()
        room = await seeder.create_room_with_hotel(capacity=4)
        seeded = await seeder.create_booking(user_id=user.id, room_id=room.id)

        # Act
        async with uow:
            booking = await uow.booking_query_repo.get_with_room_by_user_id(user_id=user.id)
            missing = await uow.booking_query_repo.get_with_room_by_user_id(user_id=user.id + 1)

        # Assert
        assert booking.id == seeded.id
        assert booking.room.id == room.id
        assert booking.room.capacity == 4
        assert booking.room.hotel_id == room.hotel_id
        assert missing is None

    async def test_room_lookup_with_lock(self, uow, seeder) -> None:
        # Arrange
        room = await seeder.create_room_with_hotel(capacity=2)

        # Act
        async with uow:
            locked = await uow.room_query_repo.get_by_id(room_id=room.id, for_update=True)
            missing = await uow.room_query_repo.get_by_id(room_id=room.id + 100)

        # Assert
        assert locked.id == room.id
        assert locked.capacity == 2
        assert missing is None

    async def test_ticket_lookup_carries_ticket_type(self, uow, seeder) -> None:
        # Arrange
        user = await seeder.create_eligible_user(status=TicketStatus.RESERVED, is_remote=True)

        # Act
        async with uow:
            enrollment = await uow.enrollment_query_repo.get_by_user_id(user_id=user.id)
            ticket = await uow.ticket_query_repo.get_by_enrollment_id(enrollment_id=enrollment.id)

        # Assert
        assert enrollment.user_id == user.id
        assert ticket.status == TicketStatus.RESERVED
        assert ticket.ticket_type.is_remote is True
        assert ticket.allows_hotel_booking() is False
