"""
Unit tests for RoomCapacityChecker

Test Focus:
1. Missing room -> NOT_FOUND
2. occupancy >= capacity -> FULL_CAPACITY
3. Room is loaded with a row lock before occupancy is counted
"""

from unittest.mock import AsyncMock

import pytest

from src.service.booking.app.service.room_capacity_checker import RoomCapacityChecker
from src.service.booking.domain.booking_rejected_error import BookingRejectedError
from src.service.booking.domain.entity.room_entity import Room
from src.service.booking.domain.enum.booking_rejection import BookingRejection


@pytest.mark.unit
class TestRoomCapacityChecker:
    @pytest.fixture
    def room(self) -> Room:
        return Room(id=7, name='101', capacity=2, hotel_id=1)

    @pytest.fixture
    def room_query_repo(self) -> AsyncMock:
        return AsyncMock()

    @pytest.fixture
    def booking_query_repo(self) -> AsyncMock:
        return AsyncMock()

    @pytest.fixture
    def checker(
        self, room_query_repo: AsyncMock, booking_query_repo: AsyncMock
    ) -> RoomCapacityChecker:
        return RoomCapacityChecker(
            room_query_repo=room_query_repo, booking_query_repo=booking_query_repo
        )

    @pytest.mark.asyncio
    async def test_room_with_free_slot_is_returned(
        self,
        checker: RoomCapacityChecker,
        room: Room,
        room_query_repo: AsyncMock,
        booking_query_repo: AsyncMock,
    ) -> None:
        """
        Given: Room with capacity 2 and one booking
        When: Checking availability
        Then: The room is returned and was locked for update
        """
        # Arrange
        room_query_repo.get_by_id = AsyncMock(return_value=room)
        booking_query_repo.count_by_room_id = AsyncMock(return_value=1)

        # Act
        result = await checker.check_room_availability(room_id=7)

        # Assert
        assert result == room
        room_query_repo.get_by_id.assert_awaited_once_with(room_id=7, for_update=True)
        booking_query_repo.count_by_room_id.assert_awaited_once_with(room_id=7)

    @pytest.mark.asyncio
    async def test_missing_room_is_not_found(
        self,
        checker: RoomCapacityChecker,
        room_query_repo: AsyncMock,
        booking_query_repo: AsyncMock,
    ) -> None:
        # Arrange
        room_query_repo.get_by_id = AsyncMock(return_value=None)

        # Act & Assert
        with pytest.raises(BookingRejectedError, match='Room not found') as exc_info:
            await checker.check_room_availability(room_id=999)

        assert exc_info.value.rejection == BookingRejection.NOT_FOUND
        booking_query_repo.count_by_room_id.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize('occupancy', [2, 3])
    async def test_room_at_or_over_capacity_is_full(
        self,
        checker: RoomCapacityChecker,
        room: Room,
        room_query_repo: AsyncMock,
        booking_query_repo: AsyncMock,
        occupancy: int,
    ) -> None:
        """
        Given: Room with capacity 2 and 2 (or, after a legacy race, 3) bookings
        When: Checking availability
        Then: FULL_CAPACITY
        """
        # Arrange
        room_query_repo.get_by_id = AsyncMock(return_value=room)
        booking_query_repo.count_by_room_id = AsyncMock(return_value=occupancy)

        # Act & Assert
        with pytest.raises(BookingRejectedError) as exc_info:
            await checker.check_room_availability(room_id=7)

        assert exc_info.value.rejection == BookingRejection.FULL_CAPACITY

    @pytest.mark.asyncio
    async def test_zero_capacity_room_is_always_full(
        self,
        checker: RoomCapacityChecker,
        room_query_repo: AsyncMock,
        booking_query_repo: AsyncMock,
    ) -> None:
        # Arrange
        room_query_repo.get_by_id = AsyncMock(
            return_value=Room(id=8, name='closed', capacity=0, hotel_id=1)
        )
        booking_query_repo.count_by_room_id = AsyncMock(return_value=0)

        # Act & Assert
        with pytest.raises(BookingRejectedError) as exc_info:
            await checker.check_room_availability(room_id=8)

        assert exc_info.value.rejection == BookingRejection.FULL_CAPACITY
