from abc import ABC, abstractmethod
from typing import Optional

from src.service.booking.domain.entity.booking_entity import Booking, BookingWithRoom


class IBookingQueryRepo(ABC):
    """Repository interface for booking read operations"""

    @abstractmethod
    async def get_by_user_id(self, *, user_id: int) -> Optional[Booking]:
        """Return the user's booking, the oldest one if several exist"""
        pass

    @abstractmethod
    async def get_with_room_by_user_id(self, *, user_id: int) -> Optional[BookingWithRoom]:
        pass

    @abstractmethod
    async def count_by_room_id(self, *, room_id: int) -> int:
        """Current occupancy of a room"""
        pass
