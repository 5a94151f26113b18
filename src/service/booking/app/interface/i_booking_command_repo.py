from abc import ABC, abstractmethod

from src.service.booking.domain.entity.booking_entity import Booking


class IBookingCommandRepo(ABC):
    """
    Repository interface for booking writes.

    Writes are flushed, not committed: the unit of work owns the transaction.
    """

    @abstractmethod
    async def create(self, *, booking: Booking) -> Booking:
        """
        Persist a new booking

        Args:
            booking: Booking entity without id

        Returns:
            Booking entity with its generated id
        """
        pass

    @abstractmethod
    async def update_room(self, *, booking: Booking) -> Booking:
        """
        Reassign an existing booking to booking.room_id and refresh updated_at

        Args:
            booking: Booking entity carrying its id and the new room_id

        Returns:
            Updated booking entity
        """
        pass
