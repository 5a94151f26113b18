from src.platform.logging.loguru_io import Logger
from src.service.booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.booking.app.interface.i_room_query_repo import IRoomQueryRepo
from src.service.booking.domain.booking_rejected_error import BookingRejectedError
from src.service.booking.domain.entity.room_entity import Room
from src.service.booking.domain.enum.booking_rejection import BookingRejection


class RoomCapacityChecker:
    """
    Decides whether a room can take one more booking.

    Read-only. Run it inside the same unit of work as the write it guards:
    the room row is locked FOR UPDATE, so the occupancy it counts stays true
    until that transaction commits.
    """

    def __init__(
        self, *, room_query_repo: IRoomQueryRepo, booking_query_repo: IBookingQueryRepo
    ) -> None:
        self.room_query_repo = room_query_repo
        self.booking_query_repo = booking_query_repo

    @Logger.io
    async def check_room_availability(self, *, room_id: int) -> Room:
        room = await self.room_query_repo.get_by_id(room_id=room_id, for_update=True)
        if not room:
            raise BookingRejectedError(BookingRejection.NOT_FOUND, 'Room not found')

        occupancy = await self.booking_query_repo.count_by_room_id(room_id=room_id)
        if room.is_full(occupancy=occupancy):
            Logger.base.info(
                f'🚫 [CAPACITY] Room {room_id} is full ({occupancy}/{room.capacity})'
            )
            raise BookingRejectedError(BookingRejection.FULL_CAPACITY)

        return room
