from abc import ABC, abstractmethod
from typing import Optional

from src.service.booking.domain.entity.room_entity import Room


class IRoomQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, room_id: int, for_update: bool = False) -> Optional[Room]:
        """
        Args:
            room_id: Room ID
            for_update: Lock the room row until the transaction ends, so concurrent
                admissions to the same room count occupancy one after another
        """
        pass
