from datetime import datetime, timezone
from typing import Optional

import attrs

from src.service.booking.domain.entity.room_entity import Room


@attrs.define
class Booking:
    user_id: int
    room_id: int
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def create(cls, *, user_id: int, room_id: int) -> 'Booking':
        now = datetime.now(timezone.utc)
        return cls(user_id=user_id, room_id=room_id, created_at=now, updated_at=now)

    def move_to_room(self, *, room_id: int) -> 'Booking':
        return attrs.evolve(self, room_id=room_id, updated_at=datetime.now(timezone.utc))


@attrs.define
class BookingWithRoom:
    """A user's booking projected for display: its id and the full room it occupies"""

    id: int
    room: Room
