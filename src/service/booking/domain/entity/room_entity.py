from datetime import datetime
from typing import Optional

import attrs


@attrs.define
class Room:
    id: int
    name: str
    capacity: int
    hotel_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def is_full(self, *, occupancy: int) -> bool:
        return occupancy >= self.capacity
