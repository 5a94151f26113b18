from datetime import datetime
from typing import Optional

import attrs

from src.service.booking.domain.enum.ticket_status import TicketStatus


@attrs.define
class TicketType:
    id: int
    name: str
    price: int
    is_remote: bool
    includes_hotel: bool


@attrs.define
class Ticket:
    id: int
    enrollment_id: int
    ticket_type: TicketType
    status: TicketStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def allows_hotel_booking(self) -> bool:
        return (
            self.status == TicketStatus.PAID
            and not self.ticket_type.is_remote
            and self.ticket_type.includes_hotel
        )
