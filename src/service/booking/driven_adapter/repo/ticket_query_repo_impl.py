from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from src.platform.logging.loguru_io import Logger
from src.service.booking.app.interface.i_ticket_query_repo import ITicketQueryRepo
from src.service.booking.domain.entity.ticket_entity import Ticket, TicketType
from src.service.booking.domain.enum.ticket_status import TicketStatus
from src.service.booking.driven_adapter.model.ticket_model import TicketModel


class TicketQueryRepoImpl(ITicketQueryRepo):
    def __init__(self, *, session: AsyncSession):
        self.session = session

    @Logger.io
    async def get_by_enrollment_id(self, *, enrollment_id: int) -> Optional[Ticket]:
        result = await self.session.execute(
            select(TicketModel)
            .options(joinedload(TicketModel.ticket_type))
            .where(TicketModel.enrollment_id == enrollment_id)
        )
        db_ticket = result.scalar_one_or_none()

        if not db_ticket:
            return None

        db_ticket_type = db_ticket.ticket_type
        return Ticket(
            id=db_ticket.id,
            enrollment_id=db_ticket.enrollment_id,
            status=TicketStatus(db_ticket.status),
            ticket_type=TicketType(
                id=db_ticket_type.id,
                name=db_ticket_type.name,
                price=db_ticket_type.price,
                is_remote=db_ticket_type.is_remote,
                includes_hotel=db_ticket_type.includes_hotel,
            ),
            created_at=db_ticket.created_at,
            updated_at=db_ticket.updated_at,
        )
