from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.booking.app.interface.i_room_query_repo import IRoomQueryRepo
from src.service.booking.domain.entity.room_entity import Room
from src.service.booking.driven_adapter.model.room_model import RoomModel


class RoomQueryRepoImpl(IRoomQueryRepo):
    def __init__(self, *, session: AsyncSession):
        self.session = session

    @staticmethod
    def _to_entity(db_room: RoomModel) -> Room:
        return Room(
            id=db_room.id,
            name=db_room.name,
            capacity=db_room.capacity,
            hotel_id=db_room.hotel_id,
            created_at=db_room.created_at,
            updated_at=db_room.updated_at,
        )

    @Logger.io
    async def get_by_id(self, *, room_id: int, for_update: bool = False) -> Optional[Room]:
        stmt = select(RoomModel).where(RoomModel.id == room_id)
        if for_update:
            # Rendered as FOR UPDATE on PostgreSQL, dropped by SQLite
            stmt = stmt.with_for_update()

        result = await self.session.execute(stmt)
        db_room = result.scalar_one_or_none()

        if not db_room:
            return None

        return RoomQueryRepoImpl._to_entity(db_room)
