"""
Unit of Work Pattern - one database session and transaction per use case

Architecture:
- UoW owns the session lifecycle
- UoW owns commit/rollback
- Repositories get the shared session from the UoW
- Use cases coordinate several repositories through the UoW
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession


if TYPE_CHECKING:
    from src.service.booking.app.interface.i_booking_command_repo import IBookingCommandRepo
    from src.service.booking.app.interface.i_booking_query_repo import IBookingQueryRepo
    from src.service.booking.app.interface.i_enrollment_query_repo import IEnrollmentQueryRepo
    from src.service.booking.app.interface.i_room_query_repo import IRoomQueryRepo
    from src.service.booking.app.interface.i_ticket_query_repo import ITicketQueryRepo


class AbstractUnitOfWork(abc.ABC):
    """
    Abstract Unit of Work for the Booking Service

    Responsibilities:
    - Manage database session lifecycle
    - Coordinate transactions across multiple repositories
    - Provide commit/rollback interface

    Usage:
        async with uow:
            booking = await uow.booking_command_repo.create(user_id=1, room_id=2)
            await uow.commit()

    Leaving the block without commit() rolls back.
    """

    # Booking repositories
    booking_command_repo: IBookingCommandRepo
    booking_query_repo: IBookingQueryRepo

    # Read-only lookups used by admission control
    room_query_repo: IRoomQueryRepo
    enrollment_query_repo: IEnrollmentQueryRepo
    ticket_query_repo: ITicketQueryRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        """Commit the transaction"""
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """
    SQLAlchemy implementation of Unit of Work

    A fresh session is opened on every `async with` and closed on exit,
    so one instance serves exactly one transaction at a time.
    """

    def __init__(self, session_factory: Callable[[], AsyncSession]):
        self.session_factory = session_factory
        self.session: Optional[AsyncSession] = None

    async def __aenter__(self):
        from src.service.booking.driven_adapter.repo.booking_command_repo_impl import (
            BookingCommandRepoImpl,
        )
        from src.service.booking.driven_adapter.repo.booking_query_repo_impl import (
            BookingQueryRepoImpl,
        )
        from src.service.booking.driven_adapter.repo.enrollment_query_repo_impl import (
            EnrollmentQueryRepoImpl,
        )
        from src.service.booking.driven_adapter.repo.room_query_repo_impl import (
            RoomQueryRepoImpl,
        )
        from src.service.booking.driven_adapter.repo.ticket_query_repo_impl import (
            TicketQueryRepoImpl,
        )

        self.session = self.session_factory()

        # Create repositories with shared session
        self.booking_command_repo = BookingCommandRepoImpl(session=self.session)
        self.booking_query_repo = BookingQueryRepoImpl(session=self.session)
        self.room_query_repo = RoomQueryRepoImpl(session=self.session)
        self.enrollment_query_repo = EnrollmentQueryRepoImpl(session=self.session)
        self.ticket_query_repo = TicketQueryRepoImpl(session=self.session)

        return await super().__aenter__()

    async def __aexit__(self, *args):
        try:
            await super().__aexit__(*args)
        finally:
            if self.session is not None:
                await self.session.close()
                self.session = None

    async def _commit(self):
        assert self.session is not None
        await self.session.commit()

    async def rollback(self) -> None:
        if self.session is not None:
            await self.session.rollback()
