"""
Unit test configuration for the booking service.

Provides an in-memory unit of work whose repositories are AsyncMocks,
so use cases run their full flow without a database.
"""

from unittest.mock import AsyncMock

import pytest

from src.platform.database.unit_of_work import AbstractUnitOfWork


class FakeUnitOfWork(AbstractUnitOfWork):
    def __init__(self) -> None:
        self.booking_command_repo = AsyncMock()
        self.booking_query_repo = AsyncMock()
        self.room_query_repo = AsyncMock()
        self.enrollment_query_repo = AsyncMock()
        self.ticket_query_repo = AsyncMock()
        self.committed = False
        self.rolled_back = False

    async def _commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        # rollback after commit is a no-op, mirror that so tests can assert on it
        if not self.committed:
            self.rolled_back = True


@pytest.fixture
def uow() -> FakeUnitOfWork:
    return FakeUnitOfWork()
