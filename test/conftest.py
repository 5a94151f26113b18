"""
Test Configuration and Fixtures

This module provides:
- Environment setup that must happen before application modules are imported
- A throwaway SQLite database per test (aiosqlite, schema from the ORM metadata)
- A seeder for users, enrollments, tickets, hotels, rooms and bookings
- A TestClient whose DI container points at the test database

Architecture:
- Unit tests (test/**/unit/): mock repositories, never touch the database
- Integration tests: real SQLAlchemy repositories against SQLite
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings and the loguru sinks are built at import time
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    os.environ['SECRET_KEY'] = 'test_secret_key'
    os.environ['DATABASE_URL'] = 'sqlite+aiosqlite://'
    os.environ.setdefault('SERVICE_NAME', 'test-booking-service')


_early_setup_test_environment()

from collections.abc import AsyncGenerator, Generator  # noqa: E402
from typing import Optional  # noqa: E402

from dependency_injector import providers  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy import select  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool  # noqa: E402

from src.platform.config.di import container  # noqa: E402
from src.platform.database.orm_db_setting import Base, Database  # noqa: E402
from src.service.booking.domain.entity.user_entity import UserEntity  # noqa: E402
from src.service.booking.domain.enum.ticket_status import TicketStatus  # noqa: E402
from src.service.booking.driven_adapter.model import (  # noqa: E402
    BookingModel,
    EnrollmentModel,
    HotelModel,
    RoomModel,
    TicketModel,
    TicketTypeModel,
    UserModel,
)
from src.service.booking.driving_adapter.http_controller.auth.jwt_auth import (  # noqa: E402
    JwtAuth,
)


class BookingDataSeeder:
    """Inserts rows directly through the ORM, one committed session per call"""

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]) -> None:
        self.session_maker = session_maker
        self._email_seq = 0

    async def _add(self, model):
        async with self.session_maker() as session:
            session.add(model)
            await session.commit()
            await session.refresh(model)
            return model

    async def create_user(self, *, email: Optional[str] = None) -> UserModel:
        self._email_seq += 1
        return await self._add(UserModel(email=email or f'user{self._email_seq}@example.com'))

    async def create_ticket_type(
        self, *, is_remote: bool = False, includes_hotel: bool = True
    ) -> TicketTypeModel:
        return await self._add(
            TicketTypeModel(
                name='Presencial + Hotel' if includes_hotel else 'Presencial',
                price=600 if includes_hotel else 250,
                is_remote=is_remote,
                includes_hotel=includes_hotel,
            )
        )

    async def create_enrollment(self, *, user_id: int) -> EnrollmentModel:
        return await self._add(EnrollmentModel(user_id=user_id, name=f'Enrollee {user_id}'))

    async def create_ticket(
        self, *, enrollment_id: int, ticket_type_id: int, status: TicketStatus = TicketStatus.PAID
    ) -> TicketModel:
        return await self._add(
            TicketModel(
                enrollment_id=enrollment_id, ticket_type_id=ticket_type_id, status=status.value
            )
        )

    async def create_hotel(self) -> HotelModel:
        return await self._add(HotelModel(name='Driven Resort', image='https://example.com/h.png'))

    async def create_room(self, *, hotel_id: int, capacity: int = 3, name: str = '101') -> RoomModel:
        return await self._add(RoomModel(name=name, capacity=capacity, hotel_id=hotel_id))

    async def create_booking(self, *, user_id: int, room_id: int) -> BookingModel:
        return await self._add(BookingModel(user_id=user_id, room_id=room_id))

    async def create_eligible_user(
        self,
        *,
        status: TicketStatus = TicketStatus.PAID,
        is_remote: bool = False,
        includes_hotel: bool = True,
    ) -> UserModel:
        """User -> Enrollment -> Ticket(status) -> TicketType(is_remote, includes_hotel)"""
        user = await self.create_user()
        ticket_type = await self.create_ticket_type(
            is_remote=is_remote, includes_hotel=includes_hotel
        )
        enrollment = await self.create_enrollment(user_id=user.id)
        await self.create_ticket(
            enrollment_id=enrollment.id, ticket_type_id=ticket_type.id, status=status
        )
        return user

    async def create_room_with_hotel(self, *, capacity: int = 3) -> RoomModel:
        hotel = await self.create_hotel()
        return await self.create_room(hotel_id=hotel.id, capacity=capacity)

    async def get_booking(self, *, booking_id: int) -> Optional[BookingModel]:
        async with self.session_maker() as session:
            result = await session.execute(select(BookingModel).where(BookingModel.id == booking_id))
            return result.scalar_one_or_none()

    async def count_bookings(self, *, room_id: int) -> int:
        async with self.session_maker() as session:
            result = await session.execute(
                select(BookingModel).where(BookingModel.room_id == room_id)
            )
            return len(result.scalars().all())


@pytest.fixture
async def session_maker(tmp_path: Path) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """File-backed SQLite without pooling, so the TestClient loop can open its own connections"""
    engine = create_async_engine(
        f'sqlite+aiosqlite:///{tmp_path / "booking_test.db"}', poolclass=NullPool
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
def seeder(session_maker: async_sessionmaker[AsyncSession]) -> BookingDataSeeder:
    return BookingDataSeeder(session_maker)


@pytest.fixture
def jwt_auth() -> JwtAuth:
    return JwtAuth()


@pytest.fixture
def auth_headers(jwt_auth: JwtAuth):
    """Build an Authorization header for a user id"""

    def _build(user_id: int) -> dict[str, str]:
        token = jwt_auth.create_jwt_token(UserEntity(id=user_id, email=f'user{user_id}@example.com'))
        return {'Authorization': f'Bearer {token}'}

    return _build


@pytest.fixture
def client(session_maker: async_sessionmaker[AsyncSession]) -> Generator[TestClient, None, None]:
    from test_main import app

    container.database.override(providers.Singleton(Database, session_maker=session_maker))
    container.read_database.override(providers.Singleton(Database, session_maker=session_maker))
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        container.database.reset_override()
        container.read_database.reset_override()
        container.reset_singletons()
