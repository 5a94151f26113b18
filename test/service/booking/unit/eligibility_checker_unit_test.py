"""
Unit tests for EligibilityChecker

Test Focus:
1. No enrollment -> NOT_FOUND
2. No ticket / RESERVED / remote / without hotel -> NOT_ELIGIBLE
3. PAID, in-person, hotel-inclusive ticket passes
"""

from unittest.mock import AsyncMock

import pytest

from src.service.booking.app.service.eligibility_checker import EligibilityChecker
from src.service.booking.domain.booking_rejected_error import BookingRejectedError
from src.service.booking.domain.entity.enrollment_entity import Enrollment
from src.service.booking.domain.entity.ticket_entity import Ticket, TicketType
from src.service.booking.domain.enum.booking_rejection import BookingRejection
from src.service.booking.domain.enum.ticket_status import TicketStatus


def _ticket(
    *,
    status: TicketStatus = TicketStatus.PAID,
    is_remote: bool = False,
    includes_hotel: bool = True,
) -> Ticket:
    return Ticket(
        id=10,
        enrollment_id=5,
        status=status,
        ticket_type=TicketType(
            id=3,
            name='Presencial + Hotel',
            price=600,
            is_remote=is_remote,
            includes_hotel=includes_hotel,
        ),
    )


@pytest.mark.unit
class TestEligibilityChecker:
    @pytest.fixture
    def enrollment_query_repo(self) -> AsyncMock:
        repo = AsyncMock()
        repo.get_by_user_id = AsyncMock(return_value=Enrollment(id=5, user_id=1, name='Ana'))
        return repo

    @pytest.fixture
    def ticket_query_repo(self) -> AsyncMock:
        return AsyncMock()

    @pytest.fixture
    def checker(
        self, enrollment_query_repo: AsyncMock, ticket_query_repo: AsyncMock
    ) -> EligibilityChecker:
        return EligibilityChecker(
            enrollment_query_repo=enrollment_query_repo, ticket_query_repo=ticket_query_repo
        )

    @pytest.mark.asyncio
    async def test_paid_in_person_hotel_ticket_is_eligible(
        self, checker: EligibilityChecker, ticket_query_repo: AsyncMock
    ) -> None:
        # Arrange
        ticket = _ticket()
        ticket_query_repo.get_by_enrollment_id = AsyncMock(return_value=ticket)

        # Act
        result = await checker.check_eligibility(user_id=1)

        # Assert
        assert result == ticket
        ticket_query_repo.get_by_enrollment_id.assert_awaited_once_with(enrollment_id=5)

    @pytest.mark.asyncio
    async def test_user_without_enrollment_is_not_found(
        self,
        checker: EligibilityChecker,
        enrollment_query_repo: AsyncMock,
        ticket_query_repo: AsyncMock,
    ) -> None:
        # Arrange
        enrollment_query_repo.get_by_user_id = AsyncMock(return_value=None)

        # Act & Assert
        with pytest.raises(BookingRejectedError, match='Enrollment not found') as exc_info:
            await checker.check_eligibility(user_id=1)

        assert exc_info.value.rejection == BookingRejection.NOT_FOUND
        ticket_query_repo.get_by_enrollment_id.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        'ticket',
        [
            None,
            _ticket(status=TicketStatus.RESERVED),
            _ticket(is_remote=True),
            _ticket(includes_hotel=False),
        ],
        ids=['no_ticket', 'reserved', 'remote', 'without_hotel'],
    )
    async def test_ineligible_ticket_is_rejected(
        self, checker: EligibilityChecker, ticket_query_repo: AsyncMock, ticket: Ticket | None
    ) -> None:
        # Arrange
        ticket_query_repo.get_by_enrollment_id = AsyncMock(return_value=ticket)

        # Act & Assert
        with pytest.raises(BookingRejectedError) as exc_info:
            await checker.check_eligibility(user_id=1)

        assert exc_info.value.rejection == BookingRejection.NOT_ELIGIBLE
