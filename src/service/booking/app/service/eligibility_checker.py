from src.platform.logging.loguru_io import Logger
from src.service.booking.app.interface.i_enrollment_query_repo import IEnrollmentQueryRepo
from src.service.booking.app.interface.i_ticket_query_repo import ITicketQueryRepo
from src.service.booking.domain.booking_rejected_error import BookingRejectedError
from src.service.booking.domain.entity.ticket_entity import Ticket
from src.service.booking.domain.enum.booking_rejection import BookingRejection


class EligibilityChecker:
    """
    Decides whether a user may hold a hotel booking: User -> Enrollment -> Ticket -> TicketType.

    The ticket must exist, be PAID, be in-person and include hotel. The rejection
    does not say which of those failed.
    """

    def __init__(
        self,
        *,
        enrollment_query_repo: IEnrollmentQueryRepo,
        ticket_query_repo: ITicketQueryRepo,
    ) -> None:
        self.enrollment_query_repo = enrollment_query_repo
        self.ticket_query_repo = ticket_query_repo

    @Logger.io
    async def check_eligibility(self, *, user_id: int) -> Ticket:
        enrollment = await self.enrollment_query_repo.get_by_user_id(user_id=user_id)
        if not enrollment:
            raise BookingRejectedError(BookingRejection.NOT_FOUND, 'Enrollment not found')

        ticket = await self.ticket_query_repo.get_by_enrollment_id(enrollment_id=enrollment.id)
        if not ticket or not ticket.allows_hotel_booking():
            raise BookingRejectedError(BookingRejection.NOT_ELIGIBLE)

        return ticket
