from typing import Optional

from src.platform.exception.exceptions import DomainError
from src.service.booking.domain.enum.booking_rejection import BookingRejection


_DEFAULT_MESSAGES: dict[BookingRejection, str] = {
    BookingRejection.NOT_FOUND: 'Not found',
    BookingRejection.NOT_ELIGIBLE: 'Ticket does not allow hotel booking',
    BookingRejection.FULL_CAPACITY: 'Room is at full capacity',
    BookingRejection.NOT_OWNER: 'Booking does not belong to user',
}


class BookingRejectedError(DomainError):
    """Raised by admission control, carries the rejection reason for the boundary to map"""

    def __init__(self, rejection: BookingRejection, message: Optional[str] = None) -> None:
        self.rejection = rejection
        super().__init__(message or _DEFAULT_MESSAGES[rejection])
