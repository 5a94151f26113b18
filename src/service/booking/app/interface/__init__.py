"""Application layer interfaces (Ports)"""

from src.service.booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.booking.app.interface.i_enrollment_query_repo import IEnrollmentQueryRepo
from src.service.booking.app.interface.i_room_query_repo import IRoomQueryRepo
from src.service.booking.app.interface.i_ticket_query_repo import ITicketQueryRepo

__all__ = [
    'IBookingCommandRepo',
    'IBookingQueryRepo',
    'IEnrollmentQueryRepo',
    'IRoomQueryRepo',
    'ITicketQueryRepo',
]
