"""Booking Domain Enums"""

from src.service.booking.domain.enum.booking_rejection import BookingRejection
from src.service.booking.domain.enum.ticket_status import TicketStatus

__all__ = ['BookingRejection', 'TicketStatus']
