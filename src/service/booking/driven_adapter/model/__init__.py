"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.booking.driven_adapter.model.booking_model import BookingModel
from src.service.booking.driven_adapter.model.enrollment_model import EnrollmentModel
from src.service.booking.driven_adapter.model.hotel_model import HotelModel
from src.service.booking.driven_adapter.model.room_model import RoomModel
from src.service.booking.driven_adapter.model.ticket_model import TicketModel
from src.service.booking.driven_adapter.model.ticket_type_model import TicketTypeModel
from src.service.booking.driven_adapter.model.user_model import UserModel

__all__ = [
    'BookingModel',
    'EnrollmentModel',
    'HotelModel',
    'RoomModel',
    'TicketModel',
    'TicketTypeModel',
    'UserModel',
]
