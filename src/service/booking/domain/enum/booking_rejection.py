"""
Closed set of reasons admission control can refuse a booking operation.

HTTP status codes are assigned by the driving adapter, not here.
"""

from enum import StrEnum


class BookingRejection(StrEnum):
    NOT_FOUND = 'not_found'  # enrollment, room or booking does not exist
    NOT_ELIGIBLE = 'not_eligible'  # ticket missing, unpaid, remote or without hotel
    FULL_CAPACITY = 'full_capacity'
    NOT_OWNER = 'not_owner'  # booking id does not belong to the caller
