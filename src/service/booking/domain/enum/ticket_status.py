from enum import StrEnum


class TicketStatus(StrEnum):
    RESERVED = 'RESERVED'  # enrolled but not paid yet
    PAID = 'PAID'
