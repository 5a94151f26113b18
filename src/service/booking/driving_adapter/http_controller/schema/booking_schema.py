from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, ValidationError, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core.core_schema import ValidatorFunctionWrapHandler


# Ids are int4 columns, anything larger can never match a row
MAX_ID = 2**31 - 1


class BookingRoomRequest(BaseModel):
    """Body of POST /booking and PUT /booking/{bookingId}"""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={'examples': [{'roomId': 1}]},
    )

    room_id: Optional[StrictInt] = Field(default=None, alias='roomId')

    @field_validator('room_id', mode='wrap')
    @classmethod
    def drop_invalid_room_id(cls, v: Any, handler: ValidatorFunctionWrapHandler) -> Optional[int]:
        # Anything that is not an integer in 1..MAX_ID counts as a missing roomId (403, not 400)
        try:
            room_id = handler(v)
        except ValidationError:
            return None
        if room_id is not None and not 0 < room_id <= MAX_ID:
            return None
        return room_id


class RoomResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    name: str
    capacity: int
    hotel_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BookingResponse(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            'example': {
                'id': 1,
                'Room': {
                    'id': 3,
                    'name': '101',
                    'capacity': 2,
                    'hotelId': 1,
                    'createdAt': '2025-01-10T10:30:00Z',
                    'updatedAt': '2025-01-10T10:30:00Z',
                },
            }
        },
    )

    id: int
    room: RoomResponse = Field(alias='Room')


class BookingIdResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    booking_id: int = Field(alias='bookingId')
