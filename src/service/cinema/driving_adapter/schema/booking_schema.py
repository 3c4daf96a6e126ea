from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from src.service.cinema.driving_adapter.schema.column_bound import ensure_int32


class BookingRequest(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            'example': {
                'showtimeId': 1,
                'seatNumber': 15,
                'userId': '84438967-f68f-4fa0-b620-0f08217e76af',
            }
        },
    )

    showtime_id: Optional[int] = Field(default=None, validate_default=True)
    seat_number: Optional[int] = Field(default=None, validate_default=True)
    user_id: Optional[str] = Field(default=None, validate_default=True)

    @field_validator('showtime_id')
    @classmethod
    def validate_showtime_id(cls, v: Optional[int]) -> int:
        if v is None:
            raise ValueError('Showtime ID is required')
        return ensure_int32(v, label='Showtime ID')

    @field_validator('seat_number')
    @classmethod
    def validate_seat_number(cls, v: Optional[int]) -> int:
        if v is None:
            raise ValueError('Seat number is required')
        if v <= 0:
            raise ValueError('Seat number must be positive')
        return ensure_int32(v, label='Seat number')

    @field_validator('user_id')
    @classmethod
    def validate_user_id(cls, v: Optional[str]) -> str:
        if v is None or not v.strip():
            raise ValueError('User ID is required')
        return v


class BookingResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    booking_id: str
