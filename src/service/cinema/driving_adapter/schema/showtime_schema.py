from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from src.service.cinema.driving_adapter.schema.column_bound import ensure_int32


def to_naive_utc(value: datetime) -> datetime:
    """Timestamps are stored without offset, in UTC."""
    if value.tzinfo is None:
        return value
    try:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    except OverflowError as e:
        # Shifting to UTC left the datetime range (year 1 or year 9999)
        raise ValueError('Timestamp is out of range') from e


class ShowtimeRequest(BaseModel):
    """Body of both create and update (update is a full replace)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            'example': {
                'movieId': 1,
                'theater': 'Hall A',
                'startTime': '2025-02-14T12:00:00',
                'endTime': '2025-02-14T14:30:00',
                'price': 50.2,
            }
        },
    )

    movie_id: Optional[int] = Field(default=None, validate_default=True)
    theater: Optional[str] = Field(default=None, validate_default=True)
    start_time: Optional[datetime] = Field(default=None, validate_default=True)
    end_time: Optional[datetime] = Field(default=None, validate_default=True)
    price: Optional[float] = Field(default=None, validate_default=True)

    @field_validator('movie_id')
    @classmethod
    def validate_movie_id(cls, v: Optional[int]) -> int:
        if v is None:
            raise ValueError('Movie ID is required')
        return ensure_int32(v, label='Movie ID')

    @field_validator('theater')
    @classmethod
    def validate_theater(cls, v: Optional[str]) -> str:
        if v is None or not v.strip():
            raise ValueError('Theater is required')
        return v

    @field_validator('start_time')
    @classmethod
    def validate_start_time(cls, v: Optional[datetime]) -> datetime:
        if v is None:
            raise ValueError('Start time is required')
        return to_naive_utc(v)

    @field_validator('end_time')
    @classmethod
    def validate_end_time(cls, v: Optional[datetime], info: ValidationInfo) -> datetime:
        if v is None:
            raise ValueError('End time is required')
        v = to_naive_utc(v)
        start_time = info.data.get('start_time')
        if start_time is not None and start_time > v:
            raise ValueError('Start time must be before end time')
        return v

    @field_validator('price')
    @classmethod
    def validate_price(cls, v: Optional[float]) -> float:
        if v is None:
            raise ValueError('Price is required')
        if v <= 0:
            raise ValueError('Price must be greater than 0')
        return v


class ShowtimeResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    movie_id: int
    theater: str
    start_time: datetime
    end_time: datetime
    price: float
    movie_title: Optional[str] = None
    movie_release_year: Optional[int] = None
