from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from src.service.cinema.driving_adapter.schema.column_bound import ensure_int32


class MovieCreateRequest(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            'example': {
                'title': 'Inception',
                'genre': 'Sci-Fi',
                'duration': 148,
                'rating': 8.8,
                'releaseYear': 2010,
            }
        },
    )

    # Defaults + validate_default so a missing field gets the same message as a blank one
    title: Optional[str] = Field(default=None, validate_default=True)
    genre: Optional[str] = Field(default=None, validate_default=True)
    duration: Optional[int] = Field(default=None, validate_default=True)
    rating: Optional[float] = None
    release_year: Optional[int] = Field(default=None, validate_default=True)

    @field_validator('title')
    @classmethod
    def validate_title(cls, v: Optional[str]) -> str:
        if v is None or not v.strip():
            raise ValueError('Title is required')
        return v

    @field_validator('genre')
    @classmethod
    def validate_genre(cls, v: Optional[str]) -> str:
        if v is None or not v.strip():
            raise ValueError('Genre is required')
        return v

    @field_validator('duration')
    @classmethod
    def validate_duration(cls, v: Optional[int]) -> int:
        if v is None:
            raise ValueError('Duration is required')
        if v < 0:
            raise ValueError('Duration cannot be negative')
        return ensure_int32(v, label='Duration')

    @field_validator('rating')
    @classmethod
    def validate_rating(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and not 0 <= v <= 10:
            raise ValueError('Rating must be between 0 and 10')
        return v

    @field_validator('release_year')
    @classmethod
    def validate_release_year(cls, v: Optional[int]) -> int:
        if v is None:
            raise ValueError('Release year is required')
        if v < 0:
            raise ValueError('Release year cannot be negative')
        return ensure_int32(v, label='Release year')


class MovieUpdateRequest(BaseModel):
    """Every field optional; domain range checks happen when the change is applied."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={'example': {'title': 'Inception', 'rating': 9.0}},
    )

    title: Optional[str] = None
    genre: Optional[str] = None
    duration: Optional[int] = None
    rating: Optional[float] = None
    release_year: Optional[int] = None

    @field_validator('duration', 'release_year')
    @classmethod
    def validate_stored_int(cls, v: Optional[int], info: ValidationInfo) -> Optional[int]:
        if v is None:
            return v
        label = 'Duration' if info.field_name == 'duration' else 'Release year'
        return ensure_int32(v, label=label)


class MovieResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    title: str
    genre: str
    duration: int
    rating: Optional[float] = None
    release_year: int
