from datetime import datetime
from typing import Optional

import attrs


def _validate_positive_price(instance: object, attribute: attrs.Attribute, value: float) -> None:
    if value <= 0:
        raise ValueError('Price must be greater than 0')


@attrs.define
class ShowtimeEntity:
    movie_id: int
    theater: str
    start_time: datetime
    end_time: datetime
    price: float = attrs.field(validator=_validate_positive_price)
    id: Optional[int] = None

    # Filled by the joined read only, never stored on the showtime row
    movie_title: Optional[str] = None
    movie_release_year: Optional[int] = None


def screening_minutes(start_time: datetime, end_time: datetime) -> int:
    """Whole minutes between start and end, truncated toward zero."""
    return int((end_time - start_time).total_seconds() / 60)
