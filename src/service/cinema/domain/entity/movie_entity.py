from typing import Optional

import attrs

from src.platform.exception.exceptions import ValidationError


MIN_RATING = 0.0
MAX_RATING = 10.0


def _validate_non_empty_string(instance: object, attribute: attrs.Attribute, value: str) -> None:
    if not value or not value.strip():
        raise ValidationError(f'Movie {attribute.name} cannot be empty')


def _validate_duration(instance: object, attribute: attrs.Attribute, value: int) -> None:
    if value < 0:
        raise ValidationError('Duration cannot be negative')


def _validate_rating(instance: object, attribute: attrs.Attribute, value: Optional[float]) -> None:
    if value is not None and not MIN_RATING <= value <= MAX_RATING:
        raise ValidationError('Rating must be between 0 and 10')


def _validate_release_year(instance: object, attribute: attrs.Attribute, value: int) -> None:
    if value < 0:
        raise ValidationError('ReleaseYear cannot be negative')


def title_key(title: str) -> str:
    """Case-insensitive identity of a title, stored in a unique column."""
    return title.lower()


@attrs.define
class MovieEntity:
    title: str = attrs.field(validator=_validate_non_empty_string)
    genre: str
    duration: int = attrs.field(validator=_validate_duration)
    release_year: int = attrs.field(validator=_validate_release_year)
    rating: Optional[float] = attrs.field(default=None, validator=_validate_rating)
    id: Optional[int] = None

    @property
    def title_key(self) -> str:
        return title_key(self.title)

    def is_renamed_by(self, new_title: Optional[str]) -> bool:
        return new_title is not None and title_key(new_title) != self.title_key

    def apply_changes(
        self,
        *,
        title: Optional[str] = None,
        genre: Optional[str] = None,
        duration: Optional[int] = None,
        rating: Optional[float] = None,
        release_year: Optional[int] = None,
    ) -> 'MovieEntity':
        """
        Partial update: an argument left as None keeps the current value.

        A title that only differs in letter case from the current one is not
        a rename, and an empty genre is treated as "no change".
        """
        changes: dict = {}
        if self.is_renamed_by(title):
            changes['title'] = title
        if genre:
            changes['genre'] = genre
        if duration is not None:
            changes['duration'] = duration
        if rating is not None:
            changes['rating'] = rating
        if release_year is not None:
            changes['release_year'] = release_year

        # evolve() re-runs the field validators
        return attrs.evolve(self, **changes)
