"""
Theater schedule rules

Two showtimes in the same theater conflict when their closed intervals
[start, end] share at least one instant:

    s1 <= e2 and s2 <= e1

Boundaries are inclusive, so a showtime starting at the exact minute another
one ends is still a conflict. Callers rely on back-to-back showtimes being
rejected; keep the comparison non-strict.
"""

from datetime import datetime
from typing import Iterable, List, Optional

from src.platform.exception.exceptions import InvalidShowtimeError, OverlappingShowtimeError
from src.service.cinema.domain.entity.movie_entity import MovieEntity
from src.service.cinema.domain.entity.showtime_entity import ShowtimeEntity, screening_minutes


def intervals_overlap(
    start_1: datetime, end_1: datetime, start_2: datetime, end_2: datetime
) -> bool:
    return start_1 <= end_2 and start_2 <= end_1


def find_conflicts(
    *,
    theater: str,
    start_time: datetime,
    end_time: datetime,
    scheduled: Iterable[ShowtimeEntity],
    exclude_id: Optional[int] = None,
) -> List[ShowtimeEntity]:
    """Showtimes in `theater` overlapping [start_time, end_time], ignoring `exclude_id`."""
    return [
        showtime
        for showtime in scheduled
        if showtime.theater == theater
        and (exclude_id is None or showtime.id != exclude_id)
        and intervals_overlap(start_time, end_time, showtime.start_time, showtime.end_time)
    ]


def ensure_fits_movie(*, movie: MovieEntity, start_time: datetime, end_time: datetime) -> None:
    minutes = screening_minutes(start_time, end_time)
    if minutes < movie.duration:
        raise InvalidShowtimeError(
            'Showtime duration is shorter than the movie duration',
            details=(
                f'Showtime duration ({minutes} minutes) is shorter than '
                f'the movie duration ({movie.duration} minutes)'
            ),
        )


def ensure_no_conflicts(
    *,
    theater: str,
    start_time: datetime,
    end_time: datetime,
    scheduled: Iterable[ShowtimeEntity],
    exclude_id: Optional[int] = None,
) -> None:
    conflicts = find_conflicts(
        theater=theater,
        start_time=start_time,
        end_time=end_time,
        scheduled=scheduled,
        exclude_id=exclude_id,
    )
    if conflicts:
        raise OverlappingShowtimeError(
            f"There is already a showtime scheduled in theater '{theater}' "
            'that overlaps with the specified time period.',
            details=(
                f"Conflicting showtimes {sorted(s.id for s in conflicts if s.id is not None)} "
                f"found in theater '{theater}' between "
                f'{start_time.isoformat()} and {end_time.isoformat()}'
            ),
        )
