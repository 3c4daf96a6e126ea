from datetime import datetime
from typing import Callable, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import (
    CustomBaseError,
    InternalError,
    MovieNotFoundError,
    StorageConflictError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.cinema_metrics import metrics
from src.platform.observability.tracing import record_rejection
from src.service.cinema.domain.entity.showtime_entity import ShowtimeEntity
from src.service.cinema.domain.showtime_schedule import ensure_fits_movie, ensure_no_conflicts


def movie_not_found_by_id(movie_id: int) -> MovieNotFoundError:
    return MovieNotFoundError(f"Movie with ID '{movie_id}' not found")


class CreateShowtimeUseCase:
    """
    Schedule a new showtime

    Flow (single transaction):
    1. Resolve the movie (MovieNotFound)
    2. Check the window covers the movie duration (InvalidShowtime)
    3. Take the theater lock, then read overlapping showtimes (OverlappingShowtime)
    4. Insert and return the showtime joined with its movie
    """

    def __init__(self, *, uow_factory: Callable[[], AbstractUnitOfWork]) -> None:
        self.uow_factory = uow_factory
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow_factory: Callable[[], AbstractUnitOfWork] = Depends(
            Provide[Container.unit_of_work.provider]
        ),
    ) -> Self:
        return cls(uow_factory=uow_factory)

    @Logger.io
    async def create(
        self,
        *,
        movie_id: int,
        theater: str,
        start_time: datetime,
        end_time: datetime,
        price: float,
    ) -> ShowtimeEntity:
        with self.tracer.start_as_current_span(
            'use_case.create_showtime',
            attributes={'showtime.theater': theater, 'movie.id': movie_id},
        ):
            try:
                created = await self._schedule(
                    movie_id=movie_id,
                    theater=theater,
                    start_time=start_time,
                    end_time=end_time,
                    price=price,
                )
            except CustomBaseError as e:
                record_rejection(e)
                metrics.record_showtime_schedule(
                    operation='create', result=e.error_type.lower()
                )
                raise

            metrics.record_showtime_schedule(operation='create', result='accepted')
            Logger.base.info(
                f'📅 [CREATE_SHOWTIME] Scheduled showtime {created.id} in "{theater}" '
                f'{start_time.isoformat()} - {end_time.isoformat()}'
            )
            return created

    async def _schedule(
        self,
        *,
        movie_id: int,
        theater: str,
        start_time: datetime,
        end_time: datetime,
        price: float,
    ) -> ShowtimeEntity:
        try:
            async with self.uow_factory() as uow:
                movie = await uow.movie_repo.get_by_id(movie_id=movie_id)
                if movie is None:
                    raise movie_not_found_by_id(movie_id)

                ensure_fits_movie(movie=movie, start_time=start_time, end_time=end_time)

                await uow.showtime_repo.lock_theater(theater=theater)
                ensure_no_conflicts(
                    theater=theater,
                    start_time=start_time,
                    end_time=end_time,
                    scheduled=await uow.showtime_repo.find_overlapping(
                        theater=theater, start_time=start_time, end_time=end_time
                    ),
                )

                created = await uow.showtime_repo.create(
                    showtime=ShowtimeEntity(
                        movie_id=movie_id,
                        theater=theater,
                        start_time=start_time,
                        end_time=end_time,
                        price=price,
                    )
                )
                enriched = await uow.showtime_repo.get_with_movie_by_id(showtime_id=created.id)
                await uow.commit()
        except StorageConflictError as e:
            # Foreign key rejected: the movie was deleted after we read it
            metrics.record_storage_conflict(operation='create_showtime')
            async with self.uow_factory() as uow:
                if await uow.movie_repo.get_by_id(movie_id=movie_id) is None:
                    raise movie_not_found_by_id(movie_id) from e
            raise InternalError('Internal database error', details=str(e)) from e

        return enriched or created
