from datetime import datetime
from typing import Callable, Self

import attrs
from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import (
    CustomBaseError,
    InternalError,
    ShowtimeNotFoundError,
    StorageConflictError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.cinema_metrics import metrics
from src.platform.observability.tracing import record_rejection
from src.service.cinema.app.command.create_showtime_use_case import movie_not_found_by_id
from src.service.cinema.domain.entity.showtime_entity import ShowtimeEntity
from src.service.cinema.domain.showtime_schedule import ensure_fits_movie, ensure_no_conflicts


def showtime_not_found_by_id(showtime_id: int) -> ShowtimeNotFoundError:
    return ShowtimeNotFoundError(f"Showtime with ID '{showtime_id}' not found")


class UpdateShowtimeUseCase:
    """Full replace of a showtime; duration and overlap checks ignore the showtime itself"""

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
    async def update(
        self,
        *,
        showtime_id: int,
        movie_id: int,
        theater: str,
        start_time: datetime,
        end_time: datetime,
        price: float,
    ) -> ShowtimeEntity:
        with self.tracer.start_as_current_span(
            'use_case.update_showtime',
            attributes={'showtime.id': showtime_id, 'showtime.theater': theater},
        ):
            try:
                updated = await self._reschedule(
                    showtime_id=showtime_id,
                    movie_id=movie_id,
                    theater=theater,
                    start_time=start_time,
                    end_time=end_time,
                    price=price,
                )
            except CustomBaseError as e:
                record_rejection(e)
                metrics.record_showtime_schedule(
                    operation='update', result=e.error_type.lower()
                )
                raise

            metrics.record_showtime_schedule(operation='update', result='accepted')
            Logger.base.info(f'📅 [UPDATE_SHOWTIME] Updated showtime {showtime_id}')
            return updated

    async def _reschedule(
        self,
        *,
        showtime_id: int,
        movie_id: int,
        theater: str,
        start_time: datetime,
        end_time: datetime,
        price: float,
    ) -> ShowtimeEntity:
        try:
            async with self.uow_factory() as uow:
                existing = await uow.showtime_repo.get_by_id(
                    showtime_id=showtime_id, for_update=True
                )
                if existing is None:
                    raise showtime_not_found_by_id(showtime_id)

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
                        theater=theater,
                        start_time=start_time,
                        end_time=end_time,
                        exclude_id=showtime_id,
                    ),
                    exclude_id=showtime_id,
                )

                await uow.showtime_repo.update(
                    showtime=attrs.evolve(
                        existing,
                        movie_id=movie_id,
                        theater=theater,
                        start_time=start_time,
                        end_time=end_time,
                        price=price,
                    )
                )
                enriched = await uow.showtime_repo.get_with_movie_by_id(showtime_id=showtime_id)
                await uow.commit()
        except StorageConflictError as e:
            metrics.record_storage_conflict(operation='update_showtime')
            async with self.uow_factory() as uow:
                if await uow.showtime_repo.get_by_id(showtime_id=showtime_id) is None:
                    raise showtime_not_found_by_id(showtime_id) from e
                if await uow.movie_repo.get_by_id(movie_id=movie_id) is None:
                    raise movie_not_found_by_id(movie_id) from e
            raise InternalError('Internal database error', details=str(e)) from e

        if enriched is None:
            raise showtime_not_found_by_id(showtime_id)
        return enriched
