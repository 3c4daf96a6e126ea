from typing import Callable, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import (
    DuplicateMovieTitleError,
    InternalError,
    StorageConflictError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.cinema_metrics import metrics
from src.service.cinema.domain.entity.movie_entity import MovieEntity


def duplicate_title_error(title: str) -> DuplicateMovieTitleError:
    return DuplicateMovieTitleError(f"A movie titled '{title}' already exists in the system")


class CreateMovieUseCase:
    def __init__(self, *, uow_factory: Callable[[], AbstractUnitOfWork]) -> None:
        self.uow_factory = uow_factory

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
        title: str,
        genre: str,
        duration: int,
        release_year: int,
        rating: Optional[float] = None,
    ) -> MovieEntity:
        movie = MovieEntity(
            title=title,
            genre=genre,
            duration=duration,
            rating=rating,
            release_year=release_year,
        )

        try:
            async with self.uow_factory() as uow:
                if await uow.movie_repo.title_exists(title=title):
                    raise duplicate_title_error(title)

                created = await uow.movie_repo.create(movie=movie)
                await uow.commit()
        except StorageConflictError as e:
            # Another request inserted the same title after our check
            metrics.record_storage_conflict(operation='create_movie')
            async with self.uow_factory() as uow:
                if await uow.movie_repo.title_exists(title=title):
                    raise duplicate_title_error(title) from e
            raise InternalError('Internal database error', details=str(e)) from e

        Logger.base.info(f'🎬 [CREATE_MOVIE] Created movie {created.id} "{created.title}"')
        return created
