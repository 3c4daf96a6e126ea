from typing import Callable, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import (
    InternalError,
    MovieNotFoundError,
    StorageConflictError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.cinema_metrics import metrics
from src.service.cinema.app.command.create_movie_use_case import duplicate_title_error
from src.service.cinema.domain.entity.movie_entity import MovieEntity


def movie_not_found_by_title(title: str) -> MovieNotFoundError:
    return MovieNotFoundError(f"Movie with title '{title}' not found")


class UpdateMovieUseCase:
    """
    Partial update of a movie found by its current (exact) title

    Fields passed as None keep their value. Range checks run on the
    resulting entity, so an out-of-range value raises ValidationError.
    """

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
    async def update(
        self,
        *,
        title: str,
        new_title: Optional[str] = None,
        genre: Optional[str] = None,
        duration: Optional[int] = None,
        rating: Optional[float] = None,
        release_year: Optional[int] = None,
    ) -> MovieEntity:
        try:
            async with self.uow_factory() as uow:
                movie = await uow.movie_repo.get_by_title(title=title, for_update=True)
                if movie is None:
                    raise movie_not_found_by_title(title)

                updated = movie.apply_changes(
                    title=new_title,
                    genre=genre,
                    duration=duration,
                    rating=rating,
                    release_year=release_year,
                )
                if movie.is_renamed_by(new_title) and await uow.movie_repo.title_exists(
                    title=updated.title
                ):
                    raise duplicate_title_error(updated.title)

                saved = await uow.movie_repo.update(movie=updated)
                await uow.commit()
        except StorageConflictError as e:
            metrics.record_storage_conflict(operation='update_movie')
            async with self.uow_factory() as uow:
                movie = await uow.movie_repo.get_by_title(title=title)
                if movie is None:
                    raise movie_not_found_by_title(title) from e
                if movie.is_renamed_by(new_title) and await uow.movie_repo.title_exists(
                    title=new_title  # type: ignore[arg-type]
                ):
                    raise duplicate_title_error(new_title) from e  # type: ignore[arg-type]
            raise InternalError('Internal database error', details=str(e)) from e

        Logger.base.info(f'✏️ [UPDATE_MOVIE] Updated movie {saved.id} "{saved.title}"')
        return saved
