from typing import Callable, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import CustomBaseError, InternalError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.command.update_movie_use_case import movie_not_found_by_title


class DeleteMovieUseCase:
    """
    Delete a movie together with its showtimes and their tickets

    Children are removed by id in dependency order (tickets, showtimes,
    movie) inside one transaction; the movie row stays locked meanwhile so
    no showtime can be attached to it concurrently.
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
    async def delete(self, *, title: str) -> None:
        try:
            async with self.uow_factory() as uow:
                movie = await uow.movie_repo.get_by_title(title=title, for_update=True)
                if movie is None:
                    raise movie_not_found_by_title(title)

                showtime_ids = await uow.showtime_repo.list_ids_by_movie_id(movie_id=movie.id)
                deleted_tickets = await uow.ticket_repo.delete_by_showtime_ids(
                    showtime_ids=showtime_ids
                )
                deleted_showtimes = await uow.showtime_repo.delete_by_ids(
                    showtime_ids=showtime_ids
                )
                await uow.movie_repo.delete_by_id(movie_id=movie.id)
                await uow.commit()
        except CustomBaseError:
            raise
        except Exception as e:
            raise InternalError('Internal database error', details=f'Error: {e!r}') from e

        Logger.base.info(
            f'🗑️ [DELETE_MOVIE] Deleted movie {movie.id} "{title}" '
            f'with {deleted_showtimes} showtimes and {deleted_tickets} tickets'
        )
