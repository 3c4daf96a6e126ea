from typing import Callable, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.command.update_showtime_use_case import showtime_not_found_by_id
from src.service.cinema.domain.entity.showtime_entity import ShowtimeEntity


class GetShowtimeUseCase:
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
    async def get_by_id(self, *, showtime_id: int) -> ShowtimeEntity:
        """Showtime with its movie's title and release year."""
        Logger.base.info(f'📅 [GET_SHOWTIME] Loading showtime {showtime_id}')

        async with self.uow_factory() as uow:
            showtime = await uow.showtime_repo.get_with_movie_by_id(showtime_id=showtime_id)

        if showtime is None:
            Logger.base.warning(f'⚠️ [GET_SHOWTIME] Showtime {showtime_id} not found')
            raise showtime_not_found_by_id(showtime_id)

        return showtime
