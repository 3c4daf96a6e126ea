from typing import Callable, List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.cinema.domain.entity.movie_entity import MovieEntity


class ListMoviesUseCase:
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
    async def list_all(self) -> List[MovieEntity]:
        async with self.uow_factory() as uow:
            movies = await uow.movie_repo.list_all()

        Logger.base.info(f'🎬 [LIST_MOVIES] Found {len(movies)} movies')
        return movies
