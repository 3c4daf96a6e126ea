"""
Unit of Work Pattern - one session and one transaction per use case step

Architecture:
- UoW owns the session lifecycle (opened on enter, closed on exit)
- UoW owns commit/rollback; leaving the block without commit rolls back
- Repositories share the UoW session
- Use cases coordinate several repositories through one UoW
"""

from __future__ import annotations

import abc
from contextlib import AsyncExitStack
from typing import TYPE_CHECKING, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.database.orm_db_setting import Database
from src.platform.exception.exceptions import StorageConflictError


if TYPE_CHECKING:
    from src.service.cinema.app.interface.i_movie_repo import IMovieRepo
    from src.service.cinema.app.interface.i_showtime_repo import IShowtimeRepo
    from src.service.cinema.app.interface.i_ticket_repo import ITicketRepo


class AbstractUnitOfWork(abc.ABC):
    """
    Abstract Unit of Work for the Cinema Service

    Usage:
        async with uow:
            movie = await uow.movie_repo.create(movie=...)
            await uow.commit()
    """

    movie_repo: IMovieRepo
    showtime_repo: IShowtimeRepo
    ticket_repo: ITicketRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args) -> None:
        await self.rollback()

    async def commit(self) -> None:
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """
    SQLAlchemy implementation of Unit of Work

    A fresh instance is needed per transaction; the DI container provides
    it through a Factory provider.
    """

    def __init__(self, database: Database) -> None:
        self.database = database
        self.session: Optional[AsyncSession] = None
        self._exit_stack: Optional[AsyncExitStack] = None

    async def __aenter__(self) -> SqlAlchemyUnitOfWork:
        from src.service.cinema.driven_adapter.repo.movie_repo_impl import MovieRepoImpl
        from src.service.cinema.driven_adapter.repo.showtime_repo_impl import ShowtimeRepoImpl
        from src.service.cinema.driven_adapter.repo.ticket_repo_impl import TicketRepoImpl

        self._exit_stack = AsyncExitStack()
        self.session = await self._exit_stack.enter_async_context(self.database.session())

        # Create repositories with shared session
        self.movie_repo = MovieRepoImpl(self.session)
        self.showtime_repo = ShowtimeRepoImpl(self.session)
        self.ticket_repo = TicketRepoImpl(self.session)

        await super().__aenter__()
        return self

    async def __aexit__(self, *args) -> None:
        try:
            await super().__aexit__(*args)
        finally:
            if self._exit_stack is not None:
                await self._exit_stack.aclose()
            self._exit_stack = None
            self.session = None

    async def _commit(self) -> None:
        assert self.session is not None, 'Unit of work used outside "async with"'
        try:
            await self.session.commit()
        except IntegrityError as e:
            raise StorageConflictError(
                'Commit rejected by storage constraint', constraint=str(e.orig)
            ) from e

    async def rollback(self) -> None:
        if self.session is not None:
            await self.session.rollback()
