"""
Showtime Repository Implementation

lock_theater picks a locking strategy per dialect:
- postgresql: transaction-scoped advisory lock keyed by hashtext(theater)
- sqlite: nothing to do, the transaction already holds the write lock (BEGIN IMMEDIATE)
- others: not supported, scheduling raises NotImplementedError
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import delete, select, text
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_showtime_repo import IShowtimeRepo
from src.service.cinema.domain.entity.showtime_entity import ShowtimeEntity
from src.service.cinema.driven_adapter.model.movie_model import MovieModel
from src.service.cinema.driven_adapter.model.showtime_model import ShowtimeModel
from src.service.cinema.driven_adapter.repo.constraint_guard import translate_integrity_error


class ShowtimeRepoImpl(IShowtimeRepo):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @staticmethod
    def _to_entity(
        model: ShowtimeModel,
        *,
        movie_title: Optional[str] = None,
        movie_release_year: Optional[int] = None,
    ) -> ShowtimeEntity:
        return ShowtimeEntity(
            movie_id=model.movie_id,
            theater=model.theater,
            start_time=model.start_time,
            end_time=model.end_time,
            price=model.price,
            id=model.id,
            movie_title=movie_title,
            movie_release_year=movie_release_year,
        )

    @Logger.io
    async def get_by_id(
        self, *, showtime_id: int, for_update: bool = False
    ) -> Optional[ShowtimeEntity]:
        stmt = select(ShowtimeModel).where(ShowtimeModel.id == showtime_id)
        if for_update:
            stmt = stmt.with_for_update()
        model = (await self.session.execute(stmt)).scalar_one_or_none()
        return self._to_entity(model) if model else None

    @Logger.io
    async def get_with_movie_by_id(self, *, showtime_id: int) -> Optional[ShowtimeEntity]:
        result = await self.session.execute(
            select(ShowtimeModel, MovieModel.title, MovieModel.release_year)
            .join(MovieModel, MovieModel.id == ShowtimeModel.movie_id)
            .where(ShowtimeModel.id == showtime_id)
        )
        row = result.one_or_none()
        if row is None:
            return None

        model, movie_title, movie_release_year = row
        return self._to_entity(
            model, movie_title=movie_title, movie_release_year=movie_release_year
        )

    @Logger.io
    async def lock_theater(self, *, theater: str) -> None:
        dialect = self.session.get_bind().dialect.name
        if dialect == 'postgresql':
            await self.session.execute(
                text('SELECT pg_advisory_xact_lock(hashtext(:theater))'),
                {'theater': theater},
            )
        elif dialect != 'sqlite':
            raise NotImplementedError(f'No theater scheduling lock for dialect {dialect!r}')

    @Logger.io
    async def find_overlapping(
        self,
        *,
        theater: str,
        start_time: datetime,
        end_time: datetime,
        exclude_id: Optional[int] = None,
    ) -> List[ShowtimeEntity]:
        # Closed intervals: touching endpoints count as overlap
        stmt = (
            select(ShowtimeModel)
            .where(ShowtimeModel.theater == theater)
            .where(ShowtimeModel.start_time <= end_time)
            .where(ShowtimeModel.end_time >= start_time)
            .order_by(ShowtimeModel.start_time)
        )
        if exclude_id is not None:
            stmt = stmt.where(ShowtimeModel.id != exclude_id)

        result = await self.session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]

    @Logger.io
    async def create(self, *, showtime: ShowtimeEntity) -> ShowtimeEntity:
        model = ShowtimeModel(
            movie_id=showtime.movie_id,
            theater=showtime.theater,
            start_time=showtime.start_time,
            end_time=showtime.end_time,
            price=showtime.price,
        )
        async with translate_integrity_error('Showtime insert'):
            self.session.add(model)
            await self.session.flush()
        return self._to_entity(model)

    @Logger.io
    async def update(self, *, showtime: ShowtimeEntity) -> ShowtimeEntity:
        model = await self.session.get(ShowtimeModel, showtime.id)
        if model is None:
            raise ValueError(f'Showtime with id {showtime.id} not found')

        model.movie_id = showtime.movie_id
        model.theater = showtime.theater
        model.start_time = showtime.start_time
        model.end_time = showtime.end_time
        model.price = showtime.price
        async with translate_integrity_error('Showtime update'):
            await self.session.flush()
        return self._to_entity(model)

    @Logger.io
    async def list_ids_by_movie_id(self, *, movie_id: int) -> List[int]:
        result = await self.session.execute(
            select(ShowtimeModel.id).where(ShowtimeModel.movie_id == movie_id)
        )
        return list(result.scalars().all())

    @Logger.io
    async def delete_by_ids(self, *, showtime_ids: List[int]) -> int:
        if not showtime_ids:
            return 0
        result = await self.session.execute(
            delete(ShowtimeModel).where(ShowtimeModel.id.in_(showtime_ids))
        )
        return result.rowcount or 0
