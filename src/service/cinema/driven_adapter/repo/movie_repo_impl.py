from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_movie_repo import IMovieRepo
from src.service.cinema.domain.entity.movie_entity import MovieEntity, title_key
from src.service.cinema.driven_adapter.model.movie_model import MovieModel
from src.service.cinema.driven_adapter.repo.constraint_guard import translate_integrity_error


class MovieRepoImpl(IMovieRepo):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @staticmethod
    def _to_entity(model: MovieModel) -> MovieEntity:
        return MovieEntity(
            title=model.title,
            genre=model.genre,
            duration=model.duration,
            rating=model.rating,
            release_year=model.release_year,
            id=model.id,
        )

    @Logger.io
    async def get_by_id(self, *, movie_id: int) -> Optional[MovieEntity]:
        model = await self.session.get(MovieModel, movie_id)
        return self._to_entity(model) if model else None

    @Logger.io
    async def get_by_title(self, *, title: str, for_update: bool = False) -> Optional[MovieEntity]:
        stmt = select(MovieModel).where(MovieModel.title == title)
        if for_update:
            stmt = stmt.with_for_update()
        model = (await self.session.execute(stmt)).scalar_one_or_none()
        return self._to_entity(model) if model else None

    @Logger.io
    async def title_exists(self, *, title: str) -> bool:
        result = await self.session.execute(
            select(MovieModel.id).where(MovieModel.title_key == title_key(title)).limit(1)
        )
        return result.scalar_one_or_none() is not None

    @Logger.io
    async def list_all(self) -> List[MovieEntity]:
        result = await self.session.execute(select(MovieModel).order_by(MovieModel.id))
        return [self._to_entity(model) for model in result.scalars().all()]

    @Logger.io
    async def create(self, *, movie: MovieEntity) -> MovieEntity:
        model = MovieModel(
            title=movie.title,
            title_key=movie.title_key,
            genre=movie.genre,
            duration=movie.duration,
            rating=movie.rating,
            release_year=movie.release_year,
        )
        async with translate_integrity_error('Movie insert'):
            self.session.add(model)
            await self.session.flush()
        return self._to_entity(model)

    @Logger.io
    async def update(self, *, movie: MovieEntity) -> MovieEntity:
        model = await self.session.get(MovieModel, movie.id)
        if model is None:
            raise ValueError(f'Movie with id {movie.id} not found')

        model.title = movie.title
        model.title_key = movie.title_key
        model.genre = movie.genre
        model.duration = movie.duration
        model.rating = movie.rating
        model.release_year = movie.release_year
        async with translate_integrity_error('Movie update'):
            await self.session.flush()
        return self._to_entity(model)

    @Logger.io
    async def delete_by_id(self, *, movie_id: int) -> None:
        await self.session.execute(delete(MovieModel).where(MovieModel.id == movie_id))
