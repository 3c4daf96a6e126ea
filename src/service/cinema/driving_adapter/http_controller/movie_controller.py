from typing import List

from fastapi import APIRouter, Depends, Response, status

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.command.create_movie_use_case import CreateMovieUseCase
from src.service.cinema.app.command.delete_movie_use_case import DeleteMovieUseCase
from src.service.cinema.app.command.update_movie_use_case import UpdateMovieUseCase
from src.service.cinema.app.query.list_movies_use_case import ListMoviesUseCase
from src.service.cinema.domain.entity.movie_entity import MovieEntity
from src.service.cinema.driving_adapter.schema.movie_schema import (
    MovieCreateRequest,
    MovieResponse,
    MovieUpdateRequest,
)


router = APIRouter()


def _to_response(movie: MovieEntity) -> MovieResponse:
    if movie.id is None:
        raise ValueError('Movie ID should not be None after persistence.')

    return MovieResponse(
        id=movie.id,
        title=movie.title,
        genre=movie.genre,
        duration=movie.duration,
        rating=movie.rating,
        release_year=movie.release_year,
    )


@router.get('/all', status_code=status.HTTP_200_OK)
@Logger.io
async def list_movies(
    use_case: ListMoviesUseCase = Depends(ListMoviesUseCase.depends),
) -> List[MovieResponse]:
    movies = await use_case.list_all()
    return [_to_response(movie) for movie in movies]


@router.post('', status_code=status.HTTP_200_OK)
@Logger.io
async def create_movie(
    request: MovieCreateRequest,
    use_case: CreateMovieUseCase = Depends(CreateMovieUseCase.depends),
) -> MovieResponse:
    movie = await use_case.create(
        title=request.title,  # type: ignore[arg-type]
        genre=request.genre,  # type: ignore[arg-type]
        duration=request.duration,  # type: ignore[arg-type]
        rating=request.rating,
        release_year=request.release_year,  # type: ignore[arg-type]
    )
    return _to_response(movie)


@router.post('/update/{title}', status_code=status.HTTP_200_OK)
@Logger.io
async def update_movie(
    title: str,
    request: MovieUpdateRequest,
    use_case: UpdateMovieUseCase = Depends(UpdateMovieUseCase.depends),
) -> MovieResponse:
    movie = await use_case.update(
        title=title,
        new_title=request.title,
        genre=request.genre,
        duration=request.duration,
        rating=request.rating,
        release_year=request.release_year,
    )
    return _to_response(movie)


@router.delete('/{title}', status_code=status.HTTP_200_OK)
@Logger.io
async def delete_movie(
    title: str,
    use_case: DeleteMovieUseCase = Depends(DeleteMovieUseCase.depends),
) -> Response:
    await use_case.delete(title=title)
    return Response(status_code=status.HTTP_200_OK)
