from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.command.create_showtime_use_case import CreateShowtimeUseCase
from src.service.cinema.app.command.delete_showtime_use_case import DeleteShowtimeUseCase
from src.service.cinema.app.command.update_showtime_use_case import UpdateShowtimeUseCase
from src.service.cinema.app.query.get_showtime_use_case import GetShowtimeUseCase
from src.service.cinema.domain.entity.showtime_entity import ShowtimeEntity
from src.service.cinema.driving_adapter.schema.column_bound import INT32_MAX, INT32_MIN
from src.service.cinema.driving_adapter.schema.showtime_schema import (
    ShowtimeRequest,
    ShowtimeResponse,
)


router = APIRouter()

ShowtimeIdPath = Annotated[int, Path(ge=INT32_MIN, le=INT32_MAX)]


def _to_response(showtime: ShowtimeEntity) -> ShowtimeResponse:
    if showtime.id is None:
        raise ValueError('Showtime ID should not be None after persistence.')

    return ShowtimeResponse(
        id=showtime.id,
        movie_id=showtime.movie_id,
        theater=showtime.theater,
        start_time=showtime.start_time,
        end_time=showtime.end_time,
        price=showtime.price,
        movie_title=showtime.movie_title,
        movie_release_year=showtime.movie_release_year,
    )


@router.get('/{showtime_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_showtime(
    showtime_id: ShowtimeIdPath,
    use_case: GetShowtimeUseCase = Depends(GetShowtimeUseCase.depends),
) -> ShowtimeResponse:
    showtime = await use_case.get_by_id(showtime_id=showtime_id)
    return _to_response(showtime)


@router.post('', status_code=status.HTTP_200_OK)
@Logger.io
async def create_showtime(
    request: ShowtimeRequest,
    use_case: CreateShowtimeUseCase = Depends(CreateShowtimeUseCase.depends),
) -> ShowtimeResponse:
    showtime = await use_case.create(
        movie_id=request.movie_id,  # type: ignore[arg-type]
        theater=request.theater,  # type: ignore[arg-type]
        start_time=request.start_time,  # type: ignore[arg-type]
        end_time=request.end_time,  # type: ignore[arg-type]
        price=request.price,  # type: ignore[arg-type]
    )
    return _to_response(showtime)


@router.post('/update/{showtime_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def update_showtime(
    showtime_id: ShowtimeIdPath,
    request: ShowtimeRequest,
    use_case: UpdateShowtimeUseCase = Depends(UpdateShowtimeUseCase.depends),
) -> ShowtimeResponse:
    showtime = await use_case.update(
        showtime_id=showtime_id,
        movie_id=request.movie_id,  # type: ignore[arg-type]
        theater=request.theater,  # type: ignore[arg-type]
        start_time=request.start_time,  # type: ignore[arg-type]
        end_time=request.end_time,  # type: ignore[arg-type]
        price=request.price,  # type: ignore[arg-type]
    )
    return _to_response(showtime)


@router.delete('/{showtime_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def delete_showtime(
    showtime_id: ShowtimeIdPath,
    use_case: DeleteShowtimeUseCase = Depends(DeleteShowtimeUseCase.depends),
) -> Response:
    await use_case.delete(showtime_id=showtime_id)
    return Response(status_code=status.HTTP_200_OK)
