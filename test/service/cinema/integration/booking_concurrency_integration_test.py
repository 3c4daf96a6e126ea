"""
Concurrent booking against a real database

Test Focus:
1. N concurrent requests for one seat: exactly one booking, N-1 SeatAlreadyBooked
2. Retrying a lost seat keeps failing with SeatAlreadyBooked
3. The unique (showtime_id, seat_number) constraint rejects a write that skipped the pre-check
"""

import asyncio
from collections.abc import Callable
from datetime import datetime

import pytest
from sqlalchemy import func, select

from src.platform.database.orm_db_setting import Database
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import SeatAlreadyBookedError, StorageConflictError
from src.service.cinema.app.command.book_ticket_use_case import BookTicketUseCase
from src.service.cinema.app.command.create_movie_use_case import CreateMovieUseCase
from src.service.cinema.app.command.create_showtime_use_case import CreateShowtimeUseCase
from src.service.cinema.domain.entity.ticket_entity import TicketEntity
from src.service.cinema.driven_adapter.model.ticket_model import TicketModel


CONCURRENT_REQUESTS = 10


@pytest.fixture
async def showtime_id(uow_factory: Callable[[], AbstractUnitOfWork]) -> int:
    movie = await CreateMovieUseCase(uow_factory=uow_factory).create(
        title='Inception', genre='Sci-Fi', duration=120, rating=8.8, release_year=2010
    )
    showtime = await CreateShowtimeUseCase(uow_factory=uow_factory).create(
        movie_id=movie.id,
        theater='Hall A',
        start_time=datetime(2025, 2, 14, 12, 0),
        end_time=datetime(2025, 2, 14, 14, 0),
        price=50.2,
    )
    return showtime.id


async def _count_tickets(database: Database, *, showtime_id: int, seat_number: int) -> int:
    async with database.session() as session:
        result = await session.execute(
            select(func.count())
            .select_from(TicketModel)
            .where(TicketModel.showtime_id == showtime_id)
            .where(TicketModel.seat_number == seat_number)
        )
        return result.scalar_one()


async def test_concurrent_bookings_of_one_seat_have_a_single_winner(
    database: Database,
    uow_factory: Callable[[], AbstractUnitOfWork],
    showtime_id: int,
) -> None:
    # Arrange
    use_case = BookTicketUseCase(uow_factory=uow_factory)

    # Act
    results = await asyncio.gather(
        *(
            use_case.book(showtime_id=showtime_id, seat_number=7, user_id=f'user-{i}')
            for i in range(CONCURRENT_REQUESTS)
        ),
        return_exceptions=True,
    )

    # Assert
    booked = [r for r in results if isinstance(r, str)]
    rejected = [r for r in results if isinstance(r, SeatAlreadyBookedError)]
    assert len(booked) == 1
    assert len(rejected) == CONCURRENT_REQUESTS - 1
    assert await _count_tickets(database, showtime_id=showtime_id, seat_number=7) == 1


async def test_concurrent_bookings_of_different_seats_all_succeed(
    uow_factory: Callable[[], AbstractUnitOfWork],
    showtime_id: int,
) -> None:
    use_case = BookTicketUseCase(uow_factory=uow_factory)

    results = await asyncio.gather(
        *(
            use_case.book(showtime_id=showtime_id, seat_number=seat, user_id='alice')
            for seat in range(1, CONCURRENT_REQUESTS + 1)
        )
    )

    assert len(set(results)) == CONCURRENT_REQUESTS


async def test_retrying_a_taken_seat_keeps_failing(
    uow_factory: Callable[[], AbstractUnitOfWork],
    showtime_id: int,
) -> None:
    use_case = BookTicketUseCase(uow_factory=uow_factory)
    await use_case.book(showtime_id=showtime_id, seat_number=3, user_id='alice')

    for _ in range(3):
        with pytest.raises(SeatAlreadyBookedError):
            await use_case.book(showtime_id=showtime_id, seat_number=3, user_id='bob')


async def test_unique_seat_constraint_rejects_unchecked_insert(
    uow_factory: Callable[[], AbstractUnitOfWork],
    showtime_id: int,
) -> None:
    await BookTicketUseCase(uow_factory=uow_factory).book(
        showtime_id=showtime_id, seat_number=5, user_id='alice'
    )

    with pytest.raises(StorageConflictError):
        async with uow_factory() as uow:
            await uow.ticket_repo.create(
                ticket=TicketEntity(
                    showtime_id=showtime_id,
                    seat_number=5,
                    user_id='bob',
                    booking_id='00000000-0000-4000-8000-000000000001',
                )
            )
            await uow.commit()
