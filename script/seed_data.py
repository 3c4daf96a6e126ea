#!/usr/bin/env python3
"""
Database Seed Script
Populate sample movies, showtimes and a few bookings

Goes through the use cases, so every catalog, scheduling and seat rule
applies exactly as it does behind the HTTP API. Re-running against a
seeded database fails on the first duplicate title; reset first.
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime, timedelta

from src.platform.database.orm_db_setting import Database
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.service.cinema.app.command.book_ticket_use_case import BookTicketUseCase
from src.service.cinema.app.command.create_movie_use_case import CreateMovieUseCase
from src.service.cinema.app.command.create_showtime_use_case import CreateShowtimeUseCase


@dataclass
class MovieConfig:
    """Movie seed configuration"""
    title: str
    genre: str
    duration: int
    rating: float
    release_year: int


SEED_MOVIES = [
    MovieConfig(title='Inception', genre='Sci-Fi', duration=148, rating=8.8, release_year=2010),
    MovieConfig(title='Spirited Away', genre='Animation', duration=125, rating=8.6, release_year=2001),
    MovieConfig(title='The Matrix', genre='Action', duration=136, rating=8.7, release_year=1999),
]
THEATERS = ['Hall A', 'Hall B']
FIRST_SCREENING = datetime(2030, 1, 1, 10, 0)
BREAK_BETWEEN_SCREENINGS = timedelta(minutes=30)
SEED_USER_ID = '84438967-f68f-4fa0-b620-0f08217e76af'


async def seed(database: Database) -> None:
    def uow_factory() -> SqlAlchemyUnitOfWork:
        return SqlAlchemyUnitOfWork(database)

    create_movie = CreateMovieUseCase(uow_factory=uow_factory)
    create_showtime = CreateShowtimeUseCase(uow_factory=uow_factory)
    book_ticket = BookTicketUseCase(uow_factory=uow_factory)

    print('🎬 Creating movies...')
    movies = []
    for config in SEED_MOVIES:
        movie = await create_movie.create(
            title=config.title,
            genre=config.genre,
            duration=config.duration,
            rating=config.rating,
            release_year=config.release_year,
        )
        movies.append(movie)
        print(f'   ✅ {movie.id}: {movie.title}')

    print('📅 Scheduling showtimes...')
    showtime_ids = []
    for theater in THEATERS:
        start = FIRST_SCREENING
        for movie in movies:
            end = start + timedelta(minutes=movie.duration)
            showtime = await create_showtime.create(
                movie_id=movie.id, theater=theater, start_time=start, end_time=end, price=12.5
            )
            showtime_ids.append(showtime.id)
            print(f'   ✅ {showtime.id}: {movie.title} in {theater} at {start:%H:%M}')
            start = end + BREAK_BETWEEN_SCREENINGS

    print('🎟️ Booking seats...')
    for seat_number in range(1, 4):
        booking_id = await book_ticket.book(
            showtime_id=showtime_ids[0], seat_number=seat_number, user_id=SEED_USER_ID
        )
        print(f'   ✅ seat {seat_number}: {booking_id}')


async def main():
    print('🌱 Starting data seeding...')
    print('=' * 50)

    database = Database()
    try:
        await database.create_db_and_tables()
        await seed(database)
        print('=' * 50)
        print('✅ Data seeding completed!')
    except Exception as e:
        print(f'❌ Seeding failed: {e}')
        exit(1)
    finally:
        await database.dispose()


if __name__ == '__main__':
    asyncio.run(main())
