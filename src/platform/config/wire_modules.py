"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.cinema.app.command import (
    book_ticket_use_case,
    create_movie_use_case,
    create_showtime_use_case,
    delete_movie_use_case,
    delete_showtime_use_case,
    update_movie_use_case,
    update_showtime_use_case,
)
from src.service.cinema.app.query import get_showtime_use_case, list_movies_use_case


WIRE_MODULES: list[ModuleType] = [
    create_movie_use_case,
    update_movie_use_case,
    delete_movie_use_case,
    list_movies_use_case,
    create_showtime_use_case,
    update_showtime_use_case,
    delete_showtime_use_case,
    get_showtime_use_case,
    book_ticket_use_case,
]
