"""Application layer interfaces (Ports)"""

from src.service.cinema.app.interface.i_movie_repo import IMovieRepo
from src.service.cinema.app.interface.i_showtime_repo import IShowtimeRepo
from src.service.cinema.app.interface.i_ticket_repo import ITicketRepo

__all__ = [
    'IMovieRepo',
    'IShowtimeRepo',
    'ITicketRepo',
]
