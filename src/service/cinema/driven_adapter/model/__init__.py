"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.cinema.driven_adapter.model.movie_model import MovieModel
from src.service.cinema.driven_adapter.model.showtime_model import ShowtimeModel
from src.service.cinema.driven_adapter.model.ticket_model import TicketModel

__all__ = [
    'MovieModel',
    'ShowtimeModel',
    'TicketModel',
]
