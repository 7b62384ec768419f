"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.cinema.driven_adapter.model.movie_model import MovieModel
from src.service.cinema.driven_adapter.model.reservation_model import ReservationModel
from src.service.cinema.driven_adapter.model.schedule_model import ScheduleModel
from src.service.cinema.driven_adapter.model.sheet_model import SheetModel

__all__ = [
    'MovieModel',
    'ReservationModel',
    'ScheduleModel',
    'SheetModel',
]
