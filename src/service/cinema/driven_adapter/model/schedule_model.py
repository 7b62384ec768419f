from typing import TYPE_CHECKING, List

from sqlalchemy import ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.platform.database.orm_db_setting import Base

if TYPE_CHECKING:
    from src.service.cinema.driven_adapter.model.movie_model import MovieModel
    from src.service.cinema.driven_adapter.model.reservation_model import ReservationModel


class ScheduleModel(Base):
    __tablename__ = 'schedule'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    movie_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('movie.id', ondelete='CASCADE'), nullable=False, index=True
    )
    screen_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    # Relationships
    movie: Mapped['MovieModel'] = relationship('MovieModel', back_populates='schedules')
    reservations: Mapped[List['ReservationModel']] = relationship(
        'ReservationModel',
        cascade='all, delete-orphan',
        passive_deletes=True,
    )
