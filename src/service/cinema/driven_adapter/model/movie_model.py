from typing import TYPE_CHECKING, List

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.platform.database.orm_db_setting import Base

if TYPE_CHECKING:
    from src.service.cinema.driven_adapter.model.schedule_model import ScheduleModel


class MovieModel(Base):
    __tablename__ = 'movie'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(160), unique=True, nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    image_url: Mapped[str] = mapped_column(String(150), nullable=False)
    is_showing: Mapped[bool] = mapped_column(Boolean, nullable=False)

    # Relationships
    schedules: Mapped[List['ScheduleModel']] = relationship(
        'ScheduleModel',
        back_populates='movie',
        cascade='all, delete-orphan',
        passive_deletes=True,
    )
