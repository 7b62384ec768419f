from datetime import date as date_type, datetime

from sqlalchemy import Date, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.orm_db_setting import Base
from src.service.cinema.domain.entity.reservation_entity import (
    HOLDER_EMAIL_MAX_LENGTH,
    HOLDER_NAME_MAX_LENGTH,
)


RESERVATION_UNIQUE_CONSTRAINT = 'uq_reservation_schedule_sheet_date'


class ReservationModel(Base):
    __tablename__ = 'reservation'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    schedule_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('schedule.id', ondelete='CASCADE'), nullable=False
    )
    sheet_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('sheet.id', ondelete='CASCADE'), nullable=False, index=True
    )
    date: Mapped[date_type] = mapped_column(Date, nullable=False)
    name: Mapped[str] = mapped_column(String(HOLDER_NAME_MAX_LENGTH), nullable=False)
    email: Mapped[str] = mapped_column(String(HOLDER_EMAIL_MAX_LENGTH), nullable=False)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    # The store is the source of truth for seat uniqueness
    __table_args__ = (
        UniqueConstraint('schedule_id', 'sheet_id', 'date', name=RESERVATION_UNIQUE_CONSTRAINT),
    )
