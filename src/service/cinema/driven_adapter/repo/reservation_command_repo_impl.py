"""
Reservation Command Repository Implementation

Inserts reservations and translates store errors into domain errors:
- violation of uq_reservation_schedule_sheet_date -> SeatAlreadyBookedError
- any other SQLAlchemy failure -> StoreUnavailableError
"""

from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import SeatAlreadyBookedError, StoreUnavailableError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_reservation_command_repo import IReservationCommandRepo
from src.service.cinema.domain.entity.reservation_entity import Reservation
from src.service.cinema.driven_adapter.model.reservation_model import (
    RESERVATION_UNIQUE_CONSTRAINT,
    ReservationModel,
)


def is_seat_uniqueness_violation(error: IntegrityError) -> bool:
    # PostgreSQL names the constraint, SQLite lists the columns of the table
    message = str(error.orig)
    if RESERVATION_UNIQUE_CONSTRAINT in message:
        return True
    return 'UNIQUE constraint failed: reservation.' in message


class ReservationCommandRepoImpl(IReservationCommandRepo):
    def __init__(
        self,
        session_factory: Callable[..., AsyncContextManager[AsyncSession]] | None = None,
        *,
        session: AsyncSession | None = None,
    ) -> None:
        self.session_factory = session_factory
        self.session = session

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        """
        Session injected by the UoW is used as is and committed by the UoW.
        A session from session_factory is committed here.
        """
        if self.session is not None:
            yield self.session
        elif self.session_factory is not None:
            async with self.session_factory() as session:
                yield session
                await session.commit()
        else:
            raise RuntimeError('No session or session_factory available')

    @staticmethod
    def _to_entity(db_reservation: ReservationModel) -> Reservation:
        return Reservation(
            id=db_reservation.id,
            schedule_id=db_reservation.schedule_id,
            sheet_id=db_reservation.sheet_id,
            date=db_reservation.date,
            name=db_reservation.name,
            email=db_reservation.email,
            user_id=db_reservation.user_id,
            created_at=db_reservation.created_at,
        )

    @Logger.io
    async def create(self, *, reservation: Reservation) -> Reservation:
        db_reservation = ReservationModel(
            schedule_id=reservation.schedule_id,
            sheet_id=reservation.sheet_id,
            date=reservation.date,
            name=reservation.name,
            email=reservation.email,
            user_id=reservation.user_id,
        )
        try:
            async with self._get_session() as session:
                session.add(db_reservation)
                # Flush now so a constraint violation surfaces here, not at commit
                await session.flush()
                await session.refresh(db_reservation)
                return self._to_entity(db_reservation)
        except IntegrityError as e:
            if is_seat_uniqueness_violation(e):
                raise SeatAlreadyBookedError() from e
            raise StoreUnavailableError() from e
        except SQLAlchemyError as e:
            raise StoreUnavailableError() from e
