from contextlib import asynccontextmanager
from datetime import date
from typing import AsyncContextManager, AsyncIterator, Callable, Set

from sqlalchemy import exists, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import StoreUnavailableError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_reservation_query_repo import IReservationQueryRepo
from src.service.cinema.driven_adapter.model.reservation_model import ReservationModel


class ReservationQueryRepoImpl(IReservationQueryRepo):
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
        Get session for query execution.

        If session is injected (from UoW), yield it directly without context management.
        Otherwise, use session_factory context manager.
        """
        try:
            if self.session is not None:
                yield self.session
            elif self.session_factory is not None:
                async with self.session_factory() as session:
                    yield session
            else:
                raise RuntimeError('No session or session_factory available')
        except SQLAlchemyError as e:
            raise StoreUnavailableError() from e

    @Logger.io
    async def exists(self, *, schedule_id: int, sheet_id: int, date: date) -> bool:
        async with self._get_session() as session:
            result = await session.execute(
                select(
                    exists().where(
                        ReservationModel.schedule_id == schedule_id,
                        ReservationModel.sheet_id == sheet_id,
                        ReservationModel.date == date,
                    )
                )
            )
            return bool(result.scalar())

    @Logger.io
    async def list_reserved_sheet_ids(self, *, schedule_id: int, date: date) -> Set[int]:
        async with self._get_session() as session:
            result = await session.execute(
                select(ReservationModel.sheet_id).where(
                    ReservationModel.schedule_id == schedule_id,
                    ReservationModel.date == date,
                )
            )
            return set(result.scalars().all())
