"""
Unit of Work Pattern - one session, one transaction, many repositories

Architecture:
- UoW owns the session lifecycle
- UoW owns commit/rollback
- Repositories share the UoW session
- Use cases coordinate repositories through the UoW
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.database.orm_db_setting import get_async_session
from src.platform.exception.exceptions import StoreUnavailableError


if TYPE_CHECKING:
    from src.service.cinema.app.interface.i_cinema_query_repo import ICinemaQueryRepo
    from src.service.cinema.app.interface.i_reservation_command_repo import (
        IReservationCommandRepo,
    )
    from src.service.cinema.app.interface.i_reservation_query_repo import (
        IReservationQueryRepo,
    )


class AbstractUnitOfWork(abc.ABC):
    """
    Abstract Unit of Work for the cinema service

    Usage:
        async with uow:
            reservation = await uow.reservation_command_repo.create(reservation=...)
            await uow.commit()

    Leaving the block without commit rolls back.
    """

    reservation_command_repo: IReservationCommandRepo
    reservation_query_repo: IReservationQueryRepo
    cinema_query_repo: ICinemaQueryRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args) -> None:
        await self.rollback()

    async def commit(self) -> None:
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def __aenter__(self) -> AbstractUnitOfWork:
        from src.service.cinema.driven_adapter.repo.cinema_query_repo_impl import (
            CinemaQueryRepoImpl,
        )
        from src.service.cinema.driven_adapter.repo.reservation_command_repo_impl import (
            ReservationCommandRepoImpl,
        )
        from src.service.cinema.driven_adapter.repo.reservation_query_repo_impl import (
            ReservationQueryRepoImpl,
        )

        # Repositories share the UoW session instead of opening their own
        self.reservation_command_repo = ReservationCommandRepoImpl(session=self.session)
        self.reservation_query_repo = ReservationQueryRepoImpl(session=self.session)
        self.cinema_query_repo = CinemaQueryRepoImpl(session=self.session)

        return await super().__aenter__()

    async def _commit(self) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            raise StoreUnavailableError() from e

    async def rollback(self) -> None:
        await self.session.rollback()


def get_unit_of_work(
    session: AsyncSession = Depends(get_async_session),
) -> AbstractUnitOfWork:
    """FastAPI dependency for Unit of Work"""
    return SqlAlchemyUnitOfWork(session)
