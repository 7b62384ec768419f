from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import StoreUnavailableError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_cinema_query_repo import ICinemaQueryRepo
from src.service.cinema.domain.entity.movie_entity import Movie
from src.service.cinema.domain.entity.schedule_entity import Schedule
from src.service.cinema.domain.entity.sheet_entity import Sheet
from src.service.cinema.driven_adapter.model.movie_model import MovieModel
from src.service.cinema.driven_adapter.model.schedule_model import ScheduleModel
from src.service.cinema.driven_adapter.model.sheet_model import SheetModel


class CinemaQueryRepoImpl(ICinemaQueryRepo):
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

    @staticmethod
    def _to_movie(db_movie: MovieModel) -> Movie:
        return Movie(
            id=db_movie.id,
            name=db_movie.name,
            year=db_movie.year,
            description=db_movie.description,
            image_url=db_movie.image_url,
            is_showing=db_movie.is_showing,
        )

    @staticmethod
    def _to_schedule(db_schedule: ScheduleModel) -> Schedule:
        return Schedule(
            id=db_schedule.id, movie_id=db_schedule.movie_id, screen_id=db_schedule.screen_id
        )

    @staticmethod
    def _to_sheet(db_sheet: SheetModel) -> Sheet:
        return Sheet(
            id=db_sheet.id, screen_id=db_sheet.screen_id, column=db_sheet.column, row=db_sheet.row
        )

    @Logger.io
    async def get_movie_by_id(self, *, movie_id: int) -> Optional[Movie]:
        async with self._get_session() as session:
            db_movie = await session.get(MovieModel, movie_id)
            return self._to_movie(db_movie) if db_movie else None

    @Logger.io
    async def get_schedule_by_id(self, *, schedule_id: int) -> Optional[Schedule]:
        async with self._get_session() as session:
            db_schedule = await session.get(ScheduleModel, schedule_id)
            return self._to_schedule(db_schedule) if db_schedule else None

    @Logger.io
    async def get_sheet_by_id(self, *, sheet_id: int) -> Optional[Sheet]:
        async with self._get_session() as session:
            db_sheet = await session.get(SheetModel, sheet_id)
            return self._to_sheet(db_sheet) if db_sheet else None

    @Logger.io
    async def get_sheet_in_screen(self, *, sheet_id: int, screen_id: int) -> Optional[Sheet]:
        async with self._get_session() as session:
            result = await session.execute(
                select(SheetModel).where(
                    SheetModel.id == sheet_id, SheetModel.screen_id == screen_id
                )
            )
            db_sheet = result.scalar_one_or_none()
            return self._to_sheet(db_sheet) if db_sheet else None

    @Logger.io
    async def list_sheets_by_screen(self, *, screen_id: int) -> List[Sheet]:
        async with self._get_session() as session:
            result = await session.execute(
                select(SheetModel)
                .where(SheetModel.screen_id == screen_id)
                .order_by(SheetModel.row, SheetModel.column)
            )
            return [self._to_sheet(db_sheet) for db_sheet in result.scalars().all()]
