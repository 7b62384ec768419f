"""
Cinema fixtures: seeded catalog rows and an async engine bound to the test loop.

Seeded layout:
- movie (showing) with one schedule in screen 1
- other movie with one schedule in screen 2
- screen 1 sheets: a-1, a-2, b-1
- screen 2 sheet: a-1
"""

from collections.abc import AsyncGenerator
from dataclasses import dataclass

import pytest
from sqlalchemy import Engine
from sqlalchemy.orm import Session

from src.platform.config.core_setting import settings
from src.platform.database.orm_db_setting import AsyncEngineManager, Database
from src.service.cinema.driven_adapter.model import MovieModel, ScheduleModel, SheetModel


@dataclass
class CinemaSeed:
    movie_id: int
    schedule_id: int
    other_movie_id: int
    other_schedule_id: int
    sheet_ids: list[int]
    other_screen_sheet_id: int

    @property
    def sheet_id(self) -> int:
        return self.sheet_ids[0]


def _add_movie(session: Session, *, name: str, year: int) -> MovieModel:
    movie = MovieModel(
        name=name,
        year=year,
        description=f'{name} description',
        image_url=f'https://example.com/images/{year}.jpg',
        is_showing=True,
    )
    session.add(movie)
    session.flush()
    return movie


@pytest.fixture
def cinema_seed(sync_engine: Engine, clean_database: None) -> CinemaSeed:
    with Session(sync_engine) as session:
        movie = _add_movie(session, name='Spirited Away', year=2001)
        other_movie = _add_movie(session, name='Metropolis', year=1927)

        schedule = ScheduleModel(movie_id=movie.id, screen_id=1)
        other_schedule = ScheduleModel(movie_id=other_movie.id, screen_id=2)
        screen_1_sheets = [
            SheetModel(screen_id=1, row='a', column=1),
            SheetModel(screen_id=1, row='a', column=2),
            SheetModel(screen_id=1, row='b', column=1),
        ]
        screen_2_sheet = SheetModel(screen_id=2, row='a', column=1)
        session.add_all([schedule, other_schedule, *screen_1_sheets, screen_2_sheet])
        session.flush()

        seed = CinemaSeed(
            movie_id=movie.id,
            schedule_id=schedule.id,
            other_movie_id=other_movie.id,
            other_schedule_id=other_schedule.id,
            sheet_ids=[sheet.id for sheet in screen_1_sheets],
            other_screen_sheet_id=screen_2_sheet.id,
        )
        session.commit()
    return seed


@pytest.fixture
async def engine_manager() -> AsyncGenerator[AsyncEngineManager, None]:
    """Engine owned by the current test loop, disposed when the test ends"""
    manager = AsyncEngineManager(database_url=settings.DATABASE_URL_ASYNC)
    yield manager
    await manager.dispose()


@pytest.fixture
def database(engine_manager: AsyncEngineManager) -> Database:
    return Database(engine_manager=engine_manager)
