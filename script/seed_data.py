#!/usr/bin/env python3
"""
Database Seed Script
Populate demo data into the database

Features:
1. Create Sheets - 3 screens, rows a-c, columns 1-5 each
2. Create Movies - validated with validate_movie before insert
3. Create Schedules - one showtime per screen for every showing movie

Reservations are never seeded; they are only created through the API.
"""

import asyncio
from dataclasses import dataclass
from typing import List

from sqlalchemy import select, text

from src.platform.database.orm_db_setting import (
    create_db_and_tables,
    dispose_engine,
    get_session_maker,
)
from src.service.cinema.domain.entity.movie_entity import Movie
from src.service.cinema.domain.validators import validate_movie
from src.service.cinema.driven_adapter.model import MovieModel, ScheduleModel, SheetModel


SCREEN_IDS = (1, 2, 3)
SHEET_ROWS = ('a', 'b', 'c')
SHEET_COLUMNS = range(1, 6)


@dataclass
class MovieConfig:
    """Movie seed configuration"""

    movie: Movie
    screen_id: int


SEED_MOVIES: List[MovieConfig] = [
    MovieConfig(
        movie=Movie(
            name='The Grand Budapest Hotel',
            year=2014,
            description='A concierge and his lobby boy in a famous European hotel.',
            image_url='https://example.com/images/grand_budapest.jpg',
            is_showing=True,
        ),
        screen_id=1,
    ),
    MovieConfig(
        movie=Movie(
            name='Spirited Away',
            year=2001,
            description='A girl wanders into a world ruled by gods and spirits.',
            image_url='https://example.com/images/spirited_away.jpg',
            is_showing=True,
        ),
        screen_id=2,
    ),
    MovieConfig(
        movie=Movie(
            name='Metropolis',
            year=1927,
            description='A futuristic city divided between workers and planners.',
            image_url='https://example.com/images/metropolis.jpg',
            is_showing=False,
        ),
        screen_id=3,
    ),
]


async def create_sheets(session) -> int:
    print(f'💺 Creating sheets for screens {SCREEN_IDS}...')
    count = 0
    for screen_id in SCREEN_IDS:
        for row in SHEET_ROWS:
            for column in SHEET_COLUMNS:
                session.add(SheetModel(screen_id=screen_id, row=row, column=column))
                count += 1
    await session.flush()
    print(f'   ✅ Created sheets: {count}')
    return count


async def create_movies_and_schedules(session) -> None:
    print(f'🎬 Creating {len(SEED_MOVIES)} movies...')
    for config in SEED_MOVIES:
        movie = config.movie
        errors = validate_movie(movie)
        if errors:
            details = ', '.join(f'{e.field}: {e.message}' for e in errors)
            raise ValueError(f'Invalid seed movie {movie.name!r}: {details}')

        existing = await session.execute(select(MovieModel).where(MovieModel.name == movie.name))
        if existing.scalar_one_or_none():
            print(f'   ⏭️  Movie already exists: {movie.name}')
            continue

        db_movie = MovieModel(
            name=movie.name,
            year=movie.year,
            description=movie.description,
            image_url=movie.image_url,
            is_showing=movie.is_showing,
        )
        session.add(db_movie)
        await session.flush()
        print(f'   ✅ Created movie: ID={db_movie.id}, Name={db_movie.name}')

        if movie.is_showing:
            db_schedule = ScheduleModel(movie_id=db_movie.id, screen_id=config.screen_id)
            session.add(db_schedule)
            await session.flush()
            print(f'   ✅ Created schedule: ID={db_schedule.id}, Screen={config.screen_id}')


async def verify_data() -> None:
    print('🔍 Verifying seeded data...')
    async with get_session_maker()() as session:
        for table in ['movie', 'schedule', 'sheet', 'reservation']:
            result = await session.execute(text(f'SELECT COUNT(*) FROM {table}'))
            print(f'   {table.capitalize()} count: {result.scalar()}')
    print('   ✅ Data verification completed!')


async def _seed_data() -> None:
    """Seed sheets, movies and schedules in a single transaction"""
    async with get_session_maker()() as session:
        try:
            sheet_count = await session.execute(text('SELECT COUNT(*) FROM sheet'))
            if not sheet_count.scalar():
                await create_sheets(session)
            else:
                print('⏭️  Sheets already exist, skipping')
            print()

            await create_movies_and_schedules(session)
            print()

            await session.commit()
            print('✅ All data committed successfully!')
        except Exception as e:
            await session.rollback()
            print(f'❌ Rolling back: {e}')
            raise


async def main() -> None:
    print('🌱 Starting data seeding...')
    print('=' * 50)

    try:
        await create_db_and_tables()
        await _seed_data()
        await verify_data()
        print()
        print('=' * 50)
        print('🌱 Data seeding completed!')
    except Exception as e:
        print(f'❌ Seeding failed: {e}')
        exit(1)
    finally:
        await dispose_engine()


if __name__ == '__main__':
    asyncio.run(main())
