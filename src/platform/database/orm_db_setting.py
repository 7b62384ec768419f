"""
SQLAlchemy async engine and session management

This module provides:
1. AsyncEngineManager: event-loop-aware engine and session maker
2. Base: declarative base shared by every ORM model
3. get_async_session: FastAPI dependency yielding one session per request
4. Database: session provider for the DI container
"""

import asyncio
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Optional

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger


class AsyncEngineManager:
    """
    Keeps the engine bound to the running event loop.

    Test clients and reloaders may run on a new loop; a stale engine would
    raise "Task got Future attached to a different loop".
    """

    def __init__(self, database_url: str | None = None) -> None:
        self._database_url = database_url
        self._engine: Optional[AsyncEngine] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._session_maker: Optional[async_sessionmaker[AsyncSession]] = None
        self._stale_engines: list[tuple[AsyncEngine, Optional[asyncio.AbstractEventLoop]]] = []

    @property
    def database_url(self) -> str:
        return self._database_url or settings.DATABASE_URL_ASYNC

    def get_engine(self) -> AsyncEngine:
        try:
            current_loop = asyncio.get_running_loop()
        except RuntimeError:
            if self._engine is None:
                self._engine = self._create_engine()
            return self._engine

        if self._loop is not current_loop:
            if self._engine is not None:
                Logger.base.warning('🔄 [DB] Event loop changed, recreating engine')
                self._stale_engines.append((self._engine, self._loop))
                self._session_maker = None
            Logger.base.info(f'🔗 [DB] Creating engine for event loop {id(current_loop)}')
            self._engine = self._create_engine()
            self._loop = current_loop

        return self._engine  # type: ignore[return-value]

    def get_session_maker(self) -> async_sessionmaker[AsyncSession]:
        engine = self.get_engine()
        if self._session_maker is None:
            self._session_maker = async_sessionmaker(
                engine,
                class_=AsyncSession,
                expire_on_commit=False,
            )
        return self._session_maker

    async def dispose(self) -> None:
        stale_engines, self._stale_engines = self._stale_engines, []
        for engine, loop in stale_engines:
            await _dispose_on_loop(engine, loop)
        if self._engine is not None:
            await _dispose_on_loop(self._engine, self._loop)
        self._engine = None
        self._loop = None
        self._session_maker = None

    def _create_engine(self) -> AsyncEngine:
        url = self.database_url
        engine_kwargs: dict[str, Any] = {'echo': False, 'future': True}
        # SQLite (used by the test suite) has no connection pool to tune
        if not make_url(url).get_backend_name().startswith('sqlite'):
            engine_kwargs |= {
                'pool_size': settings.DB_POOL_SIZE,
                'max_overflow': settings.DB_POOL_MAX_OVERFLOW,
                'pool_timeout': settings.DB_POOL_TIMEOUT,
                'pool_recycle': settings.DB_POOL_RECYCLE,
                'pool_pre_ping': settings.DB_POOL_PRE_PING,
            }
        return create_async_engine(url, **engine_kwargs)


async def _dispose_on_loop(
    engine: AsyncEngine, loop: Optional[asyncio.AbstractEventLoop]
) -> None:
    """Close the pool of an engine from whichever loop its connections belong to"""
    if loop is None or loop is asyncio.get_running_loop():
        await engine.dispose()
    elif loop.is_running():
        await asyncio.wrap_future(asyncio.run_coroutine_threadsafe(engine.dispose(), loop))
    else:
        # Connections of a stopped loop cannot be closed here, only dereferenced
        Logger.base.warning(f'🔄 [DB] Releasing engine of stopped event loop {id(loop)}')
        await engine.dispose(close=False)


_engine_manager = AsyncEngineManager()


def get_engine() -> AsyncEngine:
    return _engine_manager.get_engine()


def get_session_maker() -> async_sessionmaker[AsyncSession]:
    return _engine_manager.get_session_maker()


async def dispose_engine() -> None:
    await _engine_manager.dispose()


class Base(DeclarativeBase):
    pass


async def create_db_and_tables() -> None:
    """Create database tables if they don't exist"""
    # Models must be registered on Base.metadata before create_all
    import src.service.cinema.driven_adapter.model  # noqa: F401

    try:
        async with get_engine().begin() as conn:
            await conn.run_sync(Base.metadata.create_all, checkfirst=True)
    except Exception as e:
        error_msg = str(e).lower()
        if any(keyword in error_msg for keyword in ['already exists', 'duplicate key']):
            Logger.base.info('Tables already exist, skipping creation')
        else:
            Logger.base.error(f'Error creating tables: {e}')
            raise


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Provide async session for dependency injection

    The session maker context manager closes the session on exit and
    rolls back anything left uncommitted.
    """
    async with get_session_maker()() as session:
        yield session


class Database:
    """Session provider handed to repositories by the DI container"""

    def __init__(self, engine_manager: AsyncEngineManager | None = None) -> None:
        self._engine_manager = engine_manager or _engine_manager

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        async with self._engine_manager.get_session_maker()() as session:
            yield session
