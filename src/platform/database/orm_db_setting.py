"""
SQLAlchemy async engine and session management with Read-Write Separation

This module provides:
1. AsyncEngineManager: Manages separate read/write engines with event loop awareness
2. Database class (injected through the DI container)

Read-Write Separation:
- Write operations: Always use primary database
- Read operations: Use read replica if configured, otherwise fall back to primary
- Transaction consistency: Within UoW, all operations use write session

Configuration:
- POSTGRES_REPLICA_SERVER: Optional read replica hostname
- POSTGRES_REPLICA_PORT: Optional read replica port
- DATABASE_URL: Optional full URL override (both engines use it)
"""

import asyncio
from typing import Any, Optional

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


# =============================================================================
# Event-loop-aware Engine Manager
# =============================================================================


class AsyncEngineManager:
    """
    Manages SQLAlchemy async engines with event loop awareness.

    Supports read-write separation:
    - Write engine: connects to primary database
    - Read engine: connects to read replica (falls back to primary if not configured)

    Ensures engines are always bound to the current event loop to prevent
    "Task got Future attached to a different loop" errors.
    """

    def __init__(self):
        self._write_engine: Optional[AsyncEngine] = None
        self._read_engine: Optional[AsyncEngine] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._write_session_maker: Optional[async_sessionmaker[AsyncSession]] = None
        self._read_session_maker: Optional[async_sessionmaker[AsyncSession]] = None

    def get_engine(self, *, read_only: bool = False) -> AsyncEngine:
        """
        Get engine for current event loop, creating new one if needed

        Args:
            read_only: If True, return read engine (replica), otherwise write engine (primary)
        """
        try:
            current_loop = asyncio.get_running_loop()
        except RuntimeError:
            # No event loop running, create engine without loop tracking
            if read_only:
                if self._read_engine is None:
                    self._read_engine = self._create_engine(
                        settings.DATABASE_READ_URL_ASYNC, read_only=True
                    )
                return self._read_engine
            if self._write_engine is None:
                self._write_engine = self._create_engine(settings.DATABASE_URL_ASYNC)
            return self._write_engine

        if self._loop is not current_loop:
            if self._write_engine is not None or self._read_engine is not None:
                Logger.base.warning('🔄 [DB] Event loop changed, disposing old engines...')
                # dispose() can't be awaited from a sync method, the old engines get collected
                self._write_engine = None
                self._read_engine = None
                self._write_session_maker = None
                self._read_session_maker = None

            Logger.base.info(f'🔗 [DB] Creating engines for event loop {id(current_loop)}')
            self._write_engine = self._create_engine(settings.DATABASE_URL_ASYNC)
            self._read_engine = self._create_engine(
                settings.DATABASE_READ_URL_ASYNC, read_only=True
            )
            self._loop = current_loop

        engine = self._read_engine if read_only else self._write_engine
        assert engine is not None
        return engine

    def get_session_maker(self, *, read_only: bool = False) -> async_sessionmaker[AsyncSession]:
        """
        Get session maker for current event loop

        Args:
            read_only: If True, return read session maker, otherwise write session maker
        """
        engine = self.get_engine(read_only=read_only)

        if read_only:
            if self._read_session_maker is None:
                self._read_session_maker = async_sessionmaker(
                    engine, class_=AsyncSession, expire_on_commit=False
                )
            return self._read_session_maker

        if self._write_session_maker is None:
            self._write_session_maker = async_sessionmaker(
                engine, class_=AsyncSession, expire_on_commit=False
            )
        return self._write_session_maker

    @staticmethod
    def _create_engine(url: str, *, read_only: bool = False) -> AsyncEngine:
        """
        Create new async engine

        Read engines get the larger pool since reads outnumber writes.
        SQLite picks its own pool class, so pool sizing only applies to server databases.
        """
        pool_kwargs: dict[str, Any] = {}
        if make_url(url).get_backend_name() != 'sqlite':
            pool_kwargs = {
                'pool_size': settings.DB_POOL_SIZE_READ if read_only else settings.DB_POOL_SIZE_WRITE,
                'max_overflow': settings.DB_POOL_MAX_OVERFLOW,
                'pool_timeout': settings.DB_POOL_TIMEOUT,
                'pool_recycle': settings.DB_POOL_RECYCLE,
                'pool_pre_ping': settings.DB_POOL_PRE_PING,
            }
        return create_async_engine(url, echo=False, **pool_kwargs)


# Global engine manager
_engine_manager = AsyncEngineManager()


def get_engine(*, read_only: bool = False) -> AsyncEngine:
    """Get event-loop-aware engine (read_only: use replica if available)"""
    return _engine_manager.get_engine(read_only=read_only)


def get_session_maker(*, read_only: bool = False) -> async_sessionmaker[AsyncSession]:
    """Get event-loop-aware session maker (read_only: use replica if available)"""
    return _engine_manager.get_session_maker(read_only=read_only)


# =============================================================================
# Base Model
# =============================================================================


class Base(DeclarativeBase):
    pass


# =============================================================================
# Database Class (for DI)
# =============================================================================


class Database:
    """
    Database class for dependency injection pattern using AsyncEngineManager

    Delegates to AsyncEngineManager for event-loop-aware engine management
    unless an explicit session maker is handed in (tests bind one to SQLite).
    """

    def __init__(
        self,
        *,
        read_only: bool = False,
        session_maker: Optional[async_sessionmaker[AsyncSession]] = None,
    ) -> None:
        self._read_only = read_only
        self._session_maker = session_maker

    @property
    def session_maker(self) -> async_sessionmaker[AsyncSession]:
        if self._session_maker is not None:
            return self._session_maker
        return get_session_maker(read_only=self._read_only)

