"""
MindfulSpace Backend — Database Engine & Session Management
=============================================================

What:  Async SQLAlchemy engine wrapper, declarative base, per-request session
       dependency and store-error translation.
How:   A `Database` object owns the engine (connection pool) and the session
       factory. It is built by the app factory (or injected by tests), kept on
       `app.state.database`, and handed to route handlers through
       `get_db_session`, which commits on success and rolls back on error.
Who:   Route handlers (via Depends), the auth guard, the health route and the
       lifespan handler.

Connection Pooling (PostgreSQL):
    pool_size / max_overflow:  bounded set of connections shared by all requests
    pool_timeout:              max wait for a free connection → TransientError
    pool_pre_ping:             validates connections before use
    connect_args["timeout"]:   max time to open a new connection → DependencyError

SQLite (tests, local runs) uses SQLAlchemy's default pool for the driver and
turns on `PRAGMA foreign_keys` for every connection so ON DELETE CASCADE
behaves as it does on PostgreSQL.
"""

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, AsyncGenerator, Dict, Iterator, Optional, Type

from fastapi import Request
from sqlalchemy import event, exc as sa_exc, text
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
    wait_random,
)

from app.config import Settings
from app.exceptions import (
    DatabaseError,
    DependencyError,
    MindfulSpaceError,
    TransientError,
)

logger = logging.getLogger(__name__)

# Failures the store can surface. Drivers raise OSError (ConnectionRefusedError,
# TimeoutError) directly when a connection cannot be opened.
STORE_FAILURES = (OSError, sa_exc.SQLAlchemyError)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models share this metadata; Alembic and `Database.create_all()` read it.
    """
    pass


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Owns the async engine and hands out sessions.

    Lifecycle:
        1. Constructed by create_app() (engine creation does not connect)
        2. wait_until_ready() during startup — raises DependencyError if the
           store stays unreachable
        3. session() per request
        4. dispose() on shutdown
    """

    def __init__(
        self,
        url: str,
        *,
        pool_size: int = 10,
        max_overflow: int = 10,
        pool_timeout: float = 10.0,
        pool_pre_ping: bool = True,
        connect_timeout: float = 5.0,
        echo: bool = False,
    ):
        self.url = url
        engine_kwargs: Dict[str, Any] = {"echo": echo}

        if url.startswith("sqlite"):
            self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        else:
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_timeout=pool_timeout,
                pool_pre_ping=pool_pre_ping,
                pool_recycle=3600,
                connect_args={"timeout": connect_timeout},
            )
            self.engine = create_async_engine(url, **engine_kwargs)

        # expire_on_commit=False: attributes stay readable after commit,
        # when response models are built
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, cfg: Settings) -> "Database":
        return cls(
            cfg.database_url,
            pool_size=cfg.db_pool_size,
            max_overflow=cfg.db_max_overflow,
            pool_timeout=cfg.db_pool_timeout,
            pool_pre_ping=cfg.db_pool_pre_ping,
            connect_timeout=cfg.db_connect_timeout,
            echo=cfg.log_level == "DEBUG",
        )

    def session(self) -> AsyncSession:
        return self.session_factory()

    async def ping(self) -> None:
        """Run `SELECT 1` on a pooled connection."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def wait_until_ready(self, attempts: int = 5) -> None:
        """
        Probe the store until it answers, with exponential backoff.

        Raises:
            DependencyError: the store was unreachable on every attempt.
        """
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(attempts),
                wait=wait_exponential(multiplier=0.5, max=5) + wait_random(0, 1),
                retry=retry_if_exception_type(STORE_FAILURES),
                before_sleep=before_sleep_log(logger, logging.WARNING),
                reraise=True,
            ):
                with attempt:
                    await self.ping()
        except STORE_FAILURES as e:
            logger.critical("Database unreachable after %d attempts: %s", attempts, e)
            raise DependencyError(
                message="Database is unreachable",
                context={"attempts": attempts, "error_type": type(e).__name__},
            ) from e

    async def create_all(self) -> None:
        """Create every table known to the metadata (tests and local runs)."""
        import app.models  # noqa: F401  (registers all models with Base)

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_all(self) -> None:
        import app.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def dispose(self) -> None:
        """Close every pooled connection."""
        await self.engine.dispose()


# ── Error Translation ─────────────────────────────────────────────────────
def translate_store_error(
    exc: BaseException,
    operation: str,
    context: Optional[Dict[str, Any]] = None,
) -> MindfulSpaceError:
    """
    Map a store failure onto the application taxonomy.

    The driver message is logged here with full detail; the returned
    exception carries only a generic message for the client.

        sqlalchemy.exc.TimeoutError            → TransientError (pool exhausted)
        OperationalError / InterfaceError /
        invalidated connection / OSError      → DependencyError
        anything else                          → DatabaseError
    """
    ctx = dict(context or {})
    ctx.update(operation=operation, error_type=type(exc).__name__)

    if isinstance(exc, sa_exc.TimeoutError):
        logger.warning("Connection pool exhausted during %s: %s", operation, exc)
        return TransientError(context=ctx)

    if isinstance(exc, (OSError, sa_exc.OperationalError, sa_exc.InterfaceError)) or getattr(
        exc, "connection_invalidated", False
    ):
        logger.error("Database connection failure during %s: %s", operation, exc)
        return DependencyError(context=ctx)

    logger.error("Database error during %s: %s", operation, exc, exc_info=exc)
    return DatabaseError(context=ctx)


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Opens a session from the app's Database
        2. Yields it to the route handler (services flush as they go)
        3. On success: commits the transaction
        4. On error: rolls back and re-raises for the global handlers
        5. Always: closes the session (returns the connection to the pool)

    FastAPI caches dependencies per request, so the auth guard and the route
    handler share the same session.
    """
    database: Database = request.app.state.database
    async with database.session() as session:
        try:
            yield session
            await session.commit()
        except STORE_FAILURES as e:
            await session.rollback()
            raise translate_store_error(e, "commit") from e
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


def utcnow() -> datetime:
    """Timezone-aware current time; the default for every timestamp column."""
    return datetime.now(timezone.utc)


@contextmanager
def store_errors(operation: str, context: Optional[Dict[str, Any]] = None) -> Iterator[None]:
    """
    Wrap a block of store calls so driver and SQLAlchemy failures leave the service
    boundary as application exceptions.

    Usage:
        with store_errors("journal.list"):
            result = await db.execute(query)
    """
    try:
        yield
    except STORE_FAILURES as e:
        raise translate_store_error(e, operation, context) from e


# ── Conditional Writes ────────────────────────────────────────────────────
_DIALECT_INSERTS = {
    "postgresql": postgresql_insert,
    "sqlite": sqlite_insert,
}


def dialect_insert(db: AsyncSession, model: Type[Base]):
    """
    Return an INSERT construct for `model` that supports ON CONFLICT.

    What:  PostgreSQL and SQLite both implement INSERT … ON CONFLICT, but
           SQLAlchemy exposes it through dialect-specific `insert()` functions.
           This picks the one matching the session's engine.
    Used:  Mood upsert (one row per user per day) and achievement unlocks.
    """
    dialect = db.get_bind().dialect.name
    try:
        return _DIALECT_INSERTS[dialect](model)
    except KeyError:
        raise DatabaseError(
            message="Unsupported database backend",
            context={"dialect": dialect},
        )
