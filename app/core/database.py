from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from app.core.config import settings


def _enable_sqlite_transactions(engine) -> None:
    # The sqlite driver defers BEGIN on its own, which breaks SAVEPOINT;
    # take over transaction control so nested transactions behave.
    @event.listens_for(engine.sync_engine, "connect")
    def do_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    # IMMEDIATE takes the write lock up front, so concurrent writers wait on
    # the busy timeout instead of failing with "database is locked" mid-transaction.
    @event.listens_for(engine.sync_engine, "begin")
    def do_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def build_engine(database_url: str, **kwargs):
    """Create the async engine, sizing the pool only for server databases"""
    if database_url.startswith("sqlite"):
        engine = create_async_engine(database_url, echo=settings.DEBUG, **kwargs)
        _enable_sqlite_transactions(engine)
        return engine

    kwargs.setdefault("pool_size", settings.DATABASE_POOL_MIN_IDLE)
    kwargs.setdefault(
        "max_overflow",
        max(settings.DATABASE_POOL_MAX_SIZE - settings.DATABASE_POOL_MIN_IDLE, 0),
    )
    kwargs.setdefault("pool_timeout", settings.DATABASE_POOL_TIMEOUT_SECONDS)
    kwargs.setdefault("pool_pre_ping", True)
    return create_async_engine(database_url, echo=settings.DEBUG, **kwargs)


engine = build_engine(settings.DATABASE_URL)

AsyncSessionLocal = async_sessionmaker(engine, expire_on_commit=False)

Base = declarative_base()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield a database session for the duration of a request"""
    async with AsyncSessionLocal() as session:
        yield session
