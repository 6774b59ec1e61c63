from __future__ import annotations

from typing import Any

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from copa_litoral.core.config import Settings, get_settings


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(settings: Settings) -> AsyncEngine:
    url = make_url(settings.database_url)
    timeout = settings.db_statement_timeout_seconds

    if url.get_backend_name() == "sqlite":
        sqlite_engine = create_async_engine(
            url,
            poolclass=NullPool,
            connect_args={"timeout": timeout},
        )
        event.listen(sqlite_engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return sqlite_engine

    return create_async_engine(
        url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_recycle=settings.db_pool_recycle_minutes * 60,
        pool_pre_ping=True,
        pool_timeout=timeout,
        connect_args={"command_timeout": timeout, "timeout": timeout},
    )


engine = build_engine(get_settings())
SessionLocal = async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
