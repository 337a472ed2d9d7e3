"""Async database helpers for the catalog service."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from sqlalchemy import event
from sqlalchemy import MetaData
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from .orm import Base

DATABASE_ENV_VAR = "CATALOG_DATABASE_URL"
DEFAULT_DATABASE_PATH = Path("catalog.db")


def resolve_database_url(
    candidate: Optional[str],
    *,
    env_var: str = DATABASE_ENV_VAR,
    default_path: Path = DEFAULT_DATABASE_PATH,
) -> str:
    """Convert ``candidate`` into an async SQLAlchemy database URL.

    Args:
        candidate (Optional[str]): URL or filesystem path from settings or the
            command line.
        env_var (str): Environment variable consulted when ``candidate`` is
            empty.
        default_path (Path): SQLite file used when nothing else is configured.

    Returns:
        str: A database URL usable with :func:`create_async_engine`. Bare paths
        become ``sqlite+aiosqlite`` URLs.
    """

    if not candidate:
        candidate = os.getenv(env_var) or None

    if not candidate:
        candidate = str(default_path)

    if "://" not in candidate:
        db_path = Path(candidate).expanduser().resolve()
        return f"sqlite+aiosqlite:///{db_path}"

    return candidate


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine_and_session(
    url: str,
    *,
    echo: bool = False,
    engine_kwargs: Optional[Dict[str, Any]] = None,
) -> Tuple[AsyncEngine, async_sessionmaker[AsyncSession]]:
    """Create an async engine and session factory for ``url``.

    SQLite connections get foreign key enforcement so that deleting a parent
    record removes its children at the database level too.

    Args:
        url (str): Database URL to connect to.
        echo (bool): When ``True`` SQLAlchemy logs SQL statements.
        engine_kwargs (Optional[Dict[str, Any]]): Extra keyword arguments for
            :func:`sqlalchemy.ext.asyncio.create_async_engine`.

    Returns:
        Tuple[AsyncEngine, async_sessionmaker[AsyncSession]]: Engine and
        session factory pair.
    """

    engine = create_async_engine(url, echo=echo, **(engine_kwargs or {}))
    if engine.dialect.name == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    session_factory = async_sessionmaker(
        engine, expire_on_commit=False, class_=AsyncSession
    )
    return engine, session_factory


async def initialise_schema(
    engine: AsyncEngine,
    *,
    metadata: MetaData = Base.metadata,
) -> None:
    """Create any missing catalog tables."""

    async with engine.begin() as connection:
        await connection.run_sync(metadata.create_all)


__all__ = [
    "DATABASE_ENV_VAR",
    "create_engine_and_session",
    "initialise_schema",
    "resolve_database_url",
]
