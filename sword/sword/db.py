"""Database engine and connection pool.

Pool settings come from :class:`sword.settings.AppConfig`:

- ``DB_MIN_CONNECTIONS`` connections are kept open once created
- ``DB_MAX_CONNECTIONS`` caps the pool including overflow
- ``DB_CONNECT_TIMEOUT`` bounds connecting and pool checkout
- ``DB_IDLE_TIMEOUT`` replaces connections left idle for too long
- ``DB_MAX_LIFETIME`` recycles connections older than this
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any

from sqlalchemy import event, exc, pool, text
from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from .errors import DatabaseConnectError
from .settings import AppConfig

logger = logging.getLogger(__name__)

_CHECKED_IN_AT = "sword_checked_in_at"

# Driver keyword that bounds establishing a single connection.
_CONNECT_TIMEOUT_ARGS = {
    "asyncpg": "timeout",
    "aiosqlite": "timeout",
    "psycopg": "connect_timeout",
    "aiomysql": "connect_timeout",
    "asyncmy": "connect_timeout",
}


def pool_options(config: AppConfig) -> dict[str, Any]:
    """Translate configuration into SQLAlchemy queue pool arguments.

    The pool never holds more than ``max(DB_MAX_CONNECTIONS, 1)`` connections,
    even when ``DB_MIN_CONNECTIONS`` is larger.
    """
    max_size = max(config.db_max_connections, 1)
    pool_size = min(max(config.db_min_connections, 1), max_size)
    return {
        "pool_size": pool_size,
        "max_overflow": max_size - pool_size,
        "pool_timeout": config.db_connect_timeout,
        "pool_recycle": config.db_max_lifetime,
    }


def _engine_options(url: URL, config: AppConfig) -> dict[str, Any]:
    pool_class = url.get_dialect().get_pool_class(url)
    if issubclass(pool_class, pool.QueuePool):
        return pool_options(config)
    # Single-connection pools such as StaticPool take no sizing arguments.
    return {"pool_recycle": config.db_max_lifetime}


def _connect_args(url: URL, config: AppConfig) -> dict[str, Any]:
    driver = url.get_driver_name()
    arg = _CONNECT_TIMEOUT_ARGS.get(driver)
    if arg is None:
        return {}
    return {arg: config.db_connect_timeout}


def _install_idle_timeout(engine: AsyncEngine, idle_timeout: int) -> None:
    @event.listens_for(engine.sync_engine, "checkin")
    def _stamp(dbapi_connection: Any, connection_record: Any) -> None:
        if dbapi_connection is not None:
            connection_record.info[_CHECKED_IN_AT] = time.monotonic()

    @event.listens_for(engine.sync_engine, "checkout")
    def _expire_idle(
        dbapi_connection: Any, connection_record: Any, connection_proxy: Any
    ) -> None:
        checked_in_at = connection_record.info.pop(_CHECKED_IN_AT, None)
        if checked_in_at is None:
            return
        if time.monotonic() - checked_in_at > idle_timeout:
            # The pool invalidates this connection and checks out a fresh one.
            raise exc.DisconnectionError("connection exceeded idle timeout")


def create_engine(config: AppConfig) -> AsyncEngine:
    """Create the async engine without connecting."""
    url = make_url(config.database_url)
    engine = create_async_engine(
        url,
        connect_args=_connect_args(url, config),
        **_engine_options(url, config),
    )
    _install_idle_timeout(engine, config.db_idle_timeout)
    return engine


async def _ping(engine: AsyncEngine) -> None:
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))


async def connect_db(config: AppConfig) -> AsyncEngine:
    """Establish the connection pool and verify the database is reachable.

    Args:
        config: Application configuration containing database settings

    Returns:
        Engine ready for use with SQLAlchemy sessions and connections

    Raises:
        DatabaseConnectError: the database was not reachable within
            ``DB_CONNECT_TIMEOUT`` seconds
    """
    try:
        safe_url = make_url(config.database_url).render_as_string(hide_password=True)
        engine = create_engine(config)
    except (exc.SQLAlchemyError, ImportError, TypeError, ValueError) as e:
        raise DatabaseConnectError(f"Invalid database URL: {e}") from e

    try:
        await asyncio.wait_for(_ping(engine), timeout=config.db_connect_timeout)
    except asyncio.TimeoutError as e:
        await engine.dispose()
        raise DatabaseConnectError(
            f"Timed out after {config.db_connect_timeout}s connecting to {safe_url}"
        ) from e
    except (exc.SQLAlchemyError, OSError) as e:
        await engine.dispose()
        raise DatabaseConnectError(f"Could not connect to {safe_url}: {e}") from e

    logger.info("Database connection established")
    return engine


__all__ = ["connect_db", "create_engine", "pool_options"]
