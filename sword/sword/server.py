"""Server bootstrap.

``run`` serves without migrations; ``run_with_migrator`` applies pending
migrations first. Both load configuration, open the pool, build the
application through the caller's ``build_router`` and serve it with uvicorn::

    from sword import server

    def build_router(ctx: server.FrameworkContext) -> FastAPI:
        app = FastAPI()
        app.state.ctx = ctx
        return app

    server.start(build_router, migrator=AlembicMigrator("migrations"))
"""

from __future__ import annotations

import asyncio
import logging
import socket
from dataclasses import dataclass
from typing import Callable

import uvicorn
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from . import db
from .errors import BindError, SwordError
from .log import init_logging
from .migration import Migrator, apply_migrations
from .settings import AppConfig, load_from_environment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrameworkContext:
    """Shared context handed to ``build_router``.

    Holds the configuration and the pooled engine; safe to share across
    requests.
    """

    config: AppConfig
    db: AsyncEngine

    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        return async_sessionmaker(self.db, expire_on_commit=False)


RouterBuilder = Callable[[FrameworkContext], FastAPI]


def bind_socket(host: str, port: int) -> socket.socket:
    """Bind a listening TCP socket for uvicorn."""
    address = f"{host}:{port}"
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((host, port))
    except OSError as exc:
        sock.close()
        raise BindError(address, exc.strerror or str(exc)) from exc
    sock.set_inheritable(True)
    return sock


async def _serve(app: FastAPI, config: AppConfig) -> None:
    sock = bind_socket(config.host, config.port)
    logger.info("Starting server on %s", config.bind_address())
    server = uvicorn.Server(uvicorn.Config(app, log_config=None))
    try:
        await server.serve(sockets=[sock])
    finally:
        sock.close()


async def _bootstrap(
    build_router: RouterBuilder, migrator: Migrator | None, run_migrations: bool
) -> None:
    config = load_from_environment()
    engine = await db.connect_db(config)
    try:
        if migrator is not None and run_migrations:
            await apply_migrations(engine, migrator)

        ctx = FrameworkContext(config=config, db=engine)
        app = build_router(ctx)
        await _serve(app, config)
    finally:
        await engine.dispose()


async def run(build_router: RouterBuilder) -> None:
    """Run the server without database migrations.

    Args:
        build_router: Receives the :class:`FrameworkContext` and returns the
            application to serve
    """
    await _bootstrap(build_router, None, False)


async def run_with_migrator(
    migrator: Migrator, build_router: RouterBuilder, run_migrations: bool = True
) -> None:
    """Run the server, applying pending migrations first when requested.

    Args:
        migrator: Applies the application's schema migrations
        build_router: Receives the :class:`FrameworkContext` and returns the
            application to serve
        run_migrations: Skip migrations when ``False``
    """
    await _bootstrap(build_router, migrator, run_migrations)


def start(
    build_router: RouterBuilder,
    migrator: Migrator | None = None,
    run_migrations: bool = True,
) -> None:
    """Process entry point: serve until terminated, exit 1 on fatal errors.

    Logging is initialised from ``SWORD_LOG`` unless the root logger already
    has handlers, so the fatal error line is always emitted.
    """
    if not logging.getLogger().handlers:
        init_logging()
    if migrator is None:
        bootstrap = run(build_router)
    else:
        bootstrap = run_with_migrator(migrator, build_router, run_migrations)
    try:
        asyncio.run(bootstrap)
    except SwordError as exc:
        logger.critical("Fatal startup error (%s): %s", type(exc).__name__, exc)
        raise SystemExit(1) from exc


__all__ = [
    "FrameworkContext",
    "RouterBuilder",
    "bind_socket",
    "run",
    "run_with_migrator",
    "start",
]
