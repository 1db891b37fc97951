"""Sword - backend runtime built on FastAPI and SQLAlchemy.

Loads configuration from the environment, opens a pooled database engine,
applies Alembic migrations and serves the application returned by a
caller-supplied ``build_router``.
"""

__version__ = "0.1.0"

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

from .db import connect_db
from .errors import (
    BindError,
    ConfigError,
    DatabaseConnectError,
    InvalidNumericValue,
    MigrationError,
    MissingRequiredVariable,
    SwordError,
)
from .log import init_logging
from .migration import AlembicMigrator, Migrator
from .server import FrameworkContext, run, run_with_migrator, start
from .settings import AppConfig, load_from_environment

__all__ = [
    "AlembicMigrator",
    "AppConfig",
    "BindError",
    "ConfigError",
    "DatabaseConnectError",
    "FrameworkContext",
    "InvalidNumericValue",
    "MigrationError",
    "Migrator",
    "MissingRequiredVariable",
    "SwordError",
    "connect_db",
    "init_logging",
    "load_from_environment",
    "run",
    "run_with_migrator",
    "start",
]
