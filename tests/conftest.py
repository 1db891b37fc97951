"""Shared fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

CONFIG_VARIABLES = (
    "DATABASE_URL",
    "APP_HOST",
    "APP_PORT",
    "DB_MAX_CONNECTIONS",
    "DB_MIN_CONNECTIONS",
    "DB_CONNECT_TIMEOUT",
    "DB_IDLE_TIMEOUT",
    "DB_MAX_LIFETIME",
    "SWORD_LOG",
)

MIGRATION_TEMPLATE = '''"""Test migration {revision}"""
from alembic import op

revision = {revision!r}
down_revision = {down_revision!r}
branch_labels = None
depends_on = None


def upgrade():
    op.execute({statement!r})


def downgrade():
    pass
'''


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Isolate every test from the caller's configuration variables."""
    for name in CONFIG_VARIABLES:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def sqlite_path(tmp_path: Path) -> Path:
    return tmp_path / "app.db"


@pytest.fixture
def sqlite_url(sqlite_path: Path) -> str:
    return f"sqlite+aiosqlite:///{sqlite_path}"


@pytest.fixture
def write_migrations(tmp_path: Path) -> Callable[[list[str]], Path]:
    """Write one Alembic revision per SQL statement, numbered 0001, 0002, ..."""

    def _write(statements: list[str]) -> Path:
        root = tmp_path / "migrations"
        versions = root / "versions"
        versions.mkdir(parents=True)
        previous = None
        for index, statement in enumerate(statements, start=1):
            revision = f"{index:04d}"
            (versions / f"{revision}_step.py").write_text(
                MIGRATION_TEMPLATE.format(
                    revision=revision, down_revision=previous, statement=statement
                )
            )
            previous = revision
        return root

    return _write
