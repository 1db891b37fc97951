"""Tests for schema migrations."""

from __future__ import annotations

import sqlite3

import pytest
from sqlalchemy.ext.asyncio import create_async_engine

from sword.errors import MigrationError
from sword.migration import AlembicMigrator, apply_migrations

CLEAN_STATEMENTS = [
    "CREATE TABLE t1 (id INTEGER PRIMARY KEY)",
    "CREATE TABLE t2 (id INTEGER PRIMARY KEY)",
    "CREATE TABLE t3 (id INTEGER PRIMARY KEY)",
]

FAILING_STATEMENTS = [
    "CREATE TABLE t1 (id INTEGER PRIMARY KEY)",
    "CREATE TABLE t2 (id INTEGER PRIMARY KEY)",
    "CREATE TABLE broken (",
    "CREATE TABLE t4 (id INTEGER PRIMARY KEY)",
    "CREATE TABLE t5 (id INTEGER PRIMARY KEY)",
]


def table_names(path) -> set[str]:
    with sqlite3.connect(path) as conn:
        rows = conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
        return {row[0] for row in rows}


def current_version(path) -> list[str]:
    with sqlite3.connect(path) as conn:
        return [row[0] for row in conn.execute("SELECT version_num FROM alembic_version")]


@pytest.mark.asyncio
async def test_applies_all_pending_migrations(sqlite_url, sqlite_path, write_migrations):
    migrator = AlembicMigrator(write_migrations(CLEAN_STATEMENTS))
    engine = create_async_engine(sqlite_url)
    try:
        applied = await apply_migrations(engine, migrator)
    finally:
        await engine.dispose()

    assert applied == ["0001", "0002", "0003"]
    assert {"t1", "t2", "t3", "alembic_version"} <= table_names(sqlite_path)
    assert current_version(sqlite_path) == ["0003"]


@pytest.mark.asyncio
async def test_second_run_applies_nothing(sqlite_url, write_migrations):
    migrator = AlembicMigrator(write_migrations(CLEAN_STATEMENTS))
    engine = create_async_engine(sqlite_url)
    try:
        await apply_migrations(engine, migrator)
        applied = await apply_migrations(engine, migrator)
    finally:
        await engine.dispose()

    assert applied == []


@pytest.mark.asyncio
async def test_failing_migration_keeps_earlier_revisions(
    sqlite_url, sqlite_path, write_migrations
):
    migrator = AlembicMigrator(write_migrations(FAILING_STATEMENTS))
    engine = create_async_engine(sqlite_url)
    try:
        with pytest.raises(MigrationError) as exc_info:
            await apply_migrations(engine, migrator)
    finally:
        await engine.dispose()

    assert exc_info.value.revision == "0003"
    tables = table_names(sqlite_path)
    assert {"t1", "t2"} <= tables
    assert not {"broken", "t4", "t5"} & tables
    assert current_version(sqlite_path) == ["0002"]


@pytest.mark.asyncio
async def test_failure_before_any_revision_names_no_revision(
    sqlite_url, sqlite_path, write_migrations
):
    with sqlite3.connect(sqlite_path) as conn:
        conn.execute("CREATE TABLE alembic_version (unrelated TEXT)")
    migrator = AlembicMigrator(write_migrations(CLEAN_STATEMENTS))
    engine = create_async_engine(sqlite_url)
    try:
        with pytest.raises(MigrationError) as exc_info:
            await apply_migrations(engine, migrator)
    finally:
        await engine.dispose()

    assert exc_info.value.revision is None
    assert "t1" not in table_names(sqlite_path)


@pytest.mark.asyncio
async def test_invalid_migrations_directory(sqlite_url, tmp_path):
    migrator = AlembicMigrator(tmp_path / "nowhere")
    engine = create_async_engine(sqlite_url)
    try:
        with pytest.raises(MigrationError) as exc_info:
            await apply_migrations(engine, migrator)
    finally:
        await engine.dispose()

    assert exc_info.value.revision is None


@pytest.mark.asyncio
async def test_custom_migrator_errors_are_wrapped(sqlite_url):
    class Exploding:
        def upgrade(self, connection):
            raise RuntimeError("boom")

    engine = create_async_engine(sqlite_url)
    try:
        with pytest.raises(MigrationError) as exc_info:
            await apply_migrations(engine, Exploding())
    finally:
        await engine.dispose()

    assert "boom" in str(exc_info.value)
