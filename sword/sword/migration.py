"""Schema migrations applied before the server starts.

Migrations are forward-only: each revision runs in its own transaction, and
revisions committed before a failing one stay committed.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterator, Protocol

from alembic.config import Config
from alembic.runtime.environment import EnvironmentContext
from alembic.script import ScriptDirectory
from alembic.util import CommandError
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import AsyncEngine

from .errors import MigrationError

logger = logging.getLogger(__name__)


class Migrator(Protocol):
    """Anything able to bring a schema up to date on a sync connection."""

    def upgrade(self, connection: Connection) -> list[str]:
        """Apply pending migrations in order and return the applied ids."""
        ...


class AlembicMigrator:
    """Apply Alembic revisions from a script directory up to ``heads``.

    The script directory needs a ``versions/`` folder; an ``env.py`` is only
    required for the ``alembic`` command line, not for this migrator.
    """

    def __init__(
        self, script_location: str | Path, *, version_table: str = "alembic_version"
    ) -> None:
        self.script_location = Path(script_location)
        self.version_table = version_table

    def _config(self) -> Config:
        config = Config()
        config.set_main_option("script_location", str(self.script_location))
        return config

    def upgrade(self, connection: Connection) -> list[str]:
        config = self._config()
        try:
            script = ScriptDirectory.from_config(config)
        except CommandError as exc:
            raise MigrationError(None, f"Invalid migrations directory: {exc}") from exc

        started: list[str] = []
        applied: list[str] = []

        def _upgrade_steps(rev: Any, context: Any) -> Iterator[Any]:
            # Same step computation as ``alembic upgrade heads``. Each step is
            # recorded as the migration context pulls it, right before it runs.
            for step in script._upgrade_revs("heads", rev):
                started.append(step.revision.revision)
                yield step

        def _record(*, ctx: Any, step: Any, heads: Any, run_args: Any) -> None:
            applied.append(step.up_revision_id)
            logger.info("Applied migration %s", step.up_revision_id)

        with EnvironmentContext(
            config, script, fn=_upgrade_steps, destination_rev="heads"
        ) as env:
            env.configure(
                connection=connection,
                version_table=self.version_table,
                transaction_per_migration=True,
                on_version_apply=_record,
            )
            try:
                with env.begin_transaction():
                    env.run_migrations()
            except Exception as exc:
                if len(started) > len(applied):
                    failed = started[-1]
                    raise MigrationError(
                        failed, f"Migration {failed} failed: {exc}"
                    ) from exc
                raise MigrationError(None, f"Migrations failed: {exc}") from exc

        return applied


async def apply_migrations(engine: AsyncEngine, migrator: Migrator) -> list[str]:
    """Run ``migrator`` on a dedicated connection.

    Returns:
        Revision ids applied by this run, in order
    """
    logger.info("Running database migrations...")
    try:
        async with engine.connect() as conn:
            applied = await conn.run_sync(migrator.upgrade)
    except MigrationError:
        raise
    except Exception as exc:
        raise MigrationError(None, f"Migrations failed: {exc}") from exc

    logger.info("Migrations completed successfully (%d applied)", len(applied))
    return applied


__all__ = ["AlembicMigrator", "Migrator", "apply_migrations"]
