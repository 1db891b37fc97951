"""{{PROJECT_NAME}} entry point."""

from pathlib import Path

from dotenv import load_dotenv
from sword import AlembicMigrator, init_logging, server

from app.routes import build_router

MIGRATIONS_DIR = (
    Path(__file__).resolve().parents[1] / "infrastructure" / "database" / "migrations"
)


def main() -> None:
    load_dotenv()
    init_logging()

    server.start(
        build_router,
        migrator=AlembicMigrator(MIGRATIONS_DIR),
        run_migrations=True,
    )


if __name__ == "__main__":
    main()
