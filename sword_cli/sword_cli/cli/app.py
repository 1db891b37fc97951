"""Main CLI application."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NoReturn, Optional

import typer
from typing_extensions import Annotated

from ..core.errors import EmptyProjectName, GenerationError
from ..core.models import SWORD_VERSION, GenerationRequest
from ..rendering import engine
from .parsers import resolve_port, resolve_project_name

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="sword",
    help="Sword Framework CLI - Generate backend projects with FastAPI and SQLAlchemy.",
)


def _abort(exc: GenerationError) -> NoReturn:
    typer.secho(f"Error: {exc}", err=True, fg=typer.colors.RED)
    raise typer.Exit(code=1) from exc


@app.callback()
def cli(
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose logging.",
        ),
    ] = False,
) -> None:
    """Sword project generator."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="[%(levelname)s] %(message)s",
    )


@app.command()
def new(
    name: Annotated[
        Optional[str],
        typer.Argument(help="Name of the project.", show_default=False),
    ] = None,
    out_dir: Annotated[
        str,
        typer.Option(
            "--out-dir",
            "-o",
            help="Output directory (defaults to parent directory).",
            metavar="DIR",
        ),
    ] = "..",
    init: Annotated[
        bool,
        typer.Option(
            "--init",
            help="Initialize in the specified directory instead of creating a subdirectory.",
        ),
    ] = False,
    no_interactive: Annotated[
        bool,
        typer.Option(
            "--no-interactive",
            help="Disable interactive prompts.",
        ),
    ] = False,
    port: Annotated[
        Optional[int],
        typer.Option(
            "--port",
            "-p",
            help="Application port (default: 3000).",
            min=0,
            max=65535,
            show_default=False,
        ),
    ] = None,
) -> None:
    """Create a new Sword project."""
    interactive = not no_interactive
    project_name = resolve_project_name(name, interactive)
    if not project_name:
        _abort(EmptyProjectName())
    app_port = resolve_port(port, interactive)

    request = GenerationRequest(
        project_name=project_name,
        output_dir=Path(out_dir),
        init_in_place=init,
        port=app_port,
        library_version=SWORD_VERSION,
    )

    try:
        engine.validate_request(request)
        typer.echo(f"Creating project '{project_name}'...")
        outputs = engine.generate(request)
    except GenerationError as exc:
        _abort(exc)

    logger.debug(f"Completed: {len(outputs)} file(s) written")

    typer.echo(f"\n✓ Project '{project_name}' created successfully!")
    typer.echo("\nNext steps:")
    typer.echo(f"  cd {request.target_path}")
    typer.echo("  docker compose up -d db")
    typer.echo("  pip install -e .")
    typer.echo("  python -m app.main")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
