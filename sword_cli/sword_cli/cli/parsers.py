"""CLI argument parsers and interactive prompts."""

from __future__ import annotations

from typing import Optional

import typer

from ..core.models import DEFAULT_PORT


def parse_port(value: int) -> int:
    """Validate a TCP port number."""
    if not 0 <= value <= 65535:
        raise typer.BadParameter(f"Port must be between 0 and 65535, got: {value}")
    return value


def resolve_project_name(name: Optional[str], interactive: bool) -> str:
    """Return the given name or prompt for one."""
    if name is not None:
        return name
    if not interactive:
        raise typer.BadParameter(
            "Project name is required when using --no-interactive", param_hint="NAME"
        )
    return typer.prompt("Project name", default="", show_default=False)


def resolve_port(port: Optional[int], interactive: bool) -> int:
    """Return the given port, prompt for one, or fall back to the default."""
    if port is not None:
        return parse_port(port)
    if not interactive:
        return DEFAULT_PORT
    return parse_port(typer.prompt("Application port", default=DEFAULT_PORT, type=int))
