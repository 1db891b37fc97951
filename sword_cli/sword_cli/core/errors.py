"""Errors raised while generating a project."""

from __future__ import annotations

from pathlib import Path


class GenerationError(Exception):
    """Base class for project generation failures."""


class EmptyProjectName(GenerationError):
    def __init__(self) -> None:
        super().__init__("Project name cannot be empty")


class TargetExists(GenerationError):
    def __init__(self, path: Path) -> None:
        super().__init__(f"Directory '{path}' already exists")
        self.path = path


class TemplateWriteError(GenerationError):
    """Raised when a template file cannot be written to disk."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to write {path}: {reason}")
        self.path = path
