"""Access to the template tree bundled with the package."""

from __future__ import annotations

from importlib.resources import files
from importlib.resources.abc import Traversable

TEMPLATE_PACKAGE = "sword_cli"
BASE_TEMPLATE = "base"

# Created by installers when byte-compiling; never part of a template.
IGNORED_NAMES = frozenset({"__pycache__"})
IGNORED_SUFFIXES = (".pyc", ".pyo")


def bundled_template(name: str = BASE_TEMPLATE) -> Traversable:
    """Return the root of a bundled template directory."""
    root = files(TEMPLATE_PACKAGE) / "templates" / name
    if not root.is_dir():
        raise FileNotFoundError(f"Template not found: {name}")
    return root


def is_ignored(entry: Traversable) -> bool:
    return entry.name in IGNORED_NAMES or entry.name.endswith(IGNORED_SUFFIXES)
