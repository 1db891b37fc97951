"""Sword CLI - generate backend projects from a bundled template."""

__version__ = "0.1.0"

import logging

# Output is configured by the ``sword`` command's callback.
logging.getLogger(__name__).addHandler(logging.NullHandler())

from .cli import main

__all__ = ["main"]
