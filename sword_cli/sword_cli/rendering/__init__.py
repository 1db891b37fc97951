"""Template tree rendering."""

from .engine import generate, substitute, validate_request

__all__ = ["generate", "substitute", "validate_request"]
