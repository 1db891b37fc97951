"""Logging initialisation.

The filter is read from ``SWORD_LOG`` and defaults to
``info,sqlalchemy.engine=warning,asyncpg=warning``::

    SWORD_LOG=debug python -m app.main
    SWORD_LOG=info,sqlalchemy.engine=info python -m app.main
"""

from __future__ import annotations

import logging
import os

LOG_FILTER_ENV = "SWORD_LOG"
DEFAULT_LOG_FILTER = "info,sqlalchemy.engine=warning,asyncpg=warning"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logger = logging.getLogger(__name__)


def _parse_level(value: str) -> int:
    level = logging.getLevelName(value.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {value!r}")
    return level


def parse_log_filter(spec: str) -> tuple[int, dict[str, int]]:
    """Parse a filter such as ``info,sqlalchemy.engine=warning``.

    Returns:
        Root level and a mapping of logger name to level
    """
    root_level = logging.INFO
    targets: dict[str, int] = {}
    for directive in spec.split(","):
        directive = directive.strip()
        if not directive:
            continue
        if "=" in directive:
            name, level = directive.split("=", 1)
            if not name.strip():
                raise ValueError(f"Missing logger name in directive: {directive!r}")
            targets[name.strip()] = _parse_level(level)
        else:
            root_level = _parse_level(directive)
    return root_level, targets


def init_logging(filter_spec: str | None = None) -> None:
    """Configure root logging once at process start."""
    spec = filter_spec if filter_spec is not None else os.environ.get(LOG_FILTER_ENV)
    fallback = False
    try:
        root_level, targets = parse_log_filter(spec or DEFAULT_LOG_FILTER)
    except ValueError:
        root_level, targets = parse_log_filter(DEFAULT_LOG_FILTER)
        fallback = True

    logging.basicConfig(level=root_level, format=LOG_FORMAT)
    logging.getLogger().setLevel(root_level)
    for name, level in targets.items():
        logging.getLogger(name).setLevel(level)

    if fallback:
        logger.warning(
            "Invalid %s value %r; using %r", LOG_FILTER_ENV, spec, DEFAULT_LOG_FILTER
        )
