"""Logging configuration shared by the manage server and the CLI."""

from __future__ import annotations

import logging

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def resolve_log_level(level: str) -> int:
    """Map a level name such as `debug` to its numeric value, defaulting to INFO."""

    normalized_level = level.strip().upper() if level.strip() else "INFO"
    resolved = logging.getLevelName(normalized_level)
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(*, level: str) -> int:
    """Configure process logging and return the effective numeric level.

    Handlers are only installed once per process; the root level is always
    updated so a later call (for example `--log-level`) takes effect.
    """

    resolved_level = resolve_log_level(level)
    logging.basicConfig(level=resolved_level, format=_LOG_FORMAT)
    logging.getLogger().setLevel(resolved_level)
    return resolved_level
