"""Root logger configuration backed by rich."""

from __future__ import annotations

import logging

from rich.logging import RichHandler


def _resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """Install a single RichHandler on the root logger and set its level.

    Raises ``ValueError`` for an unknown level name before touching the root logger.
    """
    resolved = _resolve_level(level)
    root = logging.getLogger()
    if not any(isinstance(handler, RichHandler) for handler in root.handlers):
        root.addHandler(RichHandler(rich_tracebacks=True, show_path=False))
    root.setLevel(resolved)
    return root
