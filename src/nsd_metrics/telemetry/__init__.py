"""Logging setup for nsd-metrics processes."""

from .logging import configure_logging

__all__ = ["configure_logging"]
