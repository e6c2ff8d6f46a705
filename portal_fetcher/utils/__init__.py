"""Utility helpers for logging."""

from portal_fetcher.utils.log import setup_logging, log

__all__ = [
    "setup_logging",
    "log",
]
