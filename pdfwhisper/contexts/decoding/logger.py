"""
Decoding context logger.

Provides logging interface for decoding context with automatic [decode] prefix.
All decoding modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[decode]"


def _log_debug(message: str) -> None:
    """Log debug message with [decode] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [decode] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")
