"""
Analysis context logger.

Provides logging interface for analysis context with automatic [analysis] prefix.
All analysis modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from pdfwhisper.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[analysis]"


def setup_analysis_logger(log_dir: Path, operation: str, preset: str) -> Path:
    """
    Setup logger for an analysis run.

    Args:
        log_dir: Directory for this analysis session
        operation: "outline" or "persona"
        preset: Name of the settings preset in use

    Returns:
        Path to log file

    Example:
        from pdfwhisper.contexts.analysis.logger import setup_analysis_logger

        log_file = setup_analysis_logger(log_dir, operation="outline", preset="enhanced")
    """
    return _setup_logger(
        context_name=operation,
        log_dir=log_dir,
        extra_provenance={"Operation": operation, "Preset": preset},
    )


# Wrapper functions with automatic [analysis] prefix


def _log_info(message: str) -> None:
    """Log info message with [analysis] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [analysis] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [analysis] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [analysis] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [analysis] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level analysis-specific logging helpers


def log_analysis_start(operation: str, document_names: list, preset: str) -> None:
    """Log start of an analysis run with its inputs."""
    _log_info(f"Starting {operation} for {len(document_names)} document(s) [preset: {preset}]")
    for name in document_names:
        _log_debug(f"Input: {name}")


def log_analysis_result(operation: str, summary: str, elapsed_time: float) -> None:
    """Log a completed analysis run."""
    _log_success(f"{operation} complete: {summary} ({elapsed_time:.2f}s)")


def log_skipped_page(document: str, page_number: int, error: Exception) -> None:
    """Log a page that could not be read and was skipped."""
    _log_warning(f"Skipping page {page_number} of {document}: {error}")


def log_skipped_document(document: str, error: Exception) -> None:
    """Log a document that could not be opened and was skipped."""
    _log_warning(f"Skipping document {document}: {error}")
