"""
Loguru setup shared by the analysis command-line tools.

One call per run: a DEBUG log file inside the run's log directory, an INFO
console sink on stderr (stdout stays free for JSON), and a provenance header
recording how the run was started. Context-specific prefixed wrappers live in
contexts/{context}/logger.py.
"""

import os
import sys
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv
from loguru import logger

from pdfwhisper import __version__

load_dotenv()
CONSOLE_LOG_LEVEL = os.getenv("CONSOLE_LOG_LEVEL", "INFO")

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <7} | {message}"
CONSOLE_FORMAT = "{time:HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"

# Console colours per level; INFO keeps the loguru default
LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: Optional[Dict[str, object]] = None,
    level_colors: Optional[Dict[str, str]] = None,
) -> Path:
    """
    Route loguru output for one analysis run.

    Args:
        context_name: Run type, used as the log file stem (e.g., "outline", "persona")
        log_dir: Directory for this run's log file (created if missing)
        extra_provenance: Run settings to record in the header (e.g., {"Preset": "basic"})
        level_colors: Per-level console colour overrides (e.g., {"INFO": "<cyan>"})

    Returns:
        Path to log file

    Example:
        log_file = setup_logger(
            context_name="persona",
            log_dir=Path("outs/logs/persona_20251114_123456"),
            extra_provenance={"Preset": "enhanced"},
        )
    """
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    for level_name, color in {**LEVEL_COLORS, **(level_colors or {})}.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG", encoding="utf-8")
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=CONSOLE_LOG_LEVEL, colorize=True)

    log_provenance(extra_provenance)
    return log_file


def provenance_fields(extra_context: Optional[Dict[str, object]] = None) -> Dict[str, object]:
    """Ordered header fields: invocation, environment, then caller-supplied extras."""
    fields: Dict[str, object] = {
        "Command": " ".join(sys.argv),
        "Working directory": Path.cwd(),
        "Python": sys.version.split()[0],
        "pdfwhisper": __version__,
    }
    fields.update(extra_context or {})
    return fields


def log_provenance(extra_context: Optional[Dict[str, object]] = None) -> None:
    """Write the provenance header, framed by rules, to every active sink."""
    rule = "=" * 80
    logger.info(rule)
    for key, value in provenance_fields(extra_context).items():
        logger.info(f"{key}: {value}")
    logger.info(rule)
