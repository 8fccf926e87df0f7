"""
Loguru setup shared by the FOLIO contexts.

Each context wraps setup_logger() in its own contexts/{context}/logger.py and
adds a message prefix there; modules never configure loguru themselves.
"""

import sys
from pathlib import Path
from typing import Dict

from loguru import logger

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "<dim>{time:HH:mm:ss}</dim> <level>{level: <7}</level> <level>{message}</level>"

# Console colors per level, overridable per context
LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: Dict[str, object] = None,
    level_colors: Dict[str, str] = None,
    console_level: str = "INFO",
) -> Path:
    """
    Send this process's logs to {log_dir}/{context_name}.log and the console.

    The file receives every DEBUG message; the console only `console_level`
    and above. Any previously configured sinks are removed first. A
    provenance header is written before returning.

    Args:
        context_name: Context identifier, used as the log file stem ("editor", "render")
        log_dir: Directory for this session's logs (created if missing)
        extra_provenance: Context-specific header lines, e.g. {"Database": "outs/folio.db"}
        level_colors: Overrides for LEVEL_COLORS
        console_level: Minimum level echoed to stdout

    Returns:
        Path to the log file
    """
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    for level_name, color in {**LEVEL_COLORS, **(level_colors or {})}.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG", encoding="utf-8")
    logger.add(sys.stdout, format=CONSOLE_FORMAT, level=console_level, colorize=True)

    log_provenance(context_name, extra_provenance)
    return log_file


def log_provenance(context_name: str, extra_context: Dict[str, object] = None) -> None:
    """Write a header recording how this process was started."""
    lines = {
        "Context": context_name,
        "Command": " ".join(sys.argv),
        "Working directory": Path.cwd(),
        "Python": sys.version.split()[0],
        **(extra_context or {}),
    }
    logger.info("-" * 60)
    for key, value in lines.items():
        logger.info(f"{key}: {value}")
    logger.info("-" * 60)
