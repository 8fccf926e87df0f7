"""
Editing context logger.

Provides logging interface for editing context with automatic [editor] prefix.
All editing modules should import from this module, not from utils.logger directly.
"""

import os
from pathlib import Path

from loguru import logger

from folio.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[editor]"


def setup_editing_logger(log_dir: Path) -> Path:
    """
    Setup logger for editing context.

    Args:
        log_dir: Directory for this editing session

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="editor",
        log_dir=log_dir,
        extra_provenance={"Database": os.getenv("FOLIO_DB_PATH", "outs/folio.db")},
    )


# Wrapper functions with automatic [editor] prefix


def _log_success(message: str) -> None:
    """Log success message with [editor] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [editor] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [editor] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level editing-specific logging helpers


def log_rejected(operation: str, reason: str, resume_id: str = None) -> None:
    """Log a mutation rejected by the session or ownership guard."""
    target = f" on {resume_id}" if resume_id else ""
    _log_warning(f"{operation}{target} rejected: {reason}")


def log_mutation(operation: str, resume_id: str, detail: str = "") -> None:
    """Log a successfully applied mutation."""
    suffix = f" ({detail})" if detail else ""
    _log_debug(f"{operation} applied to {resume_id}{suffix}")


def log_duplication(source_id: str, new_id: str, title: str, row_counts: dict) -> None:
    """Log a completed duplication with per-collection row counts."""
    counts = ", ".join(f"{kind}: {count}" for kind, count in row_counts.items())
    _log_success(f"Duplicated {source_id} -> {new_id} as '{title}'")
    _log_debug(f"  Cloned rows: {counts}")
