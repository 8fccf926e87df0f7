"""
Rendering context logger.

Messages from previews and PDF export carry a [render] prefix. Rendering
modules log through this module only.
"""

from pathlib import Path
from typing import Callable, List

from loguru import logger

from folio.contexts.rendering.compiler import LATEX_COMPILER, CompilationResult
from folio.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(log_dir: Path) -> Path:
    """Configure loguru for an export session; returns the log file path."""
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        extra_provenance={"LaTeX compiler": LATEX_COMPILER},
    )


def _log_info(message: str) -> None:
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def _log_capped(label: str, messages: List[str], limit: int, log: Callable[[str], None]) -> None:
    """Log at most `limit` numbered messages, then a count of the rest."""
    for i, message in enumerate(messages[:limit], 1):
        log(f"  {label} {i}: {message}")
    hidden = len(messages) - limit
    if hidden > 0:
        log(f"  ... {hidden} more")


def log_export_start(resume_id: str, title: str, tex_file: Path, num_passes: int) -> None:
    _log_info(f"Exporting '{title}' ({resume_id})")
    _log_debug(f"  Source: {tex_file}")
    _log_debug(f"  Passes: {num_passes}")


def log_compilation_result(
    title: str,
    result: CompilationResult,
    elapsed_time: float,
    verbose: bool = False,
) -> None:
    """
    Summarize a compile_latex() run.

    Errors always reach the console; warnings and raw engine output go to the
    debug log (engine output only when verbose or on failure).
    """
    if result.success:
        _log_success(f"'{title}' compiled in {elapsed_time:.2f}s, {result.page_count} page(s)")
        _log_debug(f"  PDF: {result.pdf_path}")
    else:
        _log_error(f"'{title}' failed after {elapsed_time:.2f}s with {len(result.errors)} error(s)")
        _log_capped("Error", result.errors, 10 if verbose else 5, _log_error)

    _log_capped("Warning", result.warnings, 10 if verbose else 3, _log_debug)

    if verbose or not result.success:
        for stream, text in (("stdout", result.stdout), ("stderr", result.stderr)):
            if text:
                # raw keeps multi-line engine output free of per-line prefixes
                logger.opt(raw=True).debug(f"--- engine {stream} ---\n{text}\n")
