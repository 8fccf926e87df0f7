"""
LaTeX to PDF compilation.

Runs an external LaTeX engine over a generated .tex file, in that file's
directory, and reports the outcome as a CompilationResult. Failures are data,
not exceptions: a missing engine, a missing source file and a broken document
all come back with success=False and readable errors.
"""

import os
import re
import shutil
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from dotenv import load_dotenv

from folio.utils.pdf_processing import page_count

load_dotenv()
LATEX_COMPILER = os.getenv("LATEX_COMPILER", "pdflatex")
KEEP_LATEX_ARTIFACTS = os.getenv("KEEP_LATEX_ARTIFACTS", "false").lower() == "true"

# Side files written next to the .tex by the engine
LATEX_ARTIFACTS = (".aux", ".log", ".out", ".toc")

ERROR_PATTERNS = [
    re.compile(r"^! (.+)$", re.MULTILINE),
    # -file-line-error style: "./resume.tex:12: Undefined control sequence."
    re.compile(r"^\S+\.tex:\d+: (.+)$", re.MULTILINE),
]
WARNING_PATTERNS = [
    re.compile(r"LaTeX Warning: (.+)"),
    re.compile(r"Package \w+ Warning: (.+)"),
    re.compile(r"(?:Over|Under)full \\hbox \((.+)\)"),
]


@dataclass
class CompilationResult:
    """
    Outcome of compile_latex().

    Attributes:
        success: True when a PDF was produced and the log shows no errors
        pdf_path: The produced PDF, if any
        stdout: Engine stdout of every pass, joined
        stderr: Engine stderr of every pass, joined
        errors: Messages parsed from the engine log (or describing why it never ran)
        warnings: Warning messages parsed from the engine log
        page_count: Pages in the produced PDF
    """

    success: bool
    pdf_path: Optional[Path] = None
    stdout: str = ""
    stderr: str = ""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    page_count: Optional[int] = None


def compiler_available(compiler: str = LATEX_COMPILER) -> bool:
    return shutil.which(compiler) is not None


def parse_latex_log(log_content: str) -> Tuple[List[str], List[str]]:
    """Extract (errors, warnings) from an engine .log file, duplicates removed."""
    errors: List[str] = []
    for pattern in ERROR_PATTERNS:
        for match in pattern.finditer(log_content):
            message = match.group(1).strip()
            if message not in errors:
                errors.append(message)

    warnings = [
        match.group(1).strip()
        for pattern in WARNING_PATTERNS
        for match in pattern.finditer(log_content)
    ]
    return errors, warnings


def _outputs(tex_file: Path, suffixes) -> List[Path]:
    return [tex_file.with_suffix(suffix) for suffix in suffixes]


def _run_passes(compiler: str, tex_file: Path, num_passes: int) -> Tuple[List[str], List[str]]:
    """Run the engine up to num_passes times, stopping at the first non-zero exit."""
    stdout, stderr = [], []
    for _ in range(num_passes):
        completed = subprocess.run(
            [compiler, "-interaction=nonstopmode", "-file-line-error", tex_file.name],
            cwd=tex_file.parent,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
        stdout.append(completed.stdout)
        stderr.append(completed.stderr)
        if completed.returncode != 0:
            break
    return stdout, stderr


def compile_latex(
    tex_file: Path,
    num_passes: int = 2,
    compiler: str = LATEX_COMPILER,
    keep_artifacts: bool = KEEP_LATEX_ARTIFACTS,
) -> CompilationResult:
    """
    Compile `tex_file` to a PDF beside it.

    Args:
        tex_file: Generated LaTeX document
        num_passes: Engine passes (two settle hyperref and page references)
        compiler: Engine executable (default: LATEX_COMPILER)
        keep_artifacts: Leave .aux/.log/.out files in place

    Returns:
        CompilationResult; success requires a PDF and an error-free log,
        regardless of the engine's exit status
    """
    if not tex_file.exists():
        return CompilationResult(success=False, errors=[f"TeX file not found: {tex_file}"])
    if not compiler_available(compiler):
        return CompilationResult(success=False, errors=[f"LaTeX compiler not found on PATH: {compiler}"])

    tex_file = tex_file.resolve()
    pdf_path = tex_file.with_suffix(".pdf")

    # A stale PDF must not pass for this run's output
    for stale in _outputs(tex_file, (".pdf",) + LATEX_ARTIFACTS):
        stale.unlink(missing_ok=True)

    stdout, stderr = _run_passes(compiler, tex_file, num_passes)

    errors: List[str] = []
    warnings: List[str] = []
    log_file = tex_file.with_suffix(".log")
    if log_file.exists():
        # Engine logs are not guaranteed to be valid UTF-8
        errors, warnings = parse_latex_log(log_file.read_text(encoding="latin-1"))

    if not keep_artifacts:
        for artifact in _outputs(tex_file, LATEX_ARTIFACTS):
            artifact.unlink(missing_ok=True)

    produced = pdf_path.exists()
    if not produced and not errors:
        errors.append("PDF file was not generated")

    return CompilationResult(
        success=produced and not errors,
        pdf_path=pdf_path if produced else None,
        stdout="\n".join(stdout),
        stderr="\n".join(stderr),
        errors=errors,
        warnings=warnings,
        page_count=page_count(pdf_path) if produced else None,
    )
