#!/usr/bin/env python3
"""
Export a resume as markdown, HTML, LaTeX or PDF.

Usage:
    python scripts/export_resume.py <resume_id> --format pdf
    python scripts/export_resume.py <resume_id> --format html --output outs/previews
"""

import os
from pathlib import Path

import typer
from dotenv import load_dotenv

from folio.contexts.editing import EnvironmentIdentity, ResumeService, ResumeStore
from folio.contexts.rendering import ResumeRenderer
from folio.contexts.rendering.logger import setup_rendering_logger
from folio.utils.timestamp import now

load_dotenv()
FOLIO_DB_PATH = Path(os.getenv("FOLIO_DB_PATH", "outs/folio.db"))
RESULTS_PATH = Path(os.getenv("RESULTS_PATH", "outs/results"))
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

FORMATS = ("markdown", "html", "tex", "pdf")

app = typer.Typer(add_completion=False)


@app.command()
def main(
    resume_id: str = typer.Argument(..., help="Resume id"),
    fmt: str = typer.Option("pdf", "--format", "-f", help=f"One of: {', '.join(FORMATS)}"),
    output: Path = typer.Option(
        None, "--output", "-o", help="Output directory (default: RESULTS_PATH/YYYYMMDD)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show compiler output"),
):
    """Export one of your resumes."""
    if fmt not in FORMATS:
        raise typer.BadParameter(f"Unknown format '{fmt}'. Choose from: {', '.join(FORMATS)}")

    output_dir = output or RESULTS_PATH / now().split("_")[0]

    try:
        store = ResumeStore(FOLIO_DB_PATH)
    except FileNotFoundError as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    service = ResumeService(identity=EnvironmentIdentity(), store=store)
    aggregate = service.get_resume(resume_id)
    if aggregate is None:
        typer.secho("Resume not found", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    renderer = ResumeRenderer()

    if fmt != "pdf":
        path = renderer.write(aggregate, output_dir, fmt=fmt)
        typer.secho(f"✓ Wrote {path}", fg=typer.colors.GREEN)
        return

    log_dir = LOGS_PATH / f"export_{now()}"
    log_file = setup_rendering_logger(log_dir)
    typer.echo(f"Log file: {log_file}")

    result = renderer.export_pdf(aggregate, output_dir, verbose=verbose)
    if not result.success:
        for error in result.errors[:5]:
            typer.secho(f"  {error}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho(f"✓ {result.pdf_path} ({result.page_count} page(s))", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
