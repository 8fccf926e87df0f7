#!/usr/bin/env python3
"""
Command-line interface for editing resumes.

Acts as the user named by FOLIO_USER_ID against the database at FOLIO_DB_PATH.
Every successful change appends view invalidation events to the event log.

Commands:
    create    - Create an empty "Untitled Resume"
    list      - List your resumes, most recently updated first
    show      - Print a resume as markdown
    rename    - Change a resume's title
    delete    - Delete a resume and all its sections
    duplicate - Copy a resume under a "(Copy N)" title
    contact   - Set contact fields
    summary   - Set the summary paragraph
    add       - Append an experience, education, skill or project entry
    update    - Change fields of an entry
    remove    - Delete an entry
    items     - List the entries of one section with their ids
    history   - Show recent editor events
"""

import os
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv

from folio.contexts.editing import (
    COLLECTIONS,
    ActionResult,
    EnvironmentIdentity,
    EventLogInvalidator,
    ResumeService,
    ResumeStore,
)
from folio.contexts.editing.logger import setup_editing_logger
from folio.contexts.rendering import ResumeRenderer
from folio.utils.event_logging import get_recent_events
from folio.utils.timestamp import format_timestamp, now

load_dotenv()
FOLIO_DB_PATH = Path(os.getenv("FOLIO_DB_PATH", "outs/folio.db"))
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

TRUE_VALUES = {"1", "true", "yes", "y", "on"}

app = typer.Typer(
    add_completion=False,
    help="Edit resumes stored in the FOLIO database",
    invoke_without_command=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    log: bool = typer.Option(False, "--log", help="Write a session log under LOGS_PATH"),
):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()

    if log:
        log_file = setup_editing_logger(LOGS_PATH / f"editor_{now()}")
        typer.echo(f"Log file: {log_file}")


def _open_service(db_path: Path = FOLIO_DB_PATH) -> ResumeService:
    return ResumeService(
        identity=EnvironmentIdentity(),
        store=ResumeStore.create(db_path),
        invalidator=EventLogInvalidator(source="cli"),
    )


def _report(result: ActionResult, message: str) -> None:
    """Print the outcome of a mutation and exit non-zero on failure."""
    if result.success:
        typer.secho(f"✓ {message}", fg=typer.colors.GREEN)
        return
    typer.secho(f"✗ {result.error.value}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


def _parse_assignments(kind: str, assignments: List[str]) -> dict:
    """Turn ["company=Acme", "current=true"] into typed field values."""
    bool_fields = COLLECTIONS[kind].bool_fields if kind in COLLECTIONS else ()
    values = {}
    for assignment in assignments:
        if "=" not in assignment:
            raise typer.BadParameter(f"Expected FIELD=VALUE, got '{assignment}'")
        name, value = assignment.split("=", 1)
        name = name.strip().replace("-", "_")
        values[name] = value.strip().lower() in TRUE_VALUES if name in bool_fields else value
    return values


def _check_kind(kind: str) -> str:
    if kind not in COLLECTIONS:
        raise typer.BadParameter(f"Unknown section '{kind}'. Choose from: {', '.join(COLLECTIONS)}")
    return kind


@app.command("create")
def create_command():
    """Create an empty resume and print its id."""
    service = _open_service()
    result = service.create_resume()
    _report(result, f"Created resume {result.resume_id}")


@app.command("list")
def list_command(
    relative: bool = typer.Option(False, "--relative", "-r", help="Show relative update times"),
):
    """List your resumes, most recently updated first."""
    service = _open_service()
    resumes = service.list_resumes()

    if not resumes:
        typer.echo("No resumes found")
        return

    for listing in resumes:
        updated = format_timestamp(listing.updated_at, relative=relative)
        typer.echo(f"{listing.id}  {updated:<19}  {listing.title}")


@app.command("show")
def show_command(resume_id: str = typer.Argument(..., help="Resume id")):
    """Print a resume as markdown."""
    service = _open_service()
    aggregate = service.get_resume(resume_id)
    if aggregate is None:
        typer.secho("Resume not found", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.echo(ResumeRenderer().render(aggregate, fmt="markdown"))


@app.command("rename")
def rename_command(
    resume_id: str = typer.Argument(..., help="Resume id"),
    title: str = typer.Argument(..., help="New title"),
):
    """Change a resume's title."""
    title = title.strip()
    if not title:
        raise typer.BadParameter("Title cannot be empty")
    _report(_open_service().rename_resume(resume_id, title), f"Renamed to '{title}'")


@app.command("delete")
def delete_command(
    resume_id: str = typer.Argument(..., help="Resume id"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """Delete a resume and all its sections."""
    if not yes:
        typer.confirm(f"Delete resume {resume_id}?", abort=True)
    _report(_open_service().delete_resume(resume_id), f"Deleted {resume_id}")


@app.command("duplicate")
def duplicate_command(resume_id: str = typer.Argument(..., help="Resume id")):
    """Copy a resume and all its sections."""
    service = _open_service()
    result = service.duplicate_resume(resume_id)
    if result.success:
        copy = service.get_resume(result.resume_id)
        _report(result, f"Created '{copy.title}' ({result.resume_id})")
    else:
        _report(result, "")


@app.command("contact")
def contact_command(
    resume_id: str = typer.Argument(..., help="Resume id"),
    assignments: List[str] = typer.Argument(
        ..., help="FIELD=VALUE pairs (full_name, email, phone, location, linkedin, github, website)"
    ),
):
    """Set contact fields. Fields not mentioned keep their values."""
    fields = _parse_assignments("contact", assignments)
    try:
        result = _open_service().update_contact_info(resume_id, **fields)
    except ValueError as e:
        raise typer.BadParameter(str(e))
    _report(result, f"Updated contact info ({', '.join(fields)})")


@app.command("summary")
def summary_command(
    resume_id: str = typer.Argument(..., help="Resume id"),
    content: str = typer.Argument(..., help="Summary text"),
):
    """Set the summary paragraph."""
    _report(_open_service().update_summary(resume_id, content), "Updated summary")


@app.command("add")
def add_command(
    kind: str = typer.Argument(..., help="experience, education, skill or project"),
    resume_id: str = typer.Argument(..., help="Resume id"),
    assignments: Optional[List[str]] = typer.Argument(None, help="Initial FIELD=VALUE pairs"),
):
    """
    Append an entry to a section.

    Examples:\n

        $ manage_resumes.py add skill <id> name=Python

        $ manage_resumes.py add experience <id> company=Acme position=Engineer current=true
    """
    kind = _check_kind(kind)
    fields = _parse_assignments(kind, assignments or [])
    try:
        result = _open_service().add_item(kind, resume_id, **fields)
    except ValueError as e:
        raise typer.BadParameter(str(e))
    _report(result, f"Added {kind}")


@app.command("update")
def update_command(
    kind: str = typer.Argument(..., help="experience, education, skill or project"),
    item_id: str = typer.Argument(..., help="Entry id"),
    resume_id: str = typer.Argument(..., help="Resume id"),
    assignments: List[str] = typer.Argument(..., help="FIELD=VALUE pairs"),
):
    """Change fields of an entry. Fields not mentioned keep their values."""
    kind = _check_kind(kind)
    fields = _parse_assignments(kind, assignments)
    try:
        result = _open_service().update_item(kind, item_id, resume_id, **fields)
    except ValueError as e:
        raise typer.BadParameter(str(e))
    _report(result, f"Updated {kind} {item_id}")


@app.command("remove")
def remove_command(
    kind: str = typer.Argument(..., help="experience, education, skill or project"),
    item_id: str = typer.Argument(..., help="Entry id"),
    resume_id: str = typer.Argument(..., help="Resume id"),
):
    """Delete an entry. Remaining entries keep their order."""
    kind = _check_kind(kind)
    _report(_open_service().delete_item(kind, item_id, resume_id), f"Removed {kind} {item_id}")


@app.command("items")
def items_command(
    kind: str = typer.Argument(..., help="experience, education, skill or project"),
    resume_id: str = typer.Argument(..., help="Resume id"),
):
    """List the entries of one section with their ids."""
    kind = _check_kind(kind)
    aggregate = _open_service().get_resume(resume_id)
    if aggregate is None:
        typer.secho("Resume not found", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    for item in aggregate.items(kind):
        label = getattr(item, "name", None) or getattr(item, "position", None) or getattr(item, "degree", "")
        typer.echo(f"{item.sort_order:>3}  {item.id}  {label}")


@app.command("history")
def history_command(
    n: int = typer.Option(10, "--number", "-n", help="Number of events"),
    resume_id: Optional[str] = typer.Option(None, "--resume", help="Only events for this resume"),
):
    """Show recent editor events."""
    events = get_recent_events(n, resume_id=resume_id)
    if not events:
        typer.echo("No events logged")
        return

    for event in events:
        when = format_timestamp(event["timestamp"], relative=True)
        detail = event.get("view") or event.get("pdf_path") or ""
        typer.echo(f"{when:>10}  {event['event_type']:<18} {event['source']:<10} {detail}")


if __name__ == "__main__":
    app()
