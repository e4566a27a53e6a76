#!/usr/bin/env python3
"""
Command-line interface for managing the tailoring database.

Commands:
    init            - Create the database schema
    add-job         - Store a job from a .yaml/.json record or .md posting
    add-profile     - Store a candidate profile with its bullets
    list-documents  - List tailored documents (optionally filter by candidate/job)
    show-document   - Print one tailored document and its citations
    recent-events   - Show recent entries from the tailoring event log
"""

import json
import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

from proofoffit.contexts.intake.loaders import load_job_file, load_profile_file
from proofoffit.contexts.storage.database import TailoringDatabase
from proofoffit.utils.event_logging import get_recent_events
from proofoffit.utils.report_formatter import Column, TableFormatter
from proofoffit.utils.timestamp import format_timestamp

load_dotenv()
DEFAULT_DATABASE = Path(os.getenv("PROOFOFFIT_DATABASE", "outs/proofoffit.db"))

app = typer.Typer(
    add_completion=False,
    help="Manage the tailoring database",
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _open_database(db: Path) -> TailoringDatabase:
    try:
        return TailoringDatabase(db)
    except FileNotFoundError as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


@app.command("init")
def init_command(
    db: Path = typer.Option(DEFAULT_DATABASE, "--db", help="Database path"),
    overwrite: bool = typer.Option(False, "--overwrite", help="Delete an existing database first"),
):
    """
    Create the tailoring database.

    Examples:\n

        $ manage_store.py init

        $ manage_store.py init --db outs/test.db --overwrite
    """
    if db.exists() and not overwrite:
        typer.secho(f"Database already exists: {db} (schema left as is)", fg=typer.colors.YELLOW)

    TailoringDatabase.create(db, overwrite=overwrite).close()
    typer.secho(f"✓ Database ready: {db}", fg=typer.colors.GREEN)


@app.command("add-job")
def add_job_command(
    job_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Job .yaml/.json/.md file"),
    db: Path = typer.Option(DEFAULT_DATABASE, "--db", help="Database path"),
):
    """Store (or replace) a job."""
    try:
        job = load_job_file(job_file)
    except ValueError as e:
        typer.secho(f"✗ {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    with _open_database(db) as database:
        database.add_job(job)

    typer.secho(f"✓ {job.id}: {job.title} @ {job.organization}", fg=typer.colors.GREEN)
    typer.echo(f"  Must have: {len(job.requirements.must_have)}")
    typer.echo(f"  Preferred: {len(job.requirements.preferred)}")


@app.command("add-profile")
def add_profile_command(
    profile_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Profile .yaml/.json file"),
    db: Path = typer.Option(DEFAULT_DATABASE, "--db", help="Database path"),
):
    """Store (or replace) a candidate profile and its bullets."""
    try:
        profile = load_profile_file(profile_file)
    except ValueError as e:
        typer.secho(f"✗ {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    with _open_database(db) as database:
        database.add_candidate_profile(profile)

    typer.secho(f"✓ {profile.id}: {len(profile.bullets)} bullets", fg=typer.colors.GREEN)


@app.command("list-documents")
def list_documents_command(
    candidate: Optional[str] = typer.Option(None, "--candidate", "-c", help="Filter by candidate id"),
    job: Optional[str] = typer.Option(None, "--job", "-j", help="Filter by job id"),
    db: Path = typer.Option(DEFAULT_DATABASE, "--db", help="Database path"),
):
    """List tailored documents, oldest first."""
    with _open_database(db) as database:
        documents = database.list_tailored_documents(candidate_id=candidate, job_id=job)

    if not documents:
        typer.secho("No documents found", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(code=1)

    columns = [
        Column("Document", 40),
        Column("Type", 12),
        Column("Candidate", 16),
        Column("Job", 16),
        Column("Cites", 5, align=">"),
        Column("Created", 19),
    ]
    table = TableFormatter(columns).add_section_header("Tailored documents").add_table_header()
    for document in documents:
        table.add_row(
            [
                document.id,
                document.type.value,
                document.metadata.candidate_id,
                document.metadata.job_id,
                len(document.citations),
                format_timestamp(document.metadata.created_at),
            ]
        )
    table.add_summary(f"Total: {len(documents)}")
    typer.echo(table.render())


@app.command("show-document")
def show_document_command(
    document_id: str = typer.Argument(..., help="Tailored document id"),
    db: Path = typer.Option(DEFAULT_DATABASE, "--db", help="Database path"),
):
    """Print a stored document and its citations."""
    with _open_database(db) as database:
        document = database.get_tailored_document(document_id)

    if document is None:
        typer.secho(f"Document not found: {document_id}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    metadata = document.metadata
    typer.secho(f"{document.id} ({document.type.value})", bold=True)
    typer.echo(f"  Candidate: {metadata.candidate_id}")
    typer.echo(f"  Job:       {metadata.job_id}")
    typer.echo(f"  Created:   {format_timestamp(metadata.created_at)}")
    typer.echo(f"  Version:   {metadata.version}")
    typer.echo("=" * 80)
    typer.echo(document.content)
    typer.echo("=" * 80)
    for citation in document.citations:
        typer.echo(f"  {citation.id}: [{citation.criterion}] {citation.text}")


@app.command("recent-events")
def recent_events_command(
    n: int = typer.Option(10, "--num", "-n", help="Number of recent events to show"),
    candidate: Optional[str] = typer.Option(None, "--candidate", "-c", help="Filter by candidate id"),
    job: Optional[str] = typer.Option(None, "--job", "-j", help="Filter by job id"),
    event_type: Optional[str] = typer.Option(None, "--event-type", "-e", help="Filter by event type"),
    compact: bool = typer.Option(False, "--compact", help="Print one raw event per line"),
):
    """
    Show the last n tailoring events.

    Examples:\n

        $ manage_store.py recent-events -n 20

        $ manage_store.py recent-events -e document_saved -c profile-1
    """
    events = get_recent_events(n=n, candidate_id=candidate, job_id=job, event_type=event_type)

    if not events:
        typer.secho("No events found", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(code=1)

    for event in events:
        if compact:
            typer.echo(json.dumps(event))
            continue

        when = format_timestamp(event.get("timestamp"), relative=True)
        typer.secho(f"{when:>10}  {event.get('event_type')}", bold=True)
        for key, value in event.items():
            if key in ("timestamp", "event_type"):
                continue
            typer.echo(f"            {key}: {value}")


if __name__ == "__main__":
    app()
