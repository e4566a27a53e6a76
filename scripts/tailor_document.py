#!/usr/bin/env python3
"""
Tailored Document CLI

Generate a resume, cover letter or outreach email for one candidate against
one job, using the evidence stored in the tailoring database. The document is
persisted and then printed (or written to --output).

Usage:
    python scripts/tailor_document.py job-1 profile-1
    python scripts/tailor_document.py job-1 profile-1 --type cover_letter --show-citations
    python scripts/tailor_document.py job-1 profile-1 --type email -o outs/email.md
"""

import os
from pathlib import Path
from typing import Annotated, List, Optional

import typer
from dotenv import load_dotenv

from proofoffit.contexts.storage.database import TailoringDatabase
from proofoffit.contexts.tailoring.document_data_structure import TailorRequest
from proofoffit.contexts.tailoring.engine import TailorEngine
from proofoffit.contexts.tailoring.exceptions import TailoringError
from proofoffit.contexts.tailoring.logger import setup_tailoring_logger, tailoring_session_dir
from proofoffit.contexts.templating.document_types import DocumentType, TailorPreferences
from proofoffit.contexts.templating.exceptions import UnsupportedDocumentTypeError
from proofoffit.utils.config import load_tailoring_config
from proofoffit.utils.event_logging import LOGS_PATH, log_pipeline_event

load_dotenv()
DEFAULT_DATABASE = Path(os.getenv("PROOFOFFIT_DATABASE", "outs/proofoffit.db"))

app = typer.Typer(
    help="Generate a tailored document from stored job and candidate evidence",
    add_completion=False,
)


@app.command()
def main(
    job_id: Annotated[str, typer.Argument(help="Job identifier")],
    candidate_id: Annotated[str, typer.Argument(help="Candidate profile identifier")],
    document_type: Annotated[
        str,
        typer.Option(
            "--type",
            "-t",
            help=f"Document type ({', '.join(t.value for t in DocumentType)})",
        ),
    ] = DocumentType.RESUME.value,
    tone: Annotated[
        Optional[str],
        typer.Option("--tone", help="professional, casual or enthusiastic"),
    ] = None,
    length: Annotated[
        Optional[str],
        typer.Option("--length", help="short, medium or long"),
    ] = None,
    focus: Annotated[
        Optional[List[str]],
        typer.Option("--focus", "-f", help="Focus area (repeatable)"),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write content here instead of stdout", dir_okay=False),
    ] = None,
    show_citations: Annotated[
        bool,
        typer.Option("--show-citations", help="List the evidence behind the document"),
    ] = False,
    parallel_fetch: Annotated[
        bool,
        typer.Option("--parallel-fetch", help="Read the job and profile concurrently"),
    ] = False,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Tailoring config YAML override", exists=True, dir_okay=False),
    ] = None,
    db: Annotated[
        Path,
        typer.Option("--db", help="Tailoring database path (default: $PROOFOFFIT_DATABASE)"),
    ] = DEFAULT_DATABASE,
):
    """
    Tailor one document and persist it.

    Examples:\n

        $ tailor_document.py job-1 profile-1                     # Resume to stdout

        $ tailor_document.py job-1 profile-1 -t cover_letter     # Cover letter

        $ tailor_document.py job-1 profile-1 --show-citations    # With evidence list
    """
    try:
        preferences = TailorPreferences.from_dict({"tone": tone, "length": length, "focus": focus})
    except ValueError as e:
        raise typer.BadParameter(str(e))

    try:
        tailoring_config = load_tailoring_config(config)
    except (FileNotFoundError, ValueError) as e:
        typer.secho(f"Invalid config: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    try:
        database = TailoringDatabase(db)
    except FileNotFoundError as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    log_file = setup_tailoring_logger(
        tailoring_session_dir(LOGS_PATH),
        document_type=document_type,
        job_id=job_id,
        candidate_id=candidate_id,
    )

    request = TailorRequest(
        job_id=job_id,
        candidate_id=candidate_id,
        document_type=document_type,
        preferences=preferences,
    )

    with database:
        engine = TailorEngine.from_database(database, config=tailoring_config, parallel_fetch=parallel_fetch)
        try:
            document = engine.tailor_document(request)
        except (TailoringError, UnsupportedDocumentTypeError) as e:
            log_pipeline_event(
                event_type="tailoring_failed",
                document_id=None,
                source="cli",
                candidate_id=candidate_id,
                job_id=job_id,
                document_type=document_type,
                error=type(e).__name__,
            )
            typer.secho(f"✗ {e}", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(document.content + "\n", encoding="utf-8")
        typer.secho(f"✓ {document.type.value} written to {output}", fg=typer.colors.GREEN)
    else:
        typer.echo(document.content)

    if show_citations:
        typer.echo("\n" + "=" * 80)
        typer.secho(f"Citations ({len(document.citations)})", bold=True)
        for citation in document.citations:
            link = f" <{citation.link}>" if citation.link else ""
            typer.echo(f"  [{citation.criterion} / {citation.evidence_type}] {citation.text}{link}")

    typer.echo(f"\nDocument id: {document.id}", err=True)
    typer.echo(f"Log: {log_file}", err=True)


if __name__ == "__main__":
    app()
