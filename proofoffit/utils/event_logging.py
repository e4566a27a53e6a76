"""
Tailoring event log (Tier 2 logging).

Appends cross-context events (e.g., a document being persisted) to a JSON
Lines file, one JSON object per line, so they can be streamed and filtered by
event_type, candidate_id or job_id.

For detailed within-context logging (Tier 1), use proofoffit.utils.logger.

Usage:
    from proofoffit.utils.event_logging import log_pipeline_event

    log_pipeline_event(
        event_type="document_saved",
        document_id="tailored-3f2a...",
        source="storage",
        candidate_id="profile-1",
        job_id="job-1",
    )
"""

import json
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from proofoffit.utils.timestamp import now_exact

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
PIPELINE_EVENTS_FILE = Path(
    os.getenv("PIPELINE_EVENTS_FILE", str(LOGS_PATH / "tailoring_events.log"))
)


def log_pipeline_event(event_type: str, document_id: str, source: str, **extra_fields) -> None:
    """
    Append one event to the tailoring event log.

    Args:
        event_type: Type of event (e.g., "document_saved", "tailoring_failed")
        document_id: Tailored document identifier (may be None for failures
                     that happen before a document exists)
        source: Event source (e.g., "storage", "tailoring", "cli")
        **extra_fields: Additional event-specific fields (candidate_id, job_id, ...)
    """
    PIPELINE_EVENTS_FILE.parent.mkdir(parents=True, exist_ok=True)

    event = {
        "timestamp": now_exact(),
        "event_type": event_type,
        "document_id": document_id,
        "source": source,
        **extra_fields,
    }

    with open(PIPELINE_EVENTS_FILE, "a", encoding="utf-8") as f:
        f.write(json.dumps(event) + "\n")


def read_events() -> list[dict]:
    """Read every well-formed event from the log, oldest first."""
    if not PIPELINE_EVENTS_FILE.exists():
        return []

    events = []
    with open(PIPELINE_EVENTS_FILE, "r", encoding="utf-8") as f:
        for line in f:
            try:
                events.append(json.loads(line.strip()))
            except json.JSONDecodeError:
                # Skip malformed lines
                continue
    return events


def get_recent_events(
    n: int = 10,
    candidate_id: Optional[str] = None,
    job_id: Optional[str] = None,
    event_type: Optional[str] = None,
) -> list[dict]:
    """
    Get the last n events, optionally filtered.

    Args:
        n: Number of recent events to return
        candidate_id: Only events for this candidate
        job_id: Only events for this job
        event_type: Only events of this type

    Returns:
        List of event dicts (most recent last)

    Example:
        # Last 5 documents saved for one candidate
        events = get_recent_events(5, candidate_id="profile-1", event_type="document_saved")
    """
    events = read_events()

    if candidate_id:
        events = [e for e in events if e.get("candidate_id") == candidate_id]
    if job_id:
        events = [e for e in events if e.get("job_id") == job_id]
    if event_type:
        events = [e for e in events if e.get("event_type") == event_type]

    return events[-n:] if len(events) > n else events
