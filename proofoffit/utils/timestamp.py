"""Timestamp helpers for event records, session directories and CLI listings."""

from datetime import datetime
from typing import Optional

SESSION_STAMP_FORMAT = "%Y%m%d_%H%M%S"
DISPLAY_FORMAT = "%Y-%m-%d %H:%M:%S"


def now_exact() -> str:
    """Current local time as an ISO 8601 string with microseconds."""
    return datetime.now().isoformat()


def session_stamp(moment: datetime = None) -> str:
    """Compact sortable stamp for session directory names (e.g., 20261018_094540)."""
    return (moment or datetime.now()).strftime(SESSION_STAMP_FORMAT)


def parse_timestamp(value) -> Optional[datetime]:
    """Return a datetime for a datetime or ISO 8601 string, None if it can't be read."""
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return None


def format_timestamp(timestamp, relative: bool = False) -> str:
    """
    Format a document or event timestamp for display.

    Args:
        timestamp: datetime (e.g., DocumentMetadata.created_at) or ISO 8601
                   string (e.g., an event log "timestamp" field)
        relative: Show compact relative time ("2h ago") instead of
                  "2026-10-18 09:45:40"

    Returns:
        Human-readable timestamp; unreadable input comes back as str(input)
    """
    dt = parse_timestamp(timestamp)
    if dt is None:
        return str(timestamp)
    return _format_relative_time(dt) if relative else dt.strftime(DISPLAY_FORMAT)


def _format_relative_time(dt: datetime, reference: datetime = None) -> str:
    """Compact relative time: "just now", "30s ago", "15m ago", "2h ago", "5d ago", "3w ago"."""
    delta = (reference or datetime.now()) - dt
    suffix = "ago" if delta.total_seconds() >= 0 else "from now"
    seconds = abs(int(delta.total_seconds()))

    if seconds < 5:
        return "just now"

    for unit_seconds, unit in ((604800, "w"), (86400, "d"), (3600, "h"), (60, "m")):
        # Weeks only once a span reaches two of them
        threshold = unit_seconds * 2 if unit == "w" else unit_seconds
        if seconds >= threshold:
            return f"{seconds // unit_seconds}{unit} {suffix}"
    return f"{seconds}s {suffix}"
