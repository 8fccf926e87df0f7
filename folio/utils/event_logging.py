"""
Event logging utilities for FOLIO.

Appends editor events (view invalidations, exports) to a JSON Lines log so
that other processes (a preview server, the CLI `history` command) can follow
what changed without sharing in-process state.

Usage:
    from folio.utils.event_logging import log_event, get_recent_events

    log_event(
        event_type="view_invalidated",
        resume_id="3f2c...",
        source="editing",
        view="/editor/3f2c..."
    )
"""

import json
import os
from collections import deque
from pathlib import Path
from typing import Iterator, List, Optional

from dotenv import load_dotenv

from folio.utils.timestamp import now_exact

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
EVENTS_FILE = Path(os.getenv("EVENTS_FILE", str(LOGS_PATH / "folio_events.log")))


def log_event(
    event_type: str,
    resume_id: Optional[str],
    source: str,
    events_file: Path = None,
    **extra_fields,
) -> dict:
    """
    Append an event to the event log.

    Events are written in JSON Lines format (one JSON object per line), which
    keeps the log streamable and easy to filter by event_type or resume_id.

    Args:
        event_type: Type of event (e.g., "view_invalidated", "export_completed")
        resume_id: Resume the event concerns (None for list-level events)
        source: Event source (e.g., "editing", "rendering", "cli")
        events_file: Log file to append to (defaults to EVENTS_FILE)
        **extra_fields: Additional event-specific fields

    Returns:
        The event dict that was written
    """
    events_file = events_file or EVENTS_FILE
    events_file.parent.mkdir(parents=True, exist_ok=True)

    event = {
        "timestamp": now_exact(),
        "event_type": event_type,
        "resume_id": resume_id,
        "source": source,
        **extra_fields,
    }

    with open(events_file, "a", encoding="utf-8") as f:
        f.write(json.dumps(event) + "\n")

    return event


def _read_events(events_file: Path) -> Iterator[dict]:
    """Yield events in file order. Lines that are not valid JSON (a torn write) are skipped."""
    with open(events_file, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            try:
                yield json.loads(line)
            except json.JSONDecodeError:
                continue


def get_recent_events(
    n: int = 10,
    resume_id: Optional[str] = None,
    event_type: Optional[str] = None,
    events_file: Path = None,
) -> List[dict]:
    """
    The last `n` events matching every given filter, oldest first.

    Returns an empty list when nothing has been logged yet.
    """
    events_file = events_file or EVENTS_FILE
    if not events_file.exists():
        return []

    matching = (
        event
        for event in _read_events(events_file)
        if (resume_id is None or event.get("resume_id") == resume_id)
        and (event_type is None or event.get("event_type") == event_type)
    )
    return list(deque(matching, maxlen=n))
