"""
View invalidation signals.

After a successful mutation the service names the views that now show stale
data. How the signal reaches a presentation layer is up to the invalidator.
"""

from pathlib import Path
from typing import List, Protocol

from folio.utils.event_logging import log_event

RESUME_LIST_VIEW = "/dashboard"


def editor_view(resume_id: str) -> str:
    """Name of the editor view for one resume."""
    return f"/editor/{resume_id}"


class ViewInvalidator(Protocol):
    def invalidate(self, view: str) -> None:
        ...


class NullInvalidator:
    """Discards every signal, for embedders with no cached views."""

    def invalidate(self, view: str) -> None:
        pass


class RecordingInvalidator:
    """Keeps invalidated view names in memory, in signal order."""

    def __init__(self):
        self.views: List[str] = []

    def invalidate(self, view: str) -> None:
        self.views.append(view)

    def clear(self) -> None:
        self.views.clear()


class EventLogInvalidator:
    """Appends a `view_invalidated` event per signal to the JSON Lines event log."""

    def __init__(self, events_file: Path = None, source: str = "editing"):
        self.events_file = events_file
        self.source = source

    def invalidate(self, view: str) -> None:
        prefix = editor_view("")
        resume_id = view[len(prefix):] if view.startswith(prefix) else None
        log_event(
            event_type="view_invalidated",
            resume_id=resume_id,
            source=self.source,
            events_file=self.events_file,
            view=view,
        )
