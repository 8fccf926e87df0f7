"""Timestamps for stored records, log directories and CLI display."""

from datetime import datetime

# (unit label, seconds per unit), largest first
RELATIVE_UNITS = [("d", 86400), ("h", 3600), ("m", 60), ("s", 1)]


def now() -> str:
    """Compact local stamp for directory names, e.g. 20251114_123456."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def now_exact() -> str:
    """ISO 8601 local time with microseconds; sorts lexically in time order."""
    return datetime.now().isoformat()


def format_timestamp(iso_timestamp: str, relative: bool = False) -> str:
    """
    Display an ISO 8601 timestamp.

    Examples:
        format_timestamp("2025-11-13T18:45:40.572549")                 # "2025-11-13 18:45:40"
        format_timestamp("2025-11-13T18:45:40.572549", relative=True)  # "2h ago"

    Unparseable input is returned unchanged.
    """
    try:
        moment = datetime.fromisoformat(iso_timestamp)
    except (ValueError, TypeError):
        return iso_timestamp

    if relative:
        return _relative_to_now(moment)
    return moment.strftime("%Y-%m-%d %H:%M:%S")


def _relative_to_now(moment: datetime) -> str:
    seconds = int((datetime.now() - moment).total_seconds())
    suffix = "ago" if seconds >= 0 else "from now"
    seconds = abs(seconds)

    for label, size in RELATIVE_UNITS:
        if seconds >= size or size == 1:
            return f"{seconds // size}{label} {suffix}"
