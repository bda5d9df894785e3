"""UTC timestamp for the marker file."""

from datetime import datetime, timezone


def now_iso() -> str:
    """Current UTC time as ISO-8601 with milliseconds and a Z suffix, e.g. 2025-06-01T12:00:00.000Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
