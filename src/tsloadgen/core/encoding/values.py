"""Shared value formatting for the text bulk formats."""

from datetime import datetime, timezone

from tsloadgen.core.models import FieldValue

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def unix_nanos(timestamp: datetime | None) -> int:
    """Return timestamp as integer nanoseconds since the Unix epoch.

    Raises:
        ValueError: If the point has no timestamp.
    """
    if timestamp is None:
        raise ValueError("point has no timestamp")
    delta = timestamp - _EPOCH
    return (delta.days * 86_400 + delta.seconds) * 1_000_000_000 + (
        delta.microseconds * 1_000
    )


def format_value(value: FieldValue) -> str:
    """Format a field value the way the CSV-like formats expect it.

    Floats use the shortest representation that round-trips, ints are plain
    decimal and bools are lowercase.
    """
    # bool is a subclass of int
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return repr(value)
    return str(value)
