"""Timestamp formatting shared by the summary and the intake."""

from datetime import datetime, timezone


def utc_stamp(now=None):
    """ISO-8601 UTC with milliseconds and a Z suffix.

    Aware datetimes are converted to UTC first; naive ones are taken as
    local time, as datetime.astimezone does.
    """
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
