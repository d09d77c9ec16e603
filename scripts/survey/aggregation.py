"""Aggregation functions — turn parsed answer rows into the summary.

All functions take a list of row dicts and return new data.
No I/O, no side effects.
"""

from survey.constants import COUNT_FIELDS
from survey.timestamps import utc_stamp


def sort_newest_first(rows):
    """Order rows by timestamp, newest first.

    Plain string comparison: correct for same-width ISO-8601 UTC stamps,
    not calendar-aware. Empty timestamps sort last. Stable, so rows with
    equal timestamps keep file order.
    """
    return sorted(rows, key=lambda r: r.get("timestamp") or "", reverse=True)


def latest_by_player(rows):
    """Keep the newest row per player_name, newest first.

    Rows with a blank player_name are skipped.
    """
    latest = {}
    for r in sort_newest_first(rows):
        name = (r.get("player_name") or "").strip()
        if not name:
            continue
        if name not in latest:
            latest[name] = r
    return list(latest.values())


def count_by(rows, key):
    """Count non-empty (trimmed) values of key."""
    counts = {}
    for r in rows:
        value = (r.get(key) or "").strip()
        if not value:
            continue
        counts[value] = counts.get(value, 0) + 1
    return counts


def aggregate_counts(rows, fields=None):
    """Answer counts for each tabulated field."""
    fields = COUNT_FIELDS if fields is None else fields
    return {field: count_by(rows, field) for field in fields}


def build_summary(rows, now=None):
    """Build the summary document from all parsed rows.

    total_rows counts every row; everything else is computed over the
    latest row per player.
    """
    latest = latest_by_player(rows)

    return {
        "generated_at": utc_stamp(now),
        "total_rows": len(rows),
        "unique_players": len(latest),
        "latest_by_player": latest,
        "counts": aggregate_counts(latest),
    }
