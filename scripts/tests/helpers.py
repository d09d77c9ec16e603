"""Shared test factories for survey tests.

Provides factory functions for building answer rows, CSV exports and
intake payloads with sensible defaults and easy overrides.
"""

import sys
from datetime import datetime, timezone
from pathlib import Path

# Add scripts/ to path so we can import survey
SCRIPTS_DIR = Path(__file__).resolve().parent.parent
if str(SCRIPTS_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPTS_DIR))

HEADER = ["timestamp", "language", "player_name", "Q2_time", "Q3_time", "Q4_day"]

FIXED_NOW = datetime(2025, 12, 1, 9, 30, tzinfo=timezone.utc)


# ─── Row Factory ─────────────────────────────────────────────────

def make_row(**overrides):
    """Build a parsed answer row. Override any field via kwargs."""
    row = {
        "timestamp": "2025-01-15T14:30:00.000Z",
        "language": "en",
        "player_name": "Alice",
        "Q2_time": "Morning",
        "Q3_time": "Evening",
        "Q4_day": "Saturday",
    }
    row.update(overrides)
    return row


def make_rows(n, player_prefix="P", **overrides):
    """Generate N rows for N distinct players with increasing timestamps."""
    rows = []
    for i in range(n):
        rows.append(make_row(
            player_name=f"{player_prefix}{i}",
            timestamp=f"2025-01-{(i % 28) + 1:02d}T10:00:00.000Z",
            **overrides,
        ))
    return rows


# ─── CSV Factory ─────────────────────────────────────────────────

def _quote(value):
    if any(c in value for c in ',"'):
        return '"' + value.replace('"', '""') + '"'
    return value


def make_csv_text(rows, header=None, newline="\n"):
    """Render rows as CSV text with a header line."""
    header = header or HEADER
    lines = [",".join(header)]
    for r in rows:
        lines.append(",".join(_quote(r.get(name, "")) for name in header))
    return newline.join(lines) + newline


def write_answers(tmp_path, text):
    """Write an answers export under tmp_path and return its path."""
    path = tmp_path / "data" / "answers.csv"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


# ─── Intake Payload Factory ──────────────────────────────────────

def make_payload(**overrides):
    """Build a valid /api/submit body. Override any field via kwargs."""
    payload = {
        "language": "ja",
        "player_name": "Alice",
        "Q2_time": "Morning",
        "Q3_time": "Evening",
        "Q4_day": "Saturday",
    }
    payload.update(overrides)
    return payload
